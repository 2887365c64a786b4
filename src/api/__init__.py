"""API: camada de borda.

Subpastas:
- normalizers/: detecção de formato e extração de mídia (sem IO)
- routes/: endpoints HTTP (push do Pub/Sub, health)

NÃO PODE conter: IO de storage/fila, orquestração de use cases.
"""
