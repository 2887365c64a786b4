"""App: orquestração, casos de uso e infraestrutura do relay de mídia.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: dispatcher, normalizers por provedor, handler de lote
- infra/: implementações concretas de IO (HTTP, GCS, Pub/Sub)
- protocols/: contratos/interfaces e modelos
- domain/: regras puras (chave do objeto, extensão)
- observability/: correlation_id e métricas via logs
- constants/: constantes da aplicação

Padrão: app executa; api adapta; utils apoia.
"""
