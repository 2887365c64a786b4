"""Endpoints de push do Pub/Sub (entrada do relay de mídia)."""
