"""Stores em memória para desenvolvimento e testes.

Módulos disponíveis:
    - memory_stores: MemoryMediaStore e MemoryEventPublisher
"""

from __future__ import annotations

from app.infra.stores.memory_stores import (
    MemoryEventPublisher,
    MemoryMediaStore,
    StoredObject,
)

__all__ = [
    "MemoryEventPublisher",
    "MemoryMediaStore",
    "StoredObject",
]
