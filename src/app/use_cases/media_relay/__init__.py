"""Use cases do relay de mídia WhatsApp."""

from .intake_dispatcher import IntakeDispatcher, serialize_document
from .normalize_meta import MetaOfficialNormalizer
from .normalize_whapi import WhapiNormalizer
from .process_batch import ProcessBatchUseCase
from .resolve_media import MediaResolver

__all__ = [
    "IntakeDispatcher",
    "MediaResolver",
    "MetaOfficialNormalizer",
    "ProcessBatchUseCase",
    "WhapiNormalizer",
    "serialize_document",
]
