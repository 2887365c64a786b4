"""Extractors WhatsApp: localizam a mídia em payloads Whapi e Meta.

Tipos de mídia suportados: image, video, audio, voice, document.
"""

from .meta_extractor import extract_meta_media, get_business_account_id
from .whapi_extractor import extract_whapi_media

__all__ = [
    "extract_meta_media",
    "extract_whapi_media",
    "get_business_account_id",
]
