"""Normalizers: detecção de formato e extração estrutural de payloads.

Estrutura:
- detection.py: classifica o JSON em Whapi, Meta ou desconhecido
- json_document.py: substituição pontual sem mutar o original
- whatsapp/: extractors de mídia por provedor

Nenhum IO aqui; download/upload ficam em app.infra.
"""

from .detection import detect_provider, get_channel_id
from .json_document import replace_at
from .whatsapp import extract_meta_media, extract_whapi_media, get_business_account_id

__all__ = [
    "detect_provider",
    "extract_meta_media",
    "extract_whapi_media",
    "get_business_account_id",
    "get_channel_id",
    "replace_at",
]
