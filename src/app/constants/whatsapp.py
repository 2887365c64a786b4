"""Enums e constantes de domínio para eventos WhatsApp (Whapi e Meta)."""

from __future__ import annotations

from enum import StrEnum


class ProviderKind(StrEnum):
    """Formato do webhook detectado a partir da estrutura do JSON."""

    WHAPI = "whapi"
    META_OFFICIAL = "meta_official"
    UNKNOWN = "unknown"


class MediaKind(StrEnum):
    """Tipos de mensagem que carregam mídia a ser persistida."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    VOICE = "voice"
    DOCUMENT = "document"


MEDIA_KINDS: frozenset[str] = frozenset(kind.value for kind in MediaKind)

# Extensão decidida apenas pelo tipo; URL e conteúdo não são inspecionados
MEDIA_EXTENSIONS: dict[str, str] = {
    MediaKind.IMAGE: ".jpg",
    MediaKind.VIDEO: ".mp4",
    MediaKind.AUDIO: ".ogg",
    MediaKind.VOICE: ".ogg",
    MediaKind.DOCUMENT: ".pdf",
}
FALLBACK_EXTENSION = ".bin"

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Campo reescrito com o locator estável (difere por provedor)
WHAPI_LOCATOR_FIELD = "link"
META_LOCATOR_FIELD = "url"
