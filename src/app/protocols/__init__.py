"""Protocolos e contratos do core da aplicação."""

from .credential_broker import CredentialBrokerProtocol
from .event_publisher import EventPublisherProtocol
from .media_fetcher import MediaFetcherProtocol
from .media_store import MediaStoreProtocol
from .models import (
    BatchSummary,
    Credential,
    DispatchOutcome,
    FetchedMedia,
    JsonPath,
    MediaReference,
    NormalizationResult,
    RawEvent,
)
from .normalizer import EventNormalizerProtocol

__all__ = [
    "BatchSummary",
    "Credential",
    "CredentialBrokerProtocol",
    "DispatchOutcome",
    "EventNormalizerProtocol",
    "EventPublisherProtocol",
    "FetchedMedia",
    "JsonPath",
    "MediaFetcherProtocol",
    "MediaReference",
    "MediaStoreProtocol",
    "NormalizationResult",
    "RawEvent",
]
