"""Modelos trafegados entre use cases e adapters do relay de mídia."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from app.constants.whatsapp import ProviderKind

JsonPath = tuple[str | int, ...]

NormalizationOutcome = Literal["resolved", "unchanged", "degraded"]
DispatchStatus = Literal["forwarded", "skipped"]


@dataclass(frozen=True, slots=True)
class RawEvent:
    """Mensagem recebida da fila de entrada, imutável.

    Attributes:
        body: Texto bruto (JSON esperado, não garantido).
        delivery_id: Identificador de entrega para logs/correlação.
    """

    body: str
    delivery_id: str


@dataclass(frozen=True, slots=True)
class MediaReference:
    """Referência de mídia extraída de um evento.

    Attributes:
        kind: Tipo da mídia (image, video, audio, voice, document).
        locator: URL direta (Whapi) ou media id opaco (Meta).
        requires_auth: Se o download exige bearer token.
        target_path: Caminho JSON do campo a sobrescrever com o locator estável.
        account_id: Id da conta de negócio (Meta); None para Whapi.
    """

    kind: str
    locator: str
    requires_auth: bool
    target_path: JsonPath
    account_id: str | None = None


@dataclass(frozen=True, slots=True)
class FetchedMedia:
    """Corpo de mídia em streaming com metadados dos headers."""

    chunks: AsyncIterator[bytes]
    content_length: int | None
    content_type: str | None


@dataclass(frozen=True, slots=True)
class Credential:
    """Bearer token emitido pelo broker. Nunca reutilizado entre eventos."""

    token: str

    def __repr__(self) -> str:
        return "Credential(token=***)"


@dataclass(frozen=True, slots=True)
class NormalizationResult:
    """Resultado de um normalizer; normalizers nunca levantam exceção.

    Attributes:
        document: Documento final (original ou com o locator substituído).
        outcome: resolved | unchanged | degraded.
        reason: Motivo curto para logs (ex.: "not_media", "fetch_failed").
        stable_locator: URL no storage quando outcome == "resolved".
    """

    document: dict[str, Any]
    outcome: NormalizationOutcome
    reason: str | None = None
    stable_locator: str | None = None


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Resultado do processamento de um RawEvent pelo dispatcher."""

    status: DispatchStatus
    provider: ProviderKind | None = None
    reason: str | None = None

    @property
    def forwarded(self) -> bool:
        return self.status == "forwarded"


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Resumo do processamento de um lote."""

    total: int = 0
    forwarded: int = 0
    skipped: int = 0
