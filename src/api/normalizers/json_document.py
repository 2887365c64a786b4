"""Substituição pontual em documentos JSON já parseados.

A substituição reconstrói apenas os nós do caminho alterado; o documento de
entrada nunca é mutado e pode ser reaproveitado como fallback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.protocols.models import JsonPath


def replace_at(document: dict[str, Any], path: JsonPath, value: Any) -> dict[str, Any]:
    """Retorna cópia do documento com `value` gravado em `path`.

    Todos os nós intermediários precisam existir; o último passo pode ser uma
    chave nova (ex.: `url` ausente no nó de mídia da Meta).

    Raises:
        ValueError: Se `path` for vazio.
        KeyError/IndexError/TypeError: Se um nó intermediário não existir.
    """
    if not path:
        raise ValueError("path vazio")
    return _rebuild(document, path, value)


def _rebuild(node: Any, path: JsonPath, value: Any) -> Any:
    step, rest = path[0], path[1:]
    if isinstance(node, dict) and isinstance(step, str):
        copy: Any = dict(node)
        copy[step] = value if not rest else _rebuild(node[step], rest, value)
        return copy
    if isinstance(node, list) and isinstance(step, int):
        copy = list(node)
        copy[step] = value if not rest else _rebuild(node[step], rest, value)
        return copy
    raise TypeError(f"passo {step!r} incompatível com {type(node).__name__}")
