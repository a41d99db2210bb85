"""Extração dos nomes de evento para os route values.

Um evento vai para a chave canônica; vários eventos vão para as chaves
indexadas contíguas. Corpo JSON inválido resulta em nenhum evento.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from app.constants.webhooks import EVENT_KEY_NAME, EVENT_KEY_NAMES
from app.domain.receivers import EventSource, ReceiverMetadata

logger = logging.getLogger(__name__)


def _walk(root: Any, path: tuple[str, ...]) -> list[str]:
    """Percorre o payload sem recursão; listas aninhadas não estouram a pilha."""
    found: list[str] = []
    pending: list[tuple[Any, int]] = [(root, 0)]
    while pending:
        node, depth = pending.pop()
        if depth == len(path):
            if isinstance(node, str) and node:
                found.append(node)
        elif isinstance(node, list):
            # Invertido para preservar a ordem do payload
            pending.extend((item, depth) for item in reversed(node))
        elif isinstance(node, dict) and path[depth] in node:
            pending.append((node[path[depth]], depth + 1))
    return found


def extract_event_names(
    source: EventSource,
    headers: Mapping[str, str],
    body: bytes,
) -> tuple[str, ...]:
    """Lê os eventos conforme a origem declarada pelo receiver.

    Args:
        source: Origem (header, caminho JSON ou constante)
        headers: Headers do request (case-insensitive no Starlette)
        body: Corpo já bufferizado

    Returns:
        Eventos em ordem, sem duplicatas.
    """
    if source.constant:
        return (source.constant,)

    if source.header_name:
        value = headers.get(source.header_name)
        return (value,) if value else ()

    try:
        payload = json.loads(body or b"null")
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError):
        logger.debug("event_names_json_invalid", extra={"payload_size": len(body)})
        return ()

    names = _walk(payload, source.json_path)
    return tuple(dict.fromkeys(names))


def store_event_names(route_values: MutableMapping[str, object], names: tuple[str, ...]) -> None:
    """Grava eventos nos route values (canônico ou indexado)."""
    if not names:
        return
    if len(names) == 1:
        route_values[EVENT_KEY_NAME] = names[0]
        return
    if len(names) > len(EVENT_KEY_NAMES):
        logger.warning(
            "event_names_truncated",
            extra={"received": len(names), "kept": len(EVENT_KEY_NAMES)},
        )
    for key, name in zip(EVENT_KEY_NAMES, names):
        route_values[key] = name


def populate_event_names(
    metadata: ReceiverMetadata,
    headers: Mapping[str, str],
    body: bytes,
    route_values: MutableMapping[str, object],
) -> tuple[str, ...]:
    """Extrai e grava os eventos do receiver; retorna os eventos gravados."""
    if metadata.event_source is None:
        return ()
    names = extract_event_names(metadata.event_source, headers, body)
    store_event_names(route_values, names)
    return names[: len(EVENT_KEY_NAMES)]
