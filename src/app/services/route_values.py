"""Acesso tipado aos route values do host.

O router do host guarda os dados de rota como mapping fracamente tipado.
Este módulo é o único ponto de tradução para RouteContext: todas as
funções são totais e retornam None/vazio em vez de levantar exceção.
"""

from __future__ import annotations

from collections.abc import Mapping

from app.constants.webhooks import (
    EVENT_KEY_NAME,
    EVENT_KEY_NAMES,
    ID_KEY_NAME,
    RECEIVER_EXISTS_KEY_NAME,
    RECEIVER_KEY_NAME,
)
from app.domain.receivers import RouteContext

RouteValues = Mapping[str, object]


def _require(values: RouteValues | None) -> RouteValues:
    if values is None:
        raise ValueError("route values must not be None")
    return values


def _non_empty_string(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def try_get_receiver_name(values: RouteValues) -> str | None:
    """Retorna o nome do receiver se presente e não vazio."""
    return _non_empty_string(_require(values).get(RECEIVER_KEY_NAME))


def try_get_receiver_id(values: RouteValues) -> str | None:
    """Retorna o id de configuração se presente e não vazio."""
    return _non_empty_string(_require(values).get(ID_KEY_NAME))


def try_get_event_name(values: RouteValues) -> str | None:
    """Retorna o evento canônico (chave única) se presente."""
    return _non_empty_string(_require(values).get(EVENT_KEY_NAME))


def try_get_event_names(values: RouteValues) -> tuple[str, ...]:
    """Retorna os nomes de evento do request.

    A chave canônica tem prioridade e faz as chaves indexadas serem
    ignoradas. Sem ela, as chaves indexadas são lidas em ordem até a
    primeira lacuna: `[0]`, `[1]` presentes e `[2]` ausente encerram a
    leitura mesmo que `[3]` exista.

    Returns:
        Tupla de eventos (vazia = não encontrado).
    """
    event_name = try_get_event_name(values)
    if event_name is not None:
        return (event_name,)

    event_names: list[str] = []
    for key in EVENT_KEY_NAMES:
        if key not in values:
            break
        value = values[key]
        if isinstance(value, str):
            event_names.append(value)
    return tuple(event_names)


def get_receiver_exists(values: RouteValues) -> bool:
    """Lê o marcador gravado pela checagem de existência (padrão False)."""
    return _require(values).get(RECEIVER_EXISTS_KEY_NAME) is True


def build_route_context(values: RouteValues) -> RouteContext:
    """Monta RouteContext tipado a partir dos route values."""
    return RouteContext(
        receiver_name=try_get_receiver_name(values),
        configuration_id=try_get_receiver_id(values),
        event_names=try_get_event_names(values),
        receiver_exists=get_receiver_exists(values),
    )
