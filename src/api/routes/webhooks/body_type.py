"""Checagem do Content-Type contra o body type do receiver."""

from __future__ import annotations

from app.domain.receivers import BodyType

_ACCEPTED_MEDIA_TYPES: dict[BodyType, frozenset[str]] = {
    BodyType.JSON: frozenset({"application/json", "text/json"}),
    BodyType.XML: frozenset({"application/xml", "text/xml"}),
    BodyType.FORM: frozenset({"application/x-www-form-urlencoded"}),
}


def _media_type(content_type: str | None) -> str:
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_body_type_accepted(body_type: BodyType, content_type: str | None) -> bool:
    """Retorna True se o Content-Type atende ao body type exigido.

    `unspecified` aceita qualquer corpo; JSON aceita também `application/*+json`.
    """
    if body_type is BodyType.UNSPECIFIED:
        return True
    media_type = _media_type(content_type)
    if media_type in _ACCEPTED_MEDIA_TYPES[body_type]:
        return True
    if body_type is BodyType.JSON:
        return media_type.startswith("application/") and media_type.endswith("+json")
    if body_type is BodyType.XML:
        return media_type.startswith("application/") and media_type.endswith("+xml")
    return False
