"""Lookup de secrets por receiver e id de configuração.

Hierarquia: `receivers.<receiver>.secretKey.<id>`; id vazio usa "default".
Ausência não é erro: o chamador trata como "receiver não configurado".
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from app.constants.webhooks import (
    CONFIGURATION_KEY_DELIMITER,
    DEFAULT_ID_CONFIGURATION_KEY,
    RECEIVER_CONFIGURATION_SECTION_KEY,
    SECRET_KEY_CONFIGURATION_SECTION_KEY,
)
from app.domain.receivers import SecretKeySet
from app.protocols.configuration import ConfigurationSourceProtocol

logger = logging.getLogger(__name__)


def _combine(*parts: str) -> str:
    return CONFIGURATION_KEY_DELIMITER.join(parts)


def _secret_section_key(receiver_name: str) -> str:
    return _combine(
        RECEIVER_CONFIGURATION_SECTION_KEY,
        receiver_name,
        SECRET_KEY_CONFIGURATION_SECTION_KEY,
    )


def _collect_keys(value: object) -> list[str]:
    """Achata string, lista ou seção em lista ordenada de secrets."""
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str) and item.strip()]
    if isinstance(value, Mapping):
        keys: list[str] = []
        for child in value.values():
            keys.extend(_collect_keys(child))
        return keys
    return []


class SecretKeyLookup:
    """Resolve SecretKeySet a partir de uma fonte de configuração injetada."""

    def __init__(self, source: ConfigurationSourceProtocol) -> None:
        if source is None:
            raise ValueError("source must not be None")
        self._source = source

    def get_secret_keys(
        self,
        receiver_name: str,
        configuration_id: str | None = None,
    ) -> SecretKeySet | None:
        """Retorna os secrets do par (receiver, id) ou None se ausente.

        Args:
            receiver_name: Nome do receiver (ex: "github")
            configuration_id: Id de configuração; vazio/None usa "default"

        Raises:
            ValueError: Se receiver_name for vazio.
        """
        if not receiver_name:
            raise ValueError("receiver_name must not be empty")

        config_id = configuration_id or DEFAULT_ID_CONFIGURATION_KEY
        value = self._source.get(_combine(_secret_section_key(receiver_name), config_id))
        if value is None:
            return None

        keys = _collect_keys(value)
        if not keys:
            logger.debug(
                "secret_keys_empty",
                extra={"receiver": receiver_name, "configuration_id": config_id},
            )
            return None
        return SecretKeySet(tuple(keys))

    def has_secret_keys(self, receiver_name: str) -> bool:
        """Indica se existe algum id configurado para o receiver.

        Raises:
            ValueError: Se receiver_name for vazio.
        """
        if not receiver_name:
            raise ValueError("receiver_name must not be empty")
        return self._source.exists(_secret_section_key(receiver_name))

    def configured_ids(self, receiver_name: str) -> tuple[str, ...]:
        """Lista ids de configuração registrados para o receiver."""
        if not receiver_name:
            raise ValueError("receiver_name must not be empty")
        section = self._source.get(_secret_section_key(receiver_name))
        if isinstance(section, Mapping):
            return tuple(section)
        return ()
