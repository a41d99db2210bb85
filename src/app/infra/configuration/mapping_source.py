"""Fonte de configuração sobre um mapping aninhado.

Chaves são case-insensitive (normalizadas em minúsculas na construção).
Escalares numéricos viram string para que secrets numéricos do YAML
continuem comparáveis byte a byte.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.constants.webhooks import CONFIGURATION_KEY_DELIMITER
from app.protocols.configuration import ConfigurationSourceProtocol
from utils.errors import ConfigurationRootError


def _normalize(value: Any, path: str) -> Any:
    if isinstance(value, Mapping):
        normalized: dict[str, Any] = {}
        for key, child in value.items():
            child_key = str(key).lower()
            normalized[child_key] = _normalize(child, f"{path}.{child_key}" if path else child_key)
        return normalized
    if isinstance(value, (list, tuple)):
        return [_normalize(item, path) for item in value]
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise ConfigurationRootError(f"unsupported configuration value at '{path}'")


class MappingConfigurationSource(ConfigurationSourceProtocol):
    """ConfigurationSourceProtocol imutável sobre dict aninhado.

    Args:
        data: Árvore de configuração (ex: resultado de yaml.safe_load).

    Raises:
        ConfigurationRootError: Se a raiz não for um mapping.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ConfigurationRootError("configuration root must be a mapping")
        self._root: dict[str, Any] = _normalize(data, "")

    def get(self, key: str) -> object | None:
        if not key:
            return None
        node: Any = self._root
        for part in key.lower().split(CONFIGURATION_KEY_DELIMITER):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def __repr__(self) -> str:
        return f"MappingConfigurationSource(sections={sorted(self._root)})"
