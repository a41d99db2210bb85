"""Loaders da árvore de configuração (arquivo YAML/JSON e ambiente).

Uso:
    tree = merge_configuration(
        load_configuration_file("webhooks.yaml"),
        load_environment_configuration(os.environ),
    )
    source = MappingConfigurationSource(tree)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from utils.errors import ConfigurationRootError

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "WEBHOOKS__"
ENV_KEY_DELIMITER = "__"


def load_configuration_file(path: str | Path) -> dict[str, Any]:
    """Carrega árvore de configuração de YAML (JSON também é YAML válido).

    Args:
        path: Caminho do arquivo

    Returns:
        Árvore de configuração (vazia se o arquivo estiver vazio).

    Raises:
        ConfigurationRootError: Se o arquivo não existe, é ilegível
            ou a raiz não é um mapping.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationRootError(f"configuration file not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationRootError(f"invalid configuration file: {file_path}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationRootError(f"configuration root must be a mapping: {file_path}")

    logger.info(
        "configuration_file_loaded",
        extra={"component": "configuration", "sections": sorted(str(k) for k in data)},
    )
    return data


def load_environment_configuration(
    environ: Mapping[str, str],
    prefix: str = DEFAULT_ENV_PREFIX,
) -> dict[str, Any]:
    """Converte variáveis de ambiente com prefixo em árvore aninhada.

    `WEBHOOKS__RECEIVERS__GITHUB__SECRETKEY__DEFAULT=x` vira
    `{"receivers": {"github": {"secretkey": {"default": "x"}}}}`.
    Se uma chave for folha e seção ao mesmo tempo, a seção prevalece.
    """
    tree: dict[str, Any] = {}
    prefix_upper = prefix.upper()
    for name in sorted(environ):
        if not name.upper().startswith(prefix_upper):
            continue
        parts = [p.lower() for p in name[len(prefix):].split(ENV_KEY_DELIMITER) if p]
        if not parts:
            continue
        node = tree
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        if not isinstance(node.get(parts[-1]), dict):
            node[parts[-1]] = environ[name]
    return tree


def merge_configuration(*trees: Mapping[str, Any]) -> dict[str, Any]:
    """Mescla árvores em profundidade; a última vence em conflitos."""
    merged: dict[str, Any] = {}
    for tree in trees:
        _merge_into(merged, tree)
    return merged


def _merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for raw_key, value in source.items():
        key = str(raw_key).lower()
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            _merge_into(existing, value)
        elif isinstance(value, Mapping):
            target[key] = {}
            _merge_into(target[key], value)
        else:
            target[key] = value
