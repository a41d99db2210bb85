"""Configuração hierárquica — fonte chave/valor e loaders.

Módulos disponíveis:
    - mapping_source: fonte case-insensitive sobre mapping aninhado
    - loaders: leitura de YAML/JSON e variáveis de ambiente
"""

from __future__ import annotations

from app.infra.configuration.loaders import (
    load_configuration_file,
    load_environment_configuration,
    merge_configuration,
)
from app.infra.configuration.mapping_source import MappingConfigurationSource

__all__ = [
    "MappingConfigurationSource",
    "load_configuration_file",
    "load_environment_configuration",
    "merge_configuration",
]
