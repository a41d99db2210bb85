"""Factory de wiring dos receivers (bootstrap).

Monta a fonte de configuração, o registro de metadata congelado, o lookup
de secrets e o verificador, tudo imutável após o startup.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from api.connectors.receivers import create_builtin_receivers
from app.domain.receivers import ReceiverMetadata
from app.infra.configuration import (
    MappingConfigurationSource,
    load_configuration_file,
    load_environment_configuration,
    merge_configuration,
)
from app.protocols.configuration import ConfigurationSourceProtocol
from app.services.metadata_registry import ReceiverMetadataRegistry
from app.services.secret_keys import SecretKeyLookup
from app.services.security_verifier import WebhookSecurityVerifier
from config.settings import WebhookSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookRuntime:
    """Componentes somente-leitura compartilhados por todos os requests."""

    configuration: ConfigurationSourceProtocol
    registry: ReceiverMetadataRegistry
    secret_keys: SecretKeyLookup
    verifier: WebhookSecurityVerifier
    settings: WebhookSettings

    def active_receivers(self) -> tuple[str, ...]:
        """Receivers registrados que têm algum id configurado."""
        return tuple(
            name for name in self.registry.names if self.secret_keys.has_secret_keys(name)
        )


def create_configuration_source(
    settings: WebhookSettings,
    environ: Mapping[str, str] | None = None,
) -> MappingConfigurationSource:
    """Carrega arquivo (se houver) e sobrescreve com variáveis de ambiente.

    Raises:
        ConfigurationRootError: Se o arquivo for inválido.
    """
    trees = []
    if settings.config_file:
        trees.append(load_configuration_file(settings.config_file))
    trees.append(
        load_environment_configuration(
            os.environ if environ is None else environ,
            prefix=settings.env_prefix,
        )
    )
    return MappingConfigurationSource(merge_configuration(*trees))


def create_receiver_registry(
    configuration: ConfigurationSourceProtocol,
    settings: WebhookSettings,
    extra_receivers: Iterable[ReceiverMetadata] = (),
) -> ReceiverMetadataRegistry:
    """Registra receivers embutidos (e extras) e congela o registro."""
    registry = ReceiverMetadataRegistry(
        create_builtin_receivers(configuration, settings.stripe_tolerance_seconds)
    )
    for metadata in extra_receivers:
        registry.register(metadata)
    return registry.freeze()


def create_webhook_runtime(
    settings: WebhookSettings,
    configuration: ConfigurationSourceProtocol | None = None,
    extra_receivers: Iterable[ReceiverMetadata] = (),
) -> WebhookRuntime:
    """Cria o runtime completo dos receivers."""
    if configuration is None:
        configuration = create_configuration_source(settings)
    registry = create_receiver_registry(configuration, settings, extra_receivers)
    secret_keys = SecretKeyLookup(configuration)
    runtime = WebhookRuntime(
        configuration=configuration,
        registry=registry,
        secret_keys=secret_keys,
        verifier=WebhookSecurityVerifier(registry, secret_keys),
        settings=settings,
    )
    logger.info(
        "webhook_runtime_created",
        extra={
            "component": "bootstrap",
            "receivers": list(registry.names),
            "active_receivers": list(runtime.active_receivers()),
        },
    )
    return runtime


def validate_secret_key_lengths(runtime: WebhookRuntime) -> list[str]:
    """Lista secrets fora da faixa de tamanho do receiver (sem expor valores).

    Returns:
        Lista de erros (vazia = OK).
    """
    errors: list[str] = []
    for metadata in runtime.registry:
        for configuration_id in runtime.secret_keys.configured_ids(metadata.name):
            keys = runtime.secret_keys.get_secret_keys(metadata.name, configuration_id)
            if keys is None:
                continue
            for position, key in enumerate(keys):
                if not metadata.accepts_key_length(len(key)):
                    errors.append(
                        f"{metadata.name}/{configuration_id}: secret #{position} "
                        f"fora da faixa {metadata.secret_key_min_length}.."
                        f"{metadata.secret_key_max_length or '∞'}"
                    )
    return errors
