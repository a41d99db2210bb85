"""Registro de metadata por tipo de receiver.

Tabela nome → ReceiverMetadata preenchida no startup e congelada depois.
Após freeze() só há leituras, então é seguro para leitores concorrentes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from app.domain.receivers import ReceiverMetadata
from utils.errors import ReceiverConfigurationError

logger = logging.getLogger(__name__)


class ReceiverMetadataRegistry:
    """Registro imutável (após freeze) de descriptors de receivers."""

    def __init__(self, receivers: Iterable[ReceiverMetadata] = ()) -> None:
        self._receivers: dict[str, ReceiverMetadata] = {}
        self._frozen = False
        for metadata in receivers:
            self.register(metadata)

    def register(self, metadata: ReceiverMetadata) -> None:
        """Registra descriptor de um receiver.

        Raises:
            ReceiverConfigurationError: Se o nome já está registrado
                ou o registro está congelado.
        """
        if self._frozen:
            raise ReceiverConfigurationError(
                f"registry is frozen; cannot register '{metadata.name}'"
            )
        if metadata.name in self._receivers:
            raise ReceiverConfigurationError(f"receiver already registered: {metadata.name}")
        self._receivers[metadata.name] = metadata
        logger.debug(
            "receiver_registered",
            extra={"receiver": metadata.name, "strategy": metadata.strategy.value},
        )

    def freeze(self) -> ReceiverMetadataRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get_metadata(self, receiver_name: str) -> ReceiverMetadata:
        """Retorna o descriptor do receiver.

        Raises:
            ReceiverConfigurationError: Se o receiver não está registrado.
        """
        metadata = self.find_metadata(receiver_name)
        if metadata is None:
            raise ReceiverConfigurationError(f"no receiver registered with name '{receiver_name}'")
        return metadata

    def find_metadata(self, receiver_name: str | None) -> ReceiverMetadata | None:
        if not receiver_name:
            return None
        return self._receivers.get(receiver_name.lower())

    def __contains__(self, receiver_name: object) -> bool:
        return isinstance(receiver_name, str) and self.find_metadata(receiver_name) is not None

    def __iter__(self) -> Iterator[ReceiverMetadata]:
        return iter(self._receivers.values())

    def __len__(self) -> int:
        return len(self._receivers)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._receivers)
