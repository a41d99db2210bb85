"""Protocolo da fonte de configuração hierárquica.

Interface estreita injetada em quem precisa de lookups, em vez de uma raiz
de configuração global.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ConfigurationSourceProtocol(ABC):
    """Fonte de configuração chave/valor hierárquica (somente leitura).

    Método canônico:
    - get(key) -> valor | None
      `key` é separado por ponto (ex: "receivers.github.secretKey.default").
      Seções retornam Mapping; folhas retornam str ou lista de str.
    """

    @abstractmethod
    def get(self, key: str) -> object | None:
        """Retorna o valor/seção da chave ou None se ausente.

        Args:
            key: Caminho separado por ponto

        Returns:
            Valor, seção (Mapping) ou None.
        """

    def exists(self, key: str) -> bool:
        """Retorna True se a chave existe com valor ou filhos."""
        value = self.get(key)
        if value is None:
            return False
        if isinstance(value, (str, list, tuple, dict)) and not value:
            return False
        return True

    def is_true(self, key: str) -> bool:
        """Interpreta a chave como flag booleana (ausente = False)."""
        value = self.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes")
        return False
