"""Constantes de roteamento e configuração dos receivers de webhook."""

from __future__ import annotations

# Chaves dos route values preenchidos pelo router do host
RECEIVER_KEY_NAME = "webHookReceiver"
ID_KEY_NAME = "id"
RECEIVER_EXISTS_KEY_NAME = "webHookReceiverExists"
EVENT_KEY_NAME = "webHookEventName"

# Quantidade máxima de eventos simultâneos em uma entrega
MAX_EVENT_NAMES = 10

# Chaves indexadas (contíguas) para entregas com vários eventos
EVENT_KEY_NAMES: tuple[str, ...] = tuple(
    f"{EVENT_KEY_NAME}[{index}]" for index in range(MAX_EVENT_NAMES)
)

# Hierarquia: receivers.<receiver>.secretKey.<id>
RECEIVER_CONFIGURATION_SECTION_KEY = "receivers"
SECRET_KEY_CONFIGURATION_SECTION_KEY = "secretKey"
DEFAULT_ID_CONFIGURATION_KEY = "default"
CONFIGURATION_KEY_DELIMITER = "."

# Parâmetro de query dos receivers que verificam código estático
CODE_QUERY_PARAMETER = "code"
