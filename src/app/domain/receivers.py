"""Modelos de domínio dos receivers de webhook.

Descriptors imutáveis por tipo de receiver, chaves de configuração,
conjunto de secrets e contexto de rota por request. Nenhum IO aqui.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from enum import StrEnum

from app.constants.webhooks import DEFAULT_ID_CONFIGURATION_KEY
from utils.errors import ReceiverConfigurationError

# shake_* exigem tamanho de saída e não servem para HMAC
HMAC_DIGESTS = frozenset(hashlib.algorithms_guaranteed - {"shake_128", "shake_256"})


class BodyType(StrEnum):
    """Codificação exigida do corpo da requisição."""

    JSON = "json"
    XML = "xml"
    FORM = "form"
    UNSPECIFIED = "unspecified"


class VerificationStrategy(StrEnum):
    """Mecanismo usado pelo receiver para provar autenticidade."""

    STATIC_CODE = "static_code"
    BODY_SIGNATURE = "body_signature"
    NONE = "none"


class SignatureEncoding(StrEnum):
    """Codificação do digest enviado no header de assinatura."""

    HEX = "hex"
    BASE64 = "base64"


class SignatureFormat(StrEnum):
    """Formato do header de assinatura."""

    # "<prefix><digest>" (ex: sha256=abc...)
    PREFIXED = "prefixed"
    # "t=<timestamp>,v1=<digest>[,v1=...]" (Stripe)
    TIMESTAMPED = "timestamped"


@dataclass(frozen=True, slots=True)
class SignatureScheme:
    """Contrato de assinatura HMAC sobre o corpo.

    Attributes:
        header_name: Header que carrega a assinatura
        digest: Nome do hash para hmac (ex: "sha256"), um de HMAC_DIGESTS
        encoding: Codificação do digest no header
        prefix: Prefixo obrigatório do valor (formato PREFIXED)
        header_format: PREFIXED ou TIMESTAMPED
        signature_version: Chave das assinaturas no formato TIMESTAMPED
        timestamp_tolerance_seconds: Janela aceita para o timestamp
    """

    header_name: str
    digest: str = "sha256"
    encoding: SignatureEncoding = SignatureEncoding.HEX
    prefix: str = ""
    header_format: SignatureFormat = SignatureFormat.PREFIXED
    signature_version: str = "v1"
    timestamp_tolerance_seconds: int | None = None

    def __post_init__(self) -> None:
        if self.digest not in HMAC_DIGESTS:
            raise ReceiverConfigurationError(f"unsupported_signature_digest: {self.digest}")


@dataclass(frozen=True, slots=True)
class EventSource:
    """Origem dos nomes de evento de uma entrega.

    Exatamente uma origem deve ser informada.

    Attributes:
        header_name: Header com o nome do evento
        json_path: Caminho no JSON (ex: ("type",) ou ("entry", "changes", "field"))
        constant: Evento fixo para receivers sem tipo de evento
    """

    header_name: str | None = None
    json_path: tuple[str, ...] = ()
    constant: str | None = None

    def __post_init__(self) -> None:
        sources = [bool(self.header_name), bool(self.json_path), bool(self.constant)]
        if sum(sources) != 1:
            raise ReceiverConfigurationError("event_source_requires_exactly_one_origin")


@dataclass(frozen=True, slots=True)
class GetRequestProtocol:
    """Contrato de challenge/response para requisições GET.

    Attributes:
        challenge_parameter: Query param ecoado na resposta
        mode_parameter: Query param de modo (handshake Meta)
        expected_mode: Valor exigido em mode_parameter
        verify_token_parameter: Query param comparado com os secrets
    """

    challenge_parameter: str
    mode_parameter: str | None = None
    expected_mode: str | None = None
    verify_token_parameter: str | None = None

    @property
    def requires_verify_token(self) -> bool:
        return self.verify_token_parameter is not None


@dataclass(frozen=True, slots=True)
class ReceiverMetadata:
    """Descriptor estático de um tipo de receiver.

    Construído uma vez no registro e imutável depois disso. A validação
    garante que código estático e assinatura de corpo são excludentes.
    """

    name: str
    body_type: BodyType = BodyType.JSON
    verify_code_parameter: bool = False
    short_circuit_get_requests: bool = False
    get_request_protocol: GetRequestProtocol | None = None
    signature: SignatureScheme | None = None
    event_source: EventSource | None = None
    secret_key_min_length: int = 0
    secret_key_max_length: int | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ReceiverConfigurationError("receiver_name_required")
        if self.name != self.name.lower():
            raise ReceiverConfigurationError(f"receiver_name_must_be_lowercase: {self.name}")
        if self.verify_code_parameter and self.signature is not None:
            raise ReceiverConfigurationError(
                f"receiver '{self.name}' cannot verify code parameter and body signature"
            )
        if self.short_circuit_get_requests and self.get_request_protocol is None:
            raise ReceiverConfigurationError(
                f"receiver '{self.name}' short-circuits GET without a GET request protocol"
            )
        if (
            self.secret_key_max_length is not None
            and self.secret_key_max_length < self.secret_key_min_length
        ):
            raise ReceiverConfigurationError(
                f"receiver '{self.name}' has an invalid secret key length range"
            )

    @property
    def strategy(self) -> VerificationStrategy:
        if self.verify_code_parameter:
            return VerificationStrategy.STATIC_CODE
        if self.signature is not None:
            return VerificationStrategy.BODY_SIGNATURE
        return VerificationStrategy.NONE

    def accepts_key_length(self, length: int) -> bool:
        """Retorna True se o tamanho do secret está na faixa do receiver."""
        if length < self.secret_key_min_length:
            return False
        return self.secret_key_max_length is None or length <= self.secret_key_max_length


@dataclass(frozen=True, slots=True)
class ReceiverConfigurationKey:
    """Par (receiver, id de configuração); id vazio vira "default"."""

    receiver_name: str
    configuration_id: str = DEFAULT_ID_CONFIGURATION_KEY

    def __post_init__(self) -> None:
        if not self.receiver_name:
            raise ValueError("receiver_name must not be empty")
        if not self.configuration_id:
            object.__setattr__(self, "configuration_id", DEFAULT_ID_CONFIGURATION_KEY)


@dataclass(frozen=True, slots=True)
class SecretKeySet:
    """Um ou mais secrets válidos ao mesmo tempo (rotação sem downtime)."""

    keys: tuple[str, ...] = field(repr=False)

    def __post_init__(self) -> None:
        if not self.keys:
            raise ValueError("SecretKeySet requires at least one key")

    def __iter__(self):
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __repr__(self) -> str:
        return f"SecretKeySet(<{len(self.keys)} keys>)"


@dataclass(frozen=True, slots=True)
class RouteContext:
    """Dados de roteamento de um request, já tipados."""

    receiver_name: str | None
    configuration_id: str | None = None
    event_names: tuple[str, ...] = ()
    receiver_exists: bool = False

    @property
    def configuration_key(self) -> ReceiverConfigurationKey | None:
        if not self.receiver_name:
            return None
        return ReceiverConfigurationKey(self.receiver_name, self.configuration_id or "")
