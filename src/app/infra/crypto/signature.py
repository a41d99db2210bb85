"""Validação de assinaturas HMAC sobre o corpo de webhooks.

Toda comparação usa hmac.compare_digest. A verificação percorre todas as
chaves e todas as assinaturas recebidas sem sair cedo, para não revelar
qual chave (se alguma) casou parcialmente.
"""

from __future__ import annotations

import base64
import binascii
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.receivers import SignatureEncoding, SignatureFormat, SignatureScheme

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class ParsedSignature:
    """Header de assinatura já decodificado."""

    digests: tuple[bytes, ...]
    timestamp: str | None = None


def constant_time_equals(left: bytes, right: bytes) -> bool:
    """Comparação em tempo constante."""
    return hmac.compare_digest(left, right)


def decode_digest(value: str, encoding: SignatureEncoding) -> bytes | None:
    """Decodifica digest hex/base64; None se malformado."""
    try:
        if encoding is SignatureEncoding.HEX:
            return bytes.fromhex(value)
        return base64.b64decode(value, validate=True)
    except (ValueError, binascii.Error):
        return None


def parse_signature_header(
    scheme: SignatureScheme,
    header_value: str | None,
) -> ParsedSignature | None:
    """Extrai digests (e timestamp) do header conforme o formato do scheme.

    Returns:
        ParsedSignature ou None se o header estiver ausente/malformado.
    """
    if not header_value:
        return None

    if scheme.header_format is SignatureFormat.PREFIXED:
        value = header_value.strip()
        if scheme.prefix:
            if not value.lower().startswith(scheme.prefix.lower()):
                return None
            value = value[len(scheme.prefix):]
        digest = decode_digest(value, scheme.encoding)
        if digest is None:
            return None
        return ParsedSignature(digests=(digest,))

    # Formato "t=<timestamp>,v1=<digest>[,v1=<digest>]"
    timestamp: str | None = None
    digests: list[bytes] = []
    for item in header_value.split(","):
        key, sep, value = item.strip().partition("=")
        if not sep:
            continue
        if key == "t":
            timestamp = value
        elif key == scheme.signature_version:
            digest = decode_digest(value, scheme.encoding)
            if digest is not None:
                digests.append(digest)

    if not timestamp or not digests:
        return None
    return ParsedSignature(digests=tuple(digests), timestamp=timestamp)


def is_timestamp_within_tolerance(
    scheme: SignatureScheme,
    timestamp: str | None,
    now: float,
) -> bool:
    """Valida a janela de replay do timestamp (sem tolerância = sempre OK)."""
    if scheme.timestamp_tolerance_seconds is None:
        return True
    if timestamp is None:
        return False
    try:
        sent_at = int(timestamp)
    except ValueError:
        return False
    return abs(now - sent_at) <= scheme.timestamp_tolerance_seconds


def signed_payload(scheme: SignatureScheme, body: bytes, timestamp: str | None) -> bytes:
    """Bytes cobertos pelo HMAC (Stripe assina "<t>." + body)."""
    if scheme.header_format is SignatureFormat.TIMESTAMPED and timestamp is not None:
        return f"{timestamp}.".encode() + body
    return body


def compute_signature(scheme: SignatureScheme, secret: str, payload: bytes) -> bytes:
    """HMAC do payload com o hash declarado pelo scheme."""
    return hmac.new(secret.encode("utf-8"), payload, scheme.digest).digest()


def matches_any_key(
    scheme: SignatureScheme,
    keys: Iterable[str],
    body: bytes,
    parsed: ParsedSignature,
) -> bool:
    """Retorna True se alguma chave gera alguma das assinaturas recebidas.

    Todas as combinações chave × assinatura são comparadas.
    """
    payload = signed_payload(scheme, body, parsed.timestamp)
    matched = False
    for secret in keys:
        expected = compute_signature(scheme, secret, payload)
        for digest in parsed.digests:
            if constant_time_equals(expected, digest):
                matched = True
    return matched


def matches_any_code(keys: Iterable[str], code: str) -> bool:
    """Compara o código recebido com todas as chaves em tempo constante."""
    received = code.encode("utf-8")
    matched = False
    for secret in keys:
        if constant_time_equals(secret.encode("utf-8"), received):
            matched = True
    return matched
