"""Criptografia de webhooks — assinaturas HMAC e comparação constante.

Localizado em app/infra/ para manter boundaries corretas:
- app/ não importa de api/ (exceto via bootstrap)
- Usado pelo verificador de segurança em app/services
"""

from .signature import (
    ParsedSignature,
    compute_signature,
    constant_time_equals,
    is_timestamp_within_tolerance,
    matches_any_code,
    matches_any_key,
    parse_signature_header,
)

__all__ = [
    "ParsedSignature",
    "compute_signature",
    "constant_time_equals",
    "is_timestamp_within_tolerance",
    "matches_any_code",
    "matches_any_key",
    "parse_signature_header",
]
