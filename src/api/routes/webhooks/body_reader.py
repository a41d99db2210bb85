"""Leitura do corpo do webhook com limite de tamanho.

O limite vale também para requests sem Content-Length (chunked): o corpo
é lido do stream e a leitura para assim que o total passa do máximo.
O request devolvido por replay_request entrega o corpo já lido para o
verificador e para a extração de eventos.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.types import Message


class BodyTooLargeError(Exception):
    """Corpo do request excede o máximo configurado."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(f"body exceeds {max_bytes} bytes")
        self.max_bytes = max_bytes


async def read_limited_body(request: Request, max_bytes: int) -> bytes:
    """Lê o corpo do request sem passar de max_bytes.

    Raises:
        BodyTooLargeError: Total recebido passou de max_bytes
        ClientDisconnect: Cliente desconectou durante a leitura
    """
    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise BodyTooLargeError(max_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


def replay_request(request: Request, body: bytes) -> Request:
    """Cria um Request sobre o mesmo scope que entrega o corpo já lido."""

    async def _receive() -> Message:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(request.scope, _receive)
