"""Endpoints genéricos de receivers de webhook."""

from api.routes.webhooks.receiver import router

__all__ = ["router"]
