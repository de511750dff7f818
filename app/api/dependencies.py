"""
Shared route dependencies.
Collaborators live on app.state, created in the application lifespan.
"""

from typing import Optional

from fastapi import Depends, Request

from app.config import settings
from app.domain.services.access_gate import AccessGate, Principal
from app.domain.services.form_session import FormRegistry
from app.infrastructure.market_data.nse_preopen import NSEPreOpenClient
from app.infrastructure.telegram.dispatcher import TelegramDispatcher


def get_access_gate(request: Request) -> AccessGate:
    return request.app.state.access_gate


def get_dispatcher(request: Request) -> TelegramDispatcher:
    return request.app.state.dispatcher


def get_preopen_client(request: Request) -> NSEPreOpenClient:
    return request.app.state.preopen_client


def get_form_registry(request: Request) -> FormRegistry:
    return request.app.state.form_registry


def get_principal(request: Request) -> Optional[Principal]:
    """Identity forwarded by the identity-aware proxy, if any."""
    email = (request.headers.get(settings.AUTH_EMAIL_HEADER) or "").strip()
    if not email:
        return None
    name = (request.headers.get(settings.AUTH_USER_HEADER) or "").strip() or None
    return Principal(email=email, name=name)


def require_principal(
    principal: Optional[Principal] = Depends(get_principal),
    gate: AccessGate = Depends(get_access_gate),
) -> Principal:
    """Authoritative whitelist check for every compose and dispatch route."""
    return gate.authorize(principal)
