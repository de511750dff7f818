"""
Dispatch route
Sends an already-composed message to the Telegram channel.
"""

from fastapi import APIRouter, Depends
import logging

from app.api.dependencies import get_dispatcher, get_principal, get_access_gate, require_principal
from app.domain.errors import ValidationError
from app.domain.schemas.compose import SendMessageRequest, SessionInfo
from app.domain.services.access_gate import AccessGate, Principal
from app.infrastructure.telegram.dispatcher import TelegramDispatcher

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/sendMessage")
async def send_message(
    payload: SendMessageRequest,
    principal: Principal = Depends(require_principal),
    dispatcher: TelegramDispatcher = Depends(get_dispatcher),
):
    """
    Send a message to the channel.

    Body: {"message": "..."}. Answers {"success": true}, or {"error": "..."}
    on failure.
    """
    if not payload.message:
        raise ValidationError("Message cannot be empty", field="message")

    await dispatcher.send(payload.message)
    logger.info(f"Message sent by {principal.email}")
    return {"success": True}


@router.get("/v1/session", response_model=SessionInfo)
async def session_info(
    principal: Principal | None = Depends(get_principal),
    gate: AccessGate = Depends(get_access_gate),
):
    """
    Who is signed in and whether they are whitelisted.

    For the UI to decide what to render; routes enforce access themselves.
    """
    if principal is None:
        return SessionInfo(authenticated=False, authorized=False)
    return SessionInfo(
        authenticated=True,
        authorized=gate.is_authorized(principal.email),
        email=principal.email,
        name=principal.name,
    )
