"""
Form session routes
Preview, confirm and cancel per form; state kept per signed-in user.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_dispatcher, get_form_registry, require_principal
from app.domain.schemas.compose import ComposeRequest, PreviewResponse
from app.domain.services.access_gate import Principal
from app.domain.services.form_session import FormKind, FormRegistry
from app.infrastructure.telegram.dispatcher import TelegramDispatcher

router = APIRouter()


@router.get("")
async def list_forms(
    principal: Principal = Depends(require_principal),
    registry: FormRegistry = Depends(get_form_registry),
):
    return registry.for_principal(principal.email).snapshot()


@router.post("/reset")
async def reset_forms(
    principal: Principal = Depends(require_principal),
    registry: FormRegistry = Depends(get_form_registry),
):
    forms = registry.for_principal(principal.email)
    forms.reset_all()
    return forms.snapshot()


@router.post("/{form}/preview", response_model=PreviewResponse)
async def preview_form(
    form: FormKind,
    request: ComposeRequest,
    principal: Principal = Depends(require_principal),
    registry: FormRegistry = Depends(get_form_registry),
):
    session = registry.for_principal(principal.email).get(form)
    preview = session.preview(request.to_intent())
    return PreviewResponse(
        message=preview.text,
        category=preview.category,
        expiry=preview.expiry,
        confirmed=preview.confirmed,
    )


@router.post("/{form}/confirm", response_model=PreviewResponse)
async def confirm_form(
    form: FormKind,
    principal: Principal = Depends(require_principal),
    registry: FormRegistry = Depends(get_form_registry),
    dispatcher: TelegramDispatcher = Depends(get_dispatcher),
):
    """Send the previewed message. On success every form of the user resets."""
    session = registry.for_principal(principal.email).get(form)
    sent = await session.confirm(dispatcher.send)
    return PreviewResponse(
        message=sent.text,
        category=sent.category,
        expiry=sent.expiry,
        confirmed=sent.confirmed,
    )


@router.post("/{form}/cancel")
async def cancel_form(
    form: FormKind,
    principal: Principal = Depends(require_principal),
    registry: FormRegistry = Depends(get_form_registry),
):
    session = registry.for_principal(principal.email).get(form)
    session.cancel()
    return session.snapshot()
