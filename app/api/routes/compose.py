"""
Composition routes
Stateless preview of alert text and the options a form needs.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import require_principal
from app.domain.models import TradeCategory, strike_grid
from app.domain.schemas.compose import ComposeOptions, ComposeRequest, PreviewResponse, TemplateInfo
from app.domain.services.access_gate import Principal
from app.domain.services.expiry_calculator import expiry_label
from app.domain.services.message_composer import (
    EXPIRY_TEMPLATES,
    SQUARE_OFF_TEMPLATES,
    compose_message,
)

router = APIRouter()


def _template_infos(templates) -> list[TemplateInfo]:
    return [TemplateInfo(id=t.id, label=t.label, text=t.text) for t in templates.values()]


@router.get("/options", response_model=ComposeOptions)
async def compose_options(principal: Principal = Depends(require_principal)):
    """Strike grid, templates and the current weekly expiry."""
    return ComposeOptions(
        expiry=expiry_label(),
        strikes=strike_grid(),
        categories=list(TradeCategory),
        square_off_templates=_template_infos(SQUARE_OFF_TEMPLATES),
        expiry_templates=_template_infos(EXPIRY_TEMPLATES),
    )


@router.post("/preview", response_model=PreviewResponse)
async def compose_preview(
    request: ComposeRequest,
    principal: Principal = Depends(require_principal),
):
    """Compose without storing anything. Invalid input answers 400."""
    expiry = expiry_label()
    message = compose_message(request.to_intent(), expiry)
    return PreviewResponse(message=message, category=request.category, expiry=expiry)
