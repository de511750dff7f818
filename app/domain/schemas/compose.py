from pydantic import BaseModel, Field
from typing import List, Optional, Union

from app.domain.models import (
    ExitMode,
    MarketDirection,
    OptionSide,
    TradeCategory,
    TradeIntent,
)

# Prices arrive as typed text or JSON numbers; checked at composition
PriceField = Optional[Union[str, float]]


class ComposeRequest(BaseModel):
    category: TradeCategory
    strike: int = Field(24000, description="Strike on the 50-point grid, 24000..50000")
    option_side: Optional[OptionSide] = None
    market_direction: MarketDirection = MarketDirection.BULLISH

    buy_price: PriceField = None
    sell_price: PriceField = None
    buy_stop_loss: PriceField = None
    sell_stop_loss: PriceField = None

    exit_mode: Optional[ExitMode] = Field(None, description="BUY = exit from buy, SELL = exit from sell")
    ce_exit: PriceField = None
    pe_exit: PriceField = None
    exit_price: PriceField = None
    template: Optional[str] = Field(None, description="Template id, e.g. book100")

    def to_intent(self) -> TradeIntent:
        return TradeIntent(**self.model_dump())


class PreviewResponse(BaseModel):
    message: str
    category: TradeCategory
    expiry: str
    confirmed: bool = False


class TemplateInfo(BaseModel):
    id: str
    label: str
    text: str


class ComposeOptions(BaseModel):
    expiry: str
    strikes: List[int]
    categories: List[TradeCategory]
    square_off_templates: List[TemplateInfo]
    expiry_templates: List[TemplateInfo]


class SendMessageRequest(BaseModel):
    message: Optional[str] = None


class SessionInfo(BaseModel):
    authenticated: bool
    authorized: bool
    email: Optional[str] = None
    name: Optional[str] = None
