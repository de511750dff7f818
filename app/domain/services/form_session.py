"""
Form sessions.

Each principal owns four forms. A form moves EDITING -> PREVIEWING ->
SENDING and back to EDITING once the message is out. The owner resets every
form after a successful send.
"""
import logging
from dataclasses import asdict, replace
from enum import Enum
from typing import Awaitable, Callable, Dict, FrozenSet, Optional

from app.domain.errors import FormBusyError, ValidationError
from app.domain.models.trade import (
    MarketDirection,
    OptionSide,
    PreviewMessage,
    TradeCategory,
    TradeIntent,
)
from app.domain.services.expiry_calculator import expiry_label
from app.domain.services.message_composer import compose_message

logger = logging.getLogger(__name__)

Sender = Callable[[str], Awaitable[None]]


class FormKind(str, Enum):
    FRESH_TRADE = "fresh_trade"
    SQUARE_OFF = "square_off"
    EXPIRY = "expiry"
    IGNORE = "ignore"


class FormState(str, Enum):
    EDITING = "EDITING"
    PREVIEWING = "PREVIEWING"
    SENDING = "SENDING"


FORM_CATEGORIES: Dict[FormKind, FrozenSet[TradeCategory]] = {
    FormKind.FRESH_TRADE: frozenset({
        TradeCategory.FRESH_BUY,
        TradeCategory.FRESH_SELL,
        TradeCategory.FRESH_BOTH,
    }),
    FormKind.SQUARE_OFF: frozenset({
        TradeCategory.SQUARE_OFF_BOTH,
        TradeCategory.SQUARE_OFF_SINGLE,
    }),
    FormKind.EXPIRY: frozenset({TradeCategory.EXPIRY_SINGLE}),
    FormKind.IGNORE: frozenset({TradeCategory.IGNORE_ALERT}),
}

_DEFAULTS: Dict[FormKind, TradeIntent] = {
    FormKind.FRESH_TRADE: TradeIntent(
        category=TradeCategory.FRESH_BUY,
        strike=24000,
        option_side=OptionSide.CE,
        market_direction=MarketDirection.BULLISH,
    ),
    FormKind.SQUARE_OFF: TradeIntent(
        category=TradeCategory.SQUARE_OFF_BOTH,
        strike=24000,
        market_direction=MarketDirection.BULLISH,
        template="book100",
    ),
    FormKind.EXPIRY: TradeIntent(
        category=TradeCategory.EXPIRY_SINGLE,
        strike=25900,
        market_direction=MarketDirection.BULLISH,
        template="book100",
    ),
    FormKind.IGNORE: TradeIntent(category=TradeCategory.IGNORE_ALERT),
}


def default_intent(kind: FormKind) -> TradeIntent:
    return _DEFAULTS[kind]


class FormSession:
    """State of one form between edits, preview and send."""

    def __init__(
        self,
        kind: FormKind,
        expiry: str,
        on_sent: Optional[Callable[[], None]] = None,
    ):
        self.kind = kind
        self.expiry = expiry
        self.on_sent = on_sent
        self.state = FormState.EDITING
        self.intent = default_intent(kind)
        self.preview_message: Optional[PreviewMessage] = None

    def preview(self, intent: TradeIntent) -> PreviewMessage:
        """
        Compose the intent for confirmation.

        On a validation error the session keeps its previous intent and
        preview.
        """
        if self.state == FormState.SENDING:
            raise FormBusyError("A message is already being sent")
        if intent.category not in FORM_CATEGORIES[self.kind]:
            raise ValidationError(
                f"{intent.category.value} cannot be composed on the {self.kind.value} form",
                field="category",
            )

        text = compose_message(intent, self.expiry)
        self.intent = intent
        self.preview_message = PreviewMessage(text=text, category=intent.category, expiry=self.expiry)
        self.state = FormState.PREVIEWING
        return self.preview_message

    def cancel(self) -> None:
        if self.state == FormState.SENDING:
            raise FormBusyError("A message is already being sent")
        self.preview_message = None
        self.state = FormState.EDITING

    async def confirm(self, send: Sender) -> PreviewMessage:
        """
        Send the previewed text.

        A second confirm while one is in flight is refused. If sending fails
        the preview stays so the user can retry.
        """
        if self.state == FormState.SENDING:
            raise FormBusyError("A message is already being sent")
        if self.kind == FormKind.IGNORE and self.preview_message is None:
            # One-click form: no preview step
            self.preview(default_intent(FormKind.IGNORE))
        if self.preview_message is None:
            raise ValidationError("No message to send")

        pending = self.preview_message
        self.state = FormState.SENDING
        sent = False
        try:
            await send(pending.text)
            sent = True
        finally:
            if sent or self.preview_message is None:
                self.state = FormState.EDITING
            else:
                self.state = FormState.PREVIEWING

        logger.info(f"Sent {pending.category.value} alert from {self.kind.value} form")
        if self.on_sent is not None:
            self.on_sent()
        else:
            self.reset()
        return replace(pending, confirmed=True)

    def reset(self, expiry: Optional[str] = None) -> None:
        if expiry is not None:
            self.expiry = expiry
        self.state = FormState.EDITING
        self.intent = default_intent(self.kind)
        self.preview_message = None

    def snapshot(self) -> dict:
        return {
            "form": self.kind.value,
            "state": self.state.value,
            "expiry": self.expiry,
            "preview": self.preview_message.text if self.preview_message else None,
            "intent": asdict(self.intent),
        }


class PublisherForms:
    """
    The forms of one principal.

    Owns the reset action: a successful send on any form resets all of them
    and recomputes the expiry label. A form still sending is left alone; it
    resets the others again once its own send succeeds.
    """

    def __init__(self, expiry_provider: Callable[[], str] = expiry_label):
        self._expiry_provider = expiry_provider
        self.expiry = expiry_provider()
        self.sessions: Dict[FormKind, FormSession] = {
            kind: FormSession(kind, self.expiry, on_sent=self.reset_all)
            for kind in FormKind
        }

    def get(self, kind: FormKind) -> FormSession:
        return self.sessions[kind]

    def reset_all(self) -> None:
        self.expiry = self._expiry_provider()
        for session in self.sessions.values():
            if session.state == FormState.SENDING:
                continue
            session.reset(expiry=self.expiry)

    def snapshot(self) -> dict:
        return {
            "expiry": self.expiry,
            "forms": [session.snapshot() for session in self.sessions.values()],
        }


class FormRegistry:
    """In-memory forms per principal email. Nothing survives a restart."""

    def __init__(self, expiry_provider: Callable[[], str] = expiry_label):
        self._expiry_provider = expiry_provider
        self._forms: Dict[str, PublisherForms] = {}

    def for_principal(self, email: str) -> PublisherForms:
        key = email.strip().lower()
        forms = self._forms.get(key)
        if forms is None:
            forms = PublisherForms(self._expiry_provider)
            self._forms[key] = forms
        return forms

    def clear(self) -> None:
        self._forms.clear()
