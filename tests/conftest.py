from typing import AsyncGenerator, List, Optional

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.api.errors import register_exception_handlers
from app.api.routes import compose, forms, market_data, messages
from app.domain.errors import MarketDataError, PublisherError
from app.domain.services.access_gate import AccessConfig, AccessGate
from app.domain.services.form_session import FormRegistry

AUTHORIZED_EMAIL = "trader@example.com"
TEST_EXPIRY = "11 Nov"


class FakeDispatcher:
    """Records sent messages instead of calling Telegram"""

    def __init__(self):
        self.sent: List[str] = []
        self.error: Optional[PublisherError] = None
        self.configured = True

    async def send(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(text)


class FakePreOpenClient:
    def __init__(self, payload: Optional[dict] = None, error: Optional[MarketDataError] = None):
        self.payload = payload or {"data": [], "advances": 0}
        self.error = error
        self.keys: List[str] = []

    async def fetch(self, key: str = "NIFTY") -> dict:
        self.keys.append(key)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture()
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture()
def preopen_client() -> FakePreOpenClient:
    return FakePreOpenClient()


@pytest.fixture()
def app(dispatcher, preopen_client) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(messages.router, prefix="/api", tags=["Dispatch"])
    app.include_router(market_data.router, prefix="/api", tags=["Market Data"])
    app.include_router(compose.router, prefix="/api/v1/compose", tags=["Compose"])
    app.include_router(forms.router, prefix="/api/v1/forms", tags=["Forms"])

    app.state.access_gate = AccessGate(
        AccessConfig.from_csv(f"{AUTHORIZED_EMAIL}, ops@example.com")
    )
    app.state.dispatcher = dispatcher
    app.state.preopen_client = preopen_client
    app.state.form_registry = FormRegistry(expiry_provider=lambda: TEST_EXPIRY)
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def auth_headers() -> dict:
    return {"X-Forwarded-Email": AUTHORIZED_EMAIL, "X-Forwarded-User": "Trader"}


@pytest.fixture()
def stranger_headers() -> dict:
    return {"X-Forwarded-Email": "someone@else.com"}
