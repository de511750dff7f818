"""
FastAPI Main Application
Trade alert composer and Telegram publisher
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from app.config import settings
from app.core.logging import setup_logging
from app.api.errors import register_exception_handlers
from app.domain.services.access_gate import AccessConfig, AccessGate
from app.domain.services.expiry_calculator import expiry_label
from app.domain.services.form_session import FormRegistry
from app.infrastructure.market_data.nse_preopen import NSEPreOpenClient
from app.infrastructure.telegram.dispatcher import TelegramDispatcher

# Configure logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Builds the collaborators routes depend on and closes them on shutdown
    """
    logger.info("=" * 60)
    logger.info("🚀 Starting OP Publisher")
    logger.info("=" * 60)

    access_config = AccessConfig.from_csv(settings.AUTHORIZED_USERS)
    app.state.access_gate = AccessGate(access_config)
    logger.info(f"🔐 Authorized users: {len(access_config.authorized_users)}")

    app.state.dispatcher = TelegramDispatcher.from_settings()
    if app.state.dispatcher.configured:
        logger.info("📱 Telegram dispatch configured")
    else:
        logger.warning("📱 Telegram dispatch not configured; sends will fail")

    app.state.preopen_client = NSEPreOpenClient.from_settings()
    app.state.form_registry = FormRegistry()

    logger.info(f"📅 Next weekly expiry: {expiry_label()}")
    logger.info(f"✅ API Server: http://{settings.API_HOST}:{settings.API_PORT}")

    yield

    logger.info("🛑 Shutting down OP Publisher...")
    await app.state.preopen_client.close()
    app.state.form_registry.clear()
    logger.info("👋 Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="OP Publisher",
    description="Compose NIFTY option trade alerts and publish them to Telegram",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health")
async def health_check():
    """Service health"""
    dispatcher = getattr(app.state, "dispatcher", None)
    gate = getattr(app.state, "access_gate", None)
    return {
        "status": "healthy",
        "service": "OP Publisher",
        "version": "1.0.0",
        "services": {
            "api": "running",
            "telegram": "configured" if dispatcher and dispatcher.configured else "not_configured",
        },
        "authorized_users": len(gate.config.authorized_users) if gate else 0,
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "OP Publisher",
        "version": "1.0.0",
        "docs": "/docs"
    }


# Import and include routers
from app.api.routes import compose, forms, market_data, messages

app.include_router(messages.router, prefix="/api", tags=["Dispatch"])
app.include_router(market_data.router, prefix="/api", tags=["Market Data"])
app.include_router(compose.router, prefix="/api/v1/compose", tags=["Compose"])
app.include_router(forms.router, prefix="/api/v1/forms", tags=["Forms"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
