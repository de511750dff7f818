"""
Market Data routes - NSE pre-open passthrough.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_preopen_client
from app.infrastructure.market_data.nse_preopen import NSEPreOpenClient

router = APIRouter()


@router.get("/nifty-preopen")
async def nifty_preopen(client: NSEPreOpenClient = Depends(get_preopen_client)):
    """NIFTY pre-open snapshot, unmodified."""
    return await client.fetch("NIFTY")
