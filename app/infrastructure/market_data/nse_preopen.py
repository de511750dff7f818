"""
NSE Pre-Open Market Data
Read-only passthrough of the NIFTY pre-open snapshot
"""

import logging
from typing import Optional

import httpx

from app.config import settings
from app.domain.errors import MarketDataError

logger = logging.getLogger(__name__)


class NSEPreOpenClient:
    """
    Fetches the pre-open snapshot from nseindia.com.

    The JSON is returned as NSE sent it.
    """

    PREOPEN_PATH = "/api/market-data-pre-open"

    # Headers to mimic browser
    HEADERS = {
        'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36',
        'Accept': 'application/json, text/javascript, */*; q=0.01',
        'Accept-Language': 'en-US,en;q=0.9',
        'Referer': 'https://www.nseindia.com/',
    }

    def __init__(
        self,
        base_url: str = "https://www.nseindia.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self.session: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls) -> "NSEPreOpenClient":
        return cls(base_url=settings.NSE_BASE_URL, timeout=settings.NSE_TIMEOUT_SECONDS)

    async def _get_session(self) -> httpx.AsyncClient:
        """Get or create HTTP session with cookies"""
        if self.session is None:
            self.session = httpx.AsyncClient(
                headers=self.HEADERS,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
            # NSE API calls need the cookies set by the homepage
            try:
                await self.session.get(self.base_url)
            except httpx.HTTPError as e:
                logger.warning(f"Could not initialize NSE session: {e}")
        return self.session

    async def fetch(self, key: str = "NIFTY") -> dict:
        """
        Pre-open snapshot for an index key.

        Raises:
            MarketDataError: upstream status on a non-200 reply, 500 when the
                request itself failed
        """
        url = f"{self.base_url}{self.PREOPEN_PATH}"
        try:
            session = await self._get_session()
            response = await session.get(url, params={"key": key})
        except httpx.HTTPError as exc:
            logger.error(f"Error fetching {key} pre-open data: {exc}")
            raise MarketDataError("Server error fetching data", status_code=500) from exc

        if response.status_code != 200:
            logger.warning(f"NSE status {response.status_code} for {key} pre-open")
            raise MarketDataError("Failed to fetch from NSE", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            logger.error(f"NSE returned non-JSON pre-open payload for {key}")
            raise MarketDataError("Server error fetching data", status_code=500) from exc

    async def close(self) -> None:
        if self.session is not None:
            await self.session.aclose()
            self.session = None
