"""
Stockbit API Client - async HTTP access to the exodus.stockbit.com endpoints
used by the bandar target ranking.

Endpoints:
1. Market Detector: GET /marketdetectors/{symbol}                          (broker summary)
2. Orderbook:       GET /company-price-feed/v2/orderbook/companies/{symbol}
3. Watchlist:       GET /watchlist/{group_id}

Responses are returned as decoded JSON; shape handling lives in
modules.stockbit_payloads. HTTP errors and timeouts are raised as httpx
exceptions and never retried here.
"""
import logging
from typing import Any, Dict, Optional

import httpx

import config

logger = logging.getLogger(__name__)


class StockbitApiClient:
    """HTTP client for Stockbit exodus APIs (Bearer token auth)."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token if token is not None else config.STOCKBIT_TOKEN
        self.base_url = (base_url or config.STOCKBIT_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.STOCKBIT_TIMEOUT
        self._transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "StockbitApiClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _ensure_client(self):
        """Create HTTP client if not exists."""
        if self.client is None:
            headers = {
                "User-Agent": config.USER_AGENT,
                "Accept": "application/json",
            }
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            else:
                logger.warning("STOCKBIT_TOKEN is not set; requests will likely be rejected")
            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 15.0)),
                follow_redirects=True,
                headers=headers,
                transport=self._transport,
            )

    async def close(self):
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        await self._ensure_client()
        resp = await self.client.get(path, params=params)
        resp.raise_for_status()
        return resp.json()

    # ==================== MARKET DETECTOR ====================

    async def get_market_detector(self, symbol: str, from_date: str, to_date: str) -> Any:
        """
        Fetch broker summary (net buyers/sellers) for a date range.

        Args:
            symbol: Stock ticker (e.g. 'BBCA')
            from_date: Start date, YYYY-MM-DD
            to_date: End date, YYYY-MM-DD
        """
        params = {
            "from": from_date,
            "to": to_date,
            "transaction_type": "TRANSACTION_TYPE_NET",
            "market_board": "MARKET_BOARD_REGULER",
            "investor_type": "INVESTOR_TYPE_ALL",
            "limit": 25,
        }
        logger.debug(f"Market detector {symbol} {from_date}..{to_date}")
        return await self._get_json(f"/marketdetectors/{symbol.upper()}", params=params)

    # ==================== ORDERBOOK ====================

    async def get_orderbook(self, symbol: str) -> Any:
        """Fetch the live orderbook snapshot for a ticker."""
        return await self._get_json(f"/company-price-feed/v2/orderbook/companies/{symbol.upper()}")

    # ==================== WATCHLIST ====================

    async def get_watchlist(self, group_id: str) -> Any:
        """Fetch the items of one watchlist group."""
        return await self._get_json(f"/watchlist/{group_id}", params={"page": 1, "limit": 500})
