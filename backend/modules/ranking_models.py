"""
Pydantic models shared by the ranking pipeline.

All models are frozen: a row is never mutated once it has been placed in a
result list.
"""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

# Out-of-domain Top% used to push failed rows to the bottom of the ranking
SENTINEL_FAILURE = -999


class WatchlistFlag(str, Enum):
    OK = "OK"
    NG = "NG"
    NEUTRAL = "Neutral"
    UNSET = "UNSET"

    @classmethod
    def parse(cls, value: Any) -> "WatchlistFlag":
        """Map a loosely-typed watchlist flag onto the enum. Unknown values are UNSET."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNSET
        normalized = value.strip().upper()
        for flag in (cls.OK, cls.NG, cls.NEUTRAL):
            if flag.value.upper() == normalized:
                return flag
        return cls.UNSET

    def as_optional(self) -> Optional["WatchlistFlag"]:
        return None if self is WatchlistFlag.UNSET else self


class SymbolRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    flag: WatchlistFlag = WatchlistFlag.UNSET
    sector: Optional[str] = None
    last_known_price: Optional[float] = None


class BrokerSummary(BaseModel):
    """Dominant accumulator (bandar) for a date range."""
    model_config = ConfigDict(frozen=True)

    broker_code: Optional[str] = None
    average_price: float
    net_accumulated_volume: float


class OrderBookSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    last_price: float = 0
    best_offer_above: float = 0
    best_bid_below: float = 0
    total_bid_volume_lots: float = 0
    total_offer_volume_lots: float = 0


class TargetResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_realistic: float
    target_max: float
    proximity_percent_realistic: float
    proximity_percent_max: float

    # Intermediate values, kept for display/debugging
    tick_size: int = 0
    board_levels: float = 0
    average_queue_per_level: float = 0
    base_markup: float = 0
    pressure_levels: float = 0


class RankingItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    price: float = 0
    average_accumulator_price: float = 0
    target_realistic: float = 0
    target_max: float = 0
    proximity_percent_realistic: float = 0
    proximity_percent_max: float = 0
    gain_percent_realistic: float = 0
    sector: Optional[str] = None
    flag: Optional[WatchlistFlag] = None
    error: Optional[str] = None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    @classmethod
    def failure(cls, request: SymbolRequest, message: str) -> "RankingItem":
        """Build the sentinel row for a symbol whose analysis failed."""
        return cls(
            symbol=request.symbol.upper(),
            price=request.last_known_price or 0,
            proximity_percent_realistic=SENTINEL_FAILURE,
            proximity_percent_max=SENTINEL_FAILURE,
            sector=request.sector,
            flag=request.flag.as_optional(),
            error=message,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
