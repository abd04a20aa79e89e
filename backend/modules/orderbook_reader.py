"""Order book reader: best levels and total queue from a Stockbit orderbook snapshot."""
from typing import Any, List

from modules.ranking_errors import MalformedOrderBookError
from modules.ranking_models import OrderBookSnapshot
from modules.stockbit_payloads import parse_lot, to_number, unwrap_orderbook

# Order book totals are reported in lots; downstream works in hundreds of lots
LOT_SCALE = 100


def _level_prices(levels: Any) -> List[float]:
    if not isinstance(levels, list):
        return []
    prices = []
    for level in levels:
        if isinstance(level, dict):
            price = to_number(level.get("price"))
            if price > 0:
                prices.append(price)
    return prices


def read_orderbook(raw: Any) -> OrderBookSnapshot:
    """
    Extract last price, outermost offer/bid levels and total queue volume.

    Offer side falls back to the day's high when no levels are shown (e.g. ARA),
    bid side falls back to 0 (e.g. ARB). Malformed numbers degrade to 0; only a
    response that is not an object at all raises MalformedOrderBookError.
    """
    if not isinstance(raw, dict):
        raise MalformedOrderBookError(f"Unexpected order book response: {type(raw).__name__}")

    body = unwrap_orderbook(raw)

    offer_prices = _level_prices(body.get("offer"))
    bid_prices = _level_prices(body.get("bid"))

    best_offer_above = max(offer_prices) if offer_prices else to_number(body.get("high"))
    best_bid_below = min(bid_prices) if bid_prices else 0.0

    totals = body.get("total_bid_offer")
    if not isinstance(totals, dict):
        totals = {}
    bid_total = totals.get("bid") if isinstance(totals.get("bid"), dict) else {}
    offer_total = totals.get("offer") if isinstance(totals.get("offer"), dict) else {}

    return OrderBookSnapshot(
        last_price=to_number(body.get("close")),
        best_offer_above=best_offer_above,
        best_bid_below=best_bid_below,
        total_bid_volume_lots=parse_lot(bid_total.get("lot")) / LOT_SCALE,
        total_offer_volume_lots=parse_lot(offer_total.get("lot")) / LOT_SCALE,
    )
