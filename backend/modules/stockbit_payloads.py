"""
Normalization of raw Stockbit responses.

Stockbit (and the proxies in front of it) wrap the same payload in different
envelopes depending on the endpoint and version. Every accepted shape is listed
in the docstring of its adapter; anything else is treated as "no data".
"""
import math
import re
from typing import Any, Dict, List

from modules.ranking_errors import UpstreamUnavailableError
from modules.ranking_models import SymbolRequest, WatchlistFlag

_LOT_PATTERN = re.compile(r"^-?\d+")


def to_number(value: Any) -> float:
    """Parse a loosely-typed numeric field. Missing, invalid or non-finite input gives 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.replace(",", "").strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_lot(value: Any) -> int:
    """Parse a lot count such as "1,234,500" into an int (0 when unparseable)."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else 0
    match = _LOT_PATTERN.match(str(value).replace(",", "").strip())
    return int(match.group(0)) if match else 0


def extract_broker_records(raw: Any) -> List[Dict]:
    """
    Pull the ranked broker list out of a market detector response.

    Accepted shapes:
        [ {...}, ... ]                                          bare record list
        {"brokers_buy": [...]}                                  broker summary
        {"broker_summary": {"brokers_buy": [...]}}              market detector body
        {"data": <any of the above>}                            API envelope
    """
    if isinstance(raw, list):
        return [r for r in raw if isinstance(r, dict)]
    if not isinstance(raw, dict):
        return []
    if "data" in raw:
        return extract_broker_records(raw["data"])
    if "broker_summary" in raw:
        return extract_broker_records(raw["broker_summary"])
    return extract_broker_records(raw.get("brokers_buy") or [])


def unwrap_orderbook(raw: Any) -> Dict:
    """
    Return the order book body.

    Accepted shapes:
        {"data": {"close": ..., "bid": [...], "offer": [...], ...}}   enveloped
        {"close": ..., "bid": [...], "offer": [...], ...}             bare
    """
    if not isinstance(raw, dict):
        return {}
    body = raw.get("data")
    if isinstance(body, dict):
        return body
    return raw


def extract_watchlist_items(raw: Any) -> List[SymbolRequest]:
    """
    Normalize a watchlist group response into symbol requests.

    Accepted shapes:
        {"success": false, "error": "..."}       provider failure -> UpstreamUnavailableError
        {"success": true, "data": <payload>}     provider envelope around a payload
        {"data": {"result": [...]}}              Stockbit watchlist payload
        {"data": [...]}                          older Stockbit payload
        {"result": [...]}                        payload without envelope
        [ {...}, ... ]                           bare item list

    Each item names its ticker in ``symbol`` or ``company_code``; items without
    one are skipped.
    """
    if isinstance(raw, dict) and raw.get("success") is False:
        raise UpstreamUnavailableError(raw.get("error") or "Failed to fetch watchlist")

    items = _find_watchlist_list(raw)
    requests = []
    for item in items:
        if not isinstance(item, dict):
            continue
        symbol = item.get("symbol") or item.get("company_code")
        if not symbol or not isinstance(symbol, str):
            continue
        last_price = item.get("last_price")
        requests.append(SymbolRequest(
            symbol=symbol.strip().upper(),
            flag=WatchlistFlag.parse(item.get("flag")),
            sector=_clean_sector(item.get("sector")),
            last_known_price=to_number(last_price) if last_price is not None else None,
        ))
    return requests


def _clean_sector(value: Any):
    """Sector label as a stripped string; non-string values are dropped."""
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _find_watchlist_list(raw: Any) -> List:
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, dict):
        return []
    if isinstance(raw.get("result"), list):
        return raw["result"]
    if "data" in raw:
        return _find_watchlist_list(raw["data"])
    return []
