import pytest

from modules.ranking_errors import UpstreamUnavailableError
from modules.ranking_models import WatchlistFlag
from modules.stockbit_payloads import (
    extract_broker_records,
    extract_watchlist_items,
    parse_lot,
    to_number,
    unwrap_orderbook,
)

WATCHLIST_ITEMS = [
    {"symbol": "bbca", "flag": "OK", "sector": "Finance", "last_price": 9875},
    {"company_code": "ANTM", "flag": "ng"},
    {"symbol": "GOTO", "flag": "whatever", "last_price": "68"},
    {"flag": "OK"},
    "garbage",
]


@pytest.mark.parametrize(
    "raw",
    [
        {"data": {"result": WATCHLIST_ITEMS}},
        {"data": WATCHLIST_ITEMS},
        {"result": WATCHLIST_ITEMS},
        WATCHLIST_ITEMS,
        {"success": True, "data": {"data": {"result": WATCHLIST_ITEMS}}},
        {"success": True, "data": {"data": WATCHLIST_ITEMS}},
    ],
)
def test_watchlist_shapes_normalize_to_same_requests(raw):
    requests = extract_watchlist_items(raw)

    assert [r.symbol for r in requests] == ["BBCA", "ANTM", "GOTO"]
    assert requests[0].flag is WatchlistFlag.OK
    assert requests[0].sector == "Finance"
    assert requests[0].last_known_price == 9875
    assert requests[1].flag is WatchlistFlag.NG
    assert requests[1].last_known_price is None
    assert requests[2].flag is WatchlistFlag.UNSET
    assert requests[2].last_known_price == 68


def test_watchlist_failure_envelope_raises_upstream_error():
    with pytest.raises(UpstreamUnavailableError, match="token expired"):
        extract_watchlist_items({"success": False, "error": "token expired"})


def test_watchlist_unknown_shape_is_empty():
    assert extract_watchlist_items({"message": "ok"}) == []
    assert extract_watchlist_items(None) == []


def test_broker_record_shapes():
    records = [{"netbs_broker_code": "YP"}]
    assert extract_broker_records(records) == records
    assert extract_broker_records({"brokers_buy": records}) == records
    assert extract_broker_records({"broker_summary": {"brokers_buy": records}}) == records
    assert extract_broker_records({"data": {"broker_summary": {"brokers_buy": records}}}) == records
    assert extract_broker_records({"data": {}}) == []


def test_unwrap_orderbook():
    body = {"close": 100}
    assert unwrap_orderbook({"data": body}) is body
    assert unwrap_orderbook(body) is body
    assert unwrap_orderbook(None) == {}


@pytest.mark.parametrize(
    "value,expected",
    [("1,234,500", 1234500), (" 42 ", 42), ("12.9", 12), (7, 7), (None, 0), ("", 0), ("abc", 0), (float("nan"), 0)],
)
def test_parse_lot(value, expected):
    assert parse_lot(value) == expected


def test_to_number():
    assert to_number("1,005.5") == 1005.5
    assert to_number(None) == 0
    assert to_number("inf") == 0
    assert to_number(True) == 0
    assert to_number([1]) == 0


@pytest.mark.parametrize("sector", [12, {"name": "Energy"}, ["Energy"], "  ", None])
def test_watchlist_non_string_sector_is_dropped(sector):
    requests = extract_watchlist_items({"data": {"result": [{"symbol": "AAA", "sector": sector}]}})

    assert len(requests) == 1
    assert requests[0].symbol == "AAA"
    assert requests[0].sector is None


def test_watchlist_sector_is_stripped():
    requests = extract_watchlist_items([{"symbol": "AAA", "sector": " Energy "}])
    assert requests[0].sector == "Energy"
