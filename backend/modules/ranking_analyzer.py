"""
Symbol Analyzer - Top% for a single emiten.

Fetches broker summary and orderbook concurrently, then runs
broker aggregation -> orderbook reading -> target calculation.
"""
import asyncio
import logging

from modules.broker_aggregator import get_top_broker
from modules.orderbook_reader import read_orderbook
from modules.ranking_models import RankingItem, WatchlistFlag
from modules.target_calculator import calculate_targets, gain_percent

logger = logging.getLogger(__name__)


async def analyze_symbol(
    client,
    symbol: str,
    from_date: str,
    to_date: str,
    flag: WatchlistFlag = WatchlistFlag.UNSET,
    sector=None,
) -> RankingItem:
    """
    Analyze one symbol.

    ``client`` provides ``get_market_detector(symbol, from_date, to_date)`` and
    ``get_orderbook(symbol)``. Both fetches settle before anything is computed;
    the first failure is re-raised for the caller to turn into a failure row.
    """
    detector_data, orderbook_data = await asyncio.gather(
        client.get_market_detector(symbol, from_date, to_date),
        client.get_orderbook(symbol),
        return_exceptions=True,
    )
    for outcome in (detector_data, orderbook_data):
        if isinstance(outcome, BaseException):
            raise outcome

    broker = get_top_broker(detector_data)
    book = read_orderbook(orderbook_data)

    targets = calculate_targets(
        broker.average_price,
        broker.net_accumulated_volume,
        book.best_offer_above,
        book.best_bid_below,
        book.total_bid_volume_lots,
        book.total_offer_volume_lots,
        book.last_price,
    )

    logger.debug(
        f"{symbol.upper()}: bandar={broker.broker_code} avg={broker.average_price} "
        f"target={targets.target_realistic}/{targets.target_max} top%={targets.proximity_percent_realistic}"
    )

    return RankingItem(
        symbol=symbol.upper(),
        price=book.last_price,
        average_accumulator_price=broker.average_price,
        target_realistic=targets.target_realistic,
        target_max=targets.target_max,
        proximity_percent_realistic=targets.proximity_percent_realistic,
        proximity_percent_max=targets.proximity_percent_max,
        gain_percent_realistic=gain_percent(targets.target_realistic, book.last_price),
        sector=sector,
        flag=WatchlistFlag.parse(flag).as_optional(),
    )
