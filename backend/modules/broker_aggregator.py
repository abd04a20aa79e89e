"""
Bandar detection from Stockbit broker summary.

The market detector lists net buyers ranked by significance. The first one with a
usable average price is taken as the dominant accumulator (bandar).
"""
from typing import Any

from modules.ranking_errors import NoBrokerDataError
from modules.ranking_models import BrokerSummary
from modules.stockbit_payloads import extract_broker_records, to_number


def get_top_broker(raw: Any) -> BrokerSummary:
    """
    Return the bandar average price and accumulated lots.

    Raises:
        NoBrokerDataError: the response holds no broker with a positive average price.
    """
    records = extract_broker_records(raw)
    if not records:
        raise NoBrokerDataError()

    for record in records:
        avg_price = round(to_number(record.get("netbs_buy_avg_price")))
        if avg_price <= 0:
            continue
        return BrokerSummary(
            broker_code=record.get("netbs_broker_code"),
            average_price=avg_price,
            net_accumulated_volume=abs(round(to_number(record.get("blot")))),
        )

    raise NoBrokerDataError("No broker with a valid average price")
