"""
Bandar Target Calculator (adimology).

Projects how far price can travel above the bandar's average cost:

    tick        = IDX price fraction for the bandar average
    levels      = (top offer - bottom bid) / tick          price levels on the board
    queue       = (total bid + total offer) / levels       average lots queued per level
    markup      = avg * 5%
    pressure    = bandar lots / queue                      levels the bandar can eat
    realistic   = avg + markup + pressure / 2 * tick
    max         = avg + markup + pressure * tick

Top% is the distance already covered from avg towards each target:
0 = at the bandar average, 100 = at the target.
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from modules.ranking_models import TargetResult

BASE_MARKUP_RATE = 0.05

# (upper bound exclusive, tick size) per IDX price fraction rules
TICK_SIZE_TABLE = (
    (200, 1),
    (500, 2),
    (2000, 5),
    (5000, 10),
)
MAX_TICK_SIZE = 25


def get_tick_size(price: float) -> int:
    """Return the IDX price fraction (fraksi harga) for a price."""
    for upper_bound, tick in TICK_SIZE_TABLE:
        if price < upper_bound:
            return tick
    return MAX_TICK_SIZE


def _safe_div(numerator: float, denominator: float) -> float:
    if not denominator or not math.isfinite(denominator):
        return 0.0
    result = numerator / denominator
    return result if math.isfinite(result) else 0.0


def _round_half_up(value: float, digits: int = 0) -> float:
    if not math.isfinite(value):
        return 0.0
    quantum = Decimal(1).scaleb(-digits)
    try:
        return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # beyond Decimal context precision; half-up is irrelevant at that scale
        return float(round(value, digits))


def proximity_percent(last_price: float, avg_price: float, target: float) -> float:
    """Top%: progress of last price from avg towards target, one decimal."""
    return _round_half_up(_safe_div(last_price - avg_price, target - avg_price) * 100, 1)


def gain_percent(target: float, last_price: float) -> float:
    """Upside from last price to target in percent; 0 when there is no price."""
    if last_price <= 0:
        return 0.0
    return _round_half_up(_safe_div(target - last_price, last_price) * 100, 1)


def calculate_targets(
    avg_accumulator_price: float,
    accumulated_volume: float,
    best_offer_above: float,
    best_bid_below: float,
    scaled_bid_volume: float,
    scaled_offer_volume: float,
    last_price: float,
) -> TargetResult:
    tick = get_tick_size(avg_accumulator_price)

    board_levels = _safe_div(best_offer_above - best_bid_below, tick)
    if board_levels <= 0:
        board_levels = 0.0

    average_queue = _safe_div(scaled_bid_volume + scaled_offer_volume, board_levels)
    base_markup = avg_accumulator_price * BASE_MARKUP_RATE
    pressure = _safe_div(abs(accumulated_volume), average_queue) if average_queue > 0 else 0.0

    target_realistic = _round_half_up(avg_accumulator_price + base_markup + (pressure / 2) * tick)
    target_max = _round_half_up(avg_accumulator_price + base_markup + pressure * tick)

    return TargetResult(
        target_realistic=target_realistic,
        target_max=target_max,
        proximity_percent_realistic=proximity_percent(last_price, avg_accumulator_price, target_realistic),
        proximity_percent_max=proximity_percent(last_price, avg_accumulator_price, target_max),
        tick_size=tick,
        board_levels=board_levels,
        average_queue_per_level=average_queue,
        base_markup=base_markup,
        pressure_levels=pressure,
    )
