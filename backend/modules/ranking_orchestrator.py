"""
Batch Ranking Orchestrator.

Resolves the symbol universe (a Stockbit watchlist group or a static IHSG index),
analyzes every symbol in throttled batches and sorts the rows by realistic Top%.
One symbol failing never aborts its batch or the run; it becomes a sentinel row
that sorts last.
"""
import asyncio
import logging
from typing import Dict, List, Mapping, Optional

import config
from modules.index_constituents import StaticIndex, load_indices
from modules.ranking_analyzer import analyze_symbol
from modules.ranking_errors import UpstreamUnavailableError, ValidationError
from modules.ranking_models import RankingItem, SymbolRequest
from modules.stockbit_payloads import extract_watchlist_items

logger = logging.getLogger(__name__)

WATCHLIST_MODE = "watchlist"
DEFAULT_ERROR_MESSAGE = "Failed to fetch data"


def sort_results(results: List[RankingItem]) -> List[RankingItem]:
    """Ascending by realistic Top%; failed rows last, in their original order."""
    def _key(item: RankingItem):
        if item.is_failure:
            return (1, 0.0)
        return (0, item.proximity_percent_realistic)

    return sorted(results, key=_key)


class RankingOrchestrator:
    def __init__(
        self,
        client,
        batch_size: int = config.RANKING_BATCH_SIZE,
        indices: Optional[Mapping[str, StaticIndex]] = None,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.client = client
        self.batch_size = batch_size
        self.indices = indices if indices is not None else load_indices()

    def available_modes(self) -> List[str]:
        return [WATCHLIST_MODE] + list(self.indices.keys())

    def validate(self, mode: str, group_id: Optional[str], from_date: Optional[str], to_date: Optional[str]):
        """Reject the request before any upstream call is made."""
        if not from_date or not to_date:
            raise ValidationError("Missing required params: fromDate, toDate")
        if mode == WATCHLIST_MODE:
            if not group_id:
                raise ValidationError("groupId is required for watchlist mode")
        elif mode not in self.indices:
            raise ValidationError(
                f"Unknown mode: {mode}. Use {', '.join(self.available_modes())}."
            )

    async def resolve_universe(self, mode: str, group_id: Optional[str] = None) -> List[SymbolRequest]:
        if mode != WATCHLIST_MODE:
            return [SymbolRequest(symbol=symbol) for symbol in self.indices[mode].stocks]

        try:
            payload = await self.client.get_watchlist(group_id)
        except UpstreamUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Watchlist fetch failed for group {group_id}: {e}")
            raise UpstreamUnavailableError(f"Failed to fetch watchlist: {e}") from e

        return extract_watchlist_items(payload)

    async def batch_analyze(self, requests: List[SymbolRequest], from_date: str, to_date: str) -> List[RankingItem]:
        """
        Analyze symbols in sequential batches of ``batch_size``.

        Within a batch every analysis runs concurrently and each outcome is
        captured independently; the next batch starts once all have settled.
        """
        results: List[RankingItem] = []
        total = len(requests)

        for start in range(0, total, self.batch_size):
            batch = requests[start:start + self.batch_size]
            outcomes = await asyncio.gather(
                *[
                    analyze_symbol(self.client, item.symbol, from_date, to_date, item.flag, item.sector)
                    for item in batch
                ],
                return_exceptions=True,
            )

            for item, outcome in zip(batch, outcomes):
                if isinstance(outcome, RankingItem):
                    results.append(outcome)
                    continue
                if not isinstance(outcome, Exception):
                    # CancelledError and friends must not be turned into rows
                    raise outcome
                message = str(outcome) or DEFAULT_ERROR_MESSAGE
                logger.warning(f"Ranking {item.symbol} failed: {type(outcome).__name__}: {message}")
                results.append(RankingItem.failure(item, message))

            logger.info(f"Ranking progress: {min(start + self.batch_size, total)}/{total}")

        return results

    async def rank(self, mode: str, group_id: Optional[str], from_date: str, to_date: str) -> List[RankingItem]:
        mode = (mode or config.DEFAULT_RANKING_MODE).strip().lower()
        self.validate(mode, group_id, from_date, to_date)

        requests = await self.resolve_universe(mode, group_id)
        if not requests:
            logger.info(f"Ranking universe for mode={mode} is empty")
            return []

        logger.info(f"Ranking {len(requests)} symbols (mode={mode}, {from_date}..{to_date})")
        results = await self.batch_analyze(requests, from_date, to_date)
        return sort_results(results)


async def run_ranking(
    client,
    mode: Optional[str],
    group_id: Optional[str],
    from_date: Optional[str],
    to_date: Optional[str],
    batch_size: int = config.RANKING_BATCH_SIZE,
    indices: Optional[Mapping[str, StaticIndex]] = None,
) -> Dict:
    """
    Run one ranking request and wrap the outcome in the API envelope.

    Returns ``{"success": True, "data", "total", "mode"}`` or
    ``{"success": False, "error", "error_type"}``.
    """
    mode = (mode or config.DEFAULT_RANKING_MODE).strip().lower()
    try:
        orchestrator = RankingOrchestrator(client, batch_size=batch_size, indices=indices)
        results = await orchestrator.rank(mode, group_id, from_date, to_date)
    except ValidationError as e:
        return {"success": False, "error": str(e), "error_type": "ValidationError"}
    except UpstreamUnavailableError as e:
        return {"success": False, "error": str(e), "error_type": "UpstreamUnavailableError"}
    except Exception as e:
        logger.exception(f"Ranking error (mode={mode}): {e}")
        return {"success": False, "error": str(e) or "Unknown error", "error_type": "UnexpectedError"}

    return {
        "success": True,
        "data": [item.to_dict() for item in results],
        "total": len(results),
        "mode": mode,
    }
