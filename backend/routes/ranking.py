"""Bandar target ranking routes (watchlist group or static IHSG index)."""
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import logging
import numpy as np

from modules.index_constituents import list_indices
from modules.ranking_orchestrator import run_ranking
from modules.stockbit_api_client import StockbitApiClient

router = APIRouter(prefix="/api", tags=["ranking"])

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "ValidationError": 400,
    "UpstreamUnavailableError": 502,
}


def sanitize_data(data):
    """Recursively sanitize data to replace NaN/Inf values with None for JSON compliance."""
    if isinstance(data, dict):
        return {k: sanitize_data(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [sanitize_data(item) for item in data]
    elif isinstance(data, float):
        if np.isnan(data) or np.isinf(data):
            return None
        return data
    return data


@router.get("/ranking")
async def get_ranking(
    mode: str = Query("watchlist", description="watchlist, or a static index key (idx30, lq45, idx80)"),
    group_id: Optional[str] = Query(None, alias="groupId", description="Stockbit watchlist group id (watchlist mode)"),
    from_date: Optional[str] = Query(None, alias="fromDate", description="Broker summary start date (YYYY-MM-DD)"),
    to_date: Optional[str] = Query(None, alias="toDate", description="Broker summary end date (YYYY-MM-DD)"),
):
    """
    Rank symbols by realistic Top% (closeness of price to the bandar target).

    Individual symbol failures stay in the list with an ``error`` and Top% = -999;
    only invalid parameters or an unavailable watchlist fail the whole request.
    """
    async with StockbitApiClient() as client:
        result = await run_ranking(client, mode, group_id, from_date, to_date)

    if not result["success"]:
        status_code = ERROR_STATUS.get(result.get("error_type"), 500)
        if status_code >= 500:
            logger.error(f"Ranking API error: {result['error']}")
        return JSONResponse(status_code=status_code, content=result)

    return sanitize_data(result)


@router.get("/ranking/indices")
async def get_ranking_indices():
    """List the static indices usable as ranking mode."""
    return {"indices": list_indices()}
