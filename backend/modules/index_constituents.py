"""
Static IHSG index constituents (IDX30, LQ45, IDX80).
Loads membership from data/indices.json once and exposes it read-only.
"""
import json
import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Tuple

import config

logger = logging.getLogger(__name__)


class StaticIndex(NamedTuple):
    key: str
    label: str
    stocks: Tuple[str, ...]


def _dedupe(symbols: List[str]) -> Tuple[str, ...]:
    """Uppercase and drop repeated tickers, keeping first occurrence order."""
    seen = {}
    for symbol in symbols:
        code = str(symbol).strip().upper()
        if code and code not in seen:
            seen[code] = None
    return tuple(seen)


@lru_cache(maxsize=1)
def load_indices(path: str = config.INDICES_FILE) -> Mapping[str, StaticIndex]:
    """Load index tables from JSON (cached)."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    indices: Dict[str, StaticIndex] = {}
    for key, entry in data.get("indices", {}).items():
        key = key.strip().lower()
        indices[key] = StaticIndex(
            key=key,
            label=entry.get("label", key.upper()),
            stocks=_dedupe(entry.get("stocks", [])),
        )
    logger.info(f"Loaded {len(indices)} static indices from {path}")
    return MappingProxyType(indices)


def list_indices() -> List[Dict]:
    return [
        {"key": index.key, "label": index.label, "total": len(index.stocks)}
        for index in load_indices().values()
    ]
