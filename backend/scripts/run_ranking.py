import os
import sys
import asyncio
import argparse
import logging
from datetime import datetime

# Add parent directory to sys.path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import config
from modules.ranking_orchestrator import run_ranking
from modules.stockbit_api_client import StockbitApiClient


def _print_ranking(result: dict):
    print("\n" + "=" * 78)
    print(f"BANDAR TARGET RANKING ({result['mode']}) - {result['total']} emiten")
    print("=" * 78)
    print(f"{'#':>3}  {'Emiten':<7} {'Harga':>8} {'Avg Bandar':>10} {'Target R':>9} {'Target M':>9} {'Top% R':>8} {'Gain%':>7}")
    print("-" * 78)
    for i, row in enumerate(result["data"], start=1):
        if row.get("error"):
            print(f"{i:>3}  {row['symbol']:<7} {row['price']:>8.0f}  [!] {row['error']}")
            continue
        print(
            f"{i:>3}  {row['symbol']:<7} {row['price']:>8.0f} {row['average_accumulator_price']:>10.0f} "
            f"{row['target_realistic']:>9.0f} {row['target_max']:>9.0f} "
            f"{row['proximity_percent_realistic']:>8.1f} {row['gain_percent_realistic']:>7.1f}"
        )
    print("=" * 78)


async def ranking_action(mode, group_id, from_date, to_date, batch_size):
    async with StockbitApiClient() as client:
        result = await run_ranking(client, mode, group_id, from_date, to_date, batch_size=batch_size)

    if not result["success"]:
        print(f"[!] {result.get('error_type')}: {result['error']}")
        return 1

    _print_ranking(result)
    return 0


def build_parser() -> argparse.ArgumentParser:
    today = datetime.now().strftime('%Y-%m-%d')
    parser = argparse.ArgumentParser(description="Bandar Target Ranking")
    parser.add_argument("--mode", default="watchlist", help="watchlist, idx30, lq45 or idx80")
    parser.add_argument("--group-id", help="Stockbit watchlist group id (watchlist mode)")
    parser.add_argument("--from-date", default=today, help="Start date YYYY-MM-DD (defaults to today)")
    parser.add_argument("--to-date", default=today, help="End date YYYY-MM-DD (defaults to today)")
    parser.add_argument("--batch-size", type=int, default=config.RANKING_BATCH_SIZE, help="Concurrent symbols per batch (RANKING_BATCH_SIZE)")
    parser.add_argument("--verbose", action="store_true", help="Log per-symbol progress")
    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()
    if args.mode == "watchlist" and not args.group_id:
        parser.error("--group-id is required for watchlist mode.")
    if args.batch_size < 1:
        parser.error("--batch-size must be at least 1.")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    sys.exit(asyncio.run(ranking_action(args.mode, args.group_id, args.from_date, args.to_date, args.batch_size)))


if __name__ == "__main__":
    main()
