"""Script to clear pipeline data from the database."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List

from sqlalchemy import inspect, text

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from models.database import engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

RESULT_TABLES = ["shoe_results_rejected", "shoe_results"]
STATE_TABLES = ["etl_state"]


def _tables_in_order(existing: Iterable[str], order: List[str]) -> List[str]:
    present = set(existing)
    return [table for table in order if table in present]


def clear_data(keep_watermark: bool = False, bind=None) -> dict:
    bind = bind or engine
    order = RESULT_TABLES if keep_watermark else RESULT_TABLES + STATE_TABLES
    removed = {}
    with bind.begin() as connection:
        tables = _tables_in_order(inspect(connection).get_table_names(), order)
        for table in tables:
            logger.info(f"  Deleting from {table}...")
            result = connection.execute(text(f"DELETE FROM {table}"))
            removed[table] = result.rowcount
    logger.info(f"Cleared {sum(removed.values())} rows from {len(removed)} tables")
    return removed


def confirm(prompt: str = "Are you sure you want to proceed? (yes/no): ") -> bool:
    try:
        answer = input(prompt)
    except EOFError:
        print("No terminal input available. Use --yes to skip confirmation.")
        return False
    return answer.strip().lower() == "yes"


def main() -> None:
    parser = argparse.ArgumentParser(description="Clear extracted shoes from the ShoeLens database")
    parser.add_argument(
        "--keep-watermark",
        action="store_true",
        default=False,
        help="Keep the sync watermark so the next run only reads new articles",
    )
    parser.add_argument("--yes", action="store_true", default=False, help="Skip confirmation prompt")
    args = parser.parse_args()

    print("This will delete all extracted shoes and rejection logs.")
    if not args.keep_watermark:
        print("The sync watermark is reset too; the next sync reads every article.")
    if not args.yes and not confirm():
        print("Operation cancelled.")
        sys.exit(1)

    clear_data(keep_watermark=args.keep_watermark)
    print("Data cleared.")


if __name__ == "__main__":
    main()
