"""Command line entry point for the shoe sync pipeline."""

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT))

from config import settings
from models import init_db
from models.database import SessionLocal
from services.content_source import AirtableArticleSource
from services.pipeline_stats import collect_stats
from services.shoe_extraction.llm_extractor import build_llm_extractor
from workers.pipeline import run_pipeline

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEST_ARTICLE_LIMIT = 5


def _sync(limit, dry_run: bool, use_llm: bool, full: bool) -> dict:
    init_db()
    source = AirtableArticleSource.from_settings(settings)
    llm_extractor = build_llm_extractor(settings) if use_llm else None
    db = SessionLocal()
    try:
        summary = run_pipeline(
            db,
            source,
            llm_extractor=llm_extractor,
            limit=limit,
            dry_run=dry_run,
            use_watermark=not full,
        )
    finally:
        db.close()
        source.close()
    return summary.as_dict()


def cmd_sync(args) -> int:
    result = _sync(args.limit, args.dry_run, not args.no_llm, args.full)
    print(json.dumps(result, indent=2))
    return 0


def cmd_test(args) -> int:
    result = _sync(TEST_ARTICLE_LIMIT, True, not args.no_llm, False)
    print(json.dumps(result, indent=2))
    return 0


def cmd_stats(args) -> int:
    init_db()
    db = SessionLocal()
    try:
        print(json.dumps(collect_stats(db), indent=2))
    finally:
        db.close()
    return 0


def cmd_clear_db(args) -> int:
    from scripts.clear_data import clear_data, confirm

    if not args.yes and not confirm():
        print("Operation cancelled.")
        return 1
    removed = clear_data()
    print(json.dumps(removed, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ShoeLens article sync")
    sub = parser.add_subparsers(dest="command", required=True)

    sync = sub.add_parser("sync", help="Extract shoes from new articles")
    sync.add_argument("--limit", type=int, default=None, help="Process at most N articles")
    sync.add_argument("--dry-run", action="store_true", help="Extract without writing anything")
    sync.add_argument("--no-llm", action="store_true", help="Disable the LLM fallback")
    sync.add_argument("--full", action="store_true", help="Ignore the watermark and read every article")
    sync.set_defaults(func=cmd_sync)

    test = sub.add_parser("test", help=f"Dry run over {TEST_ARTICLE_LIMIT} articles")
    test.add_argument("--no-llm", action="store_true", help="Disable the LLM fallback")
    test.set_defaults(func=cmd_test)

    stats = sub.add_parser("stats", help="Show stored shoe counts and coverage")
    stats.set_defaults(func=cmd_stats)

    clear = sub.add_parser("clear-db", help="Delete extracted shoes and the watermark")
    clear.add_argument("--yes", action="store_true", help="Skip confirmation prompt")
    clear.set_defaults(func=cmd_clear_db)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ValueError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
