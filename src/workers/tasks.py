import logging
from typing import Optional

from celery import Task
from sqlalchemy.orm import Session

from config import settings
from models.database import SessionLocal
from services.content_source import AirtableArticleSource
from services.shoe_extraction.llm_extractor import build_llm_extractor
from workers.celery_app import celery_app
from workers.pipeline import run_pipeline

logger = logging.getLogger(__name__)


class DatabaseTask(Task):
    _db: Session | None = None

    @property
    def db(self) -> Session:
        if self._db is None:
            self._db = SessionLocal()
        return self._db

    def after_return(self, *args, **kwargs):
        if self._db is not None:
            self._db.close()
            self._db = None


@celery_app.task(base=DatabaseTask, bind=True, name="workers.tasks.sync_articles")
def sync_articles(self: DatabaseTask, limit: Optional[int] = None, dry_run: bool = False) -> dict:
    logger.info(f"Starting article sync: limit={limit}, dry_run={dry_run}")
    source = AirtableArticleSource.from_settings(settings)
    try:
        summary = run_pipeline(
            self.db,
            source,
            llm_extractor=build_llm_extractor(settings),
            limit=limit,
            dry_run=dry_run,
        )
    except Exception as e:
        logger.error(f"Article sync failed: {e}", exc_info=True)
        self.db.rollback()
        raise
    finally:
        source.close()
    return summary.as_dict()
