"""Paged reader for the article table that feeds the shoe pipeline."""

import logging
import time
from typing import Any, Dict, Iterator, Mapping, Optional, Protocol, Sequence

import httpx

from services.shoe_extraction.models import Article

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
RATE_LIMIT_RETRIES = 3
RATE_LIMIT_WAIT = 30.0

ID_FIELDS = ("ID", "Id", "id", "Article ID")
TITLE_FIELDS = ("Title", "Headline", "Name")
CONTENT_FIELDS = ("Content", "Text", "Article", "Body")
DATE_FIELDS = ("Published", "Date", "Created", "Time created")
LINK_FIELDS = ("Article link", "URL", "Link", "Source")

# Oldest first, so a limited run never skips rows older than the saved position.
SORT_FIELD = "Time created"


class ArticleSource(Protocol):
    def fetch_articles(self, since: Optional[str] = None, limit: Optional[int] = None) -> Iterator[Article]:
        ...


def _pick(fields: Mapping[str, Any], names: Sequence[str]) -> Any:
    for name in names:
        value = fields.get(name)
        if value not in (None, ""):
            return value
    return None


def map_record(row: Mapping[str, Any]) -> Optional[Article]:
    fields = row.get("fields") or {}
    article_id = _pick(fields, ID_FIELDS)
    title = _pick(fields, TITLE_FIELDS)
    content = _pick(fields, CONTENT_FIELDS)
    if article_id is None or title is None or content is None:
        logger.warning(f"Skipping record {row.get('id')}: missing ID, title or content")
        return None
    return Article(
        article_id=article_id,
        record_id=str(row.get("id") or article_id),
        title=str(title),
        content=content,
        date=_pick(fields, DATE_FIELDS),
        source_link=_pick(fields, LINK_FIELDS),
        source_position=fields.get("Time created") or row.get("createdTime"),
    )


class AirtableArticleSource:
    """Reads articles page by page, optionally only those created after a position."""

    def __init__(
        self,
        api_key: str,
        base_id: str,
        table_name: str = "Articles",
        api_base: str = "https://api.airtable.com/v0",
        page_size: int = 100,
        client: Optional[httpx.Client] = None,
        rate_limit_wait: float = RATE_LIMIT_WAIT,
    ):
        self.url = f"{api_base.rstrip('/')}/{base_id}/{table_name}"
        self.page_size = page_size
        self.rate_limit_wait = rate_limit_wait
        self._client = client or httpx.Client(timeout=REQUEST_TIMEOUT)
        self._headers = {"Authorization": f"Bearer {api_key}"}

    @classmethod
    def from_settings(cls, app_settings) -> "AirtableArticleSource":
        if not app_settings.airtable_api_key or not app_settings.airtable_base_id:
            raise ValueError("AIRTABLE_API_KEY and AIRTABLE_BASE_ID must be set")
        return cls(
            api_key=app_settings.airtable_api_key,
            base_id=app_settings.airtable_base_id,
            table_name=app_settings.airtable_table_name,
            api_base=app_settings.airtable_api_base,
            page_size=app_settings.airtable_page_size,
        )

    def _params(self, since: Optional[str], offset: Optional[str]) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "pageSize": self.page_size,
            "sort[0][field]": SORT_FIELD,
            "sort[0][direction]": "asc",
        }
        if since:
            params["filterByFormula"] = f"IS_AFTER(CREATED_TIME(), '{since}')"
        if offset:
            params["offset"] = offset
        return params

    def _get_page(self, params: Dict[str, Any]) -> Dict[str, Any]:
        for attempt in range(RATE_LIMIT_RETRIES):
            response = self._client.get(self.url, params=params, headers=self._headers)
            if response.status_code == 429 and attempt < RATE_LIMIT_RETRIES - 1:
                logger.warning(f"Rate limited, waiting {self.rate_limit_wait}s before retry")
                time.sleep(self.rate_limit_wait)
                continue
            response.raise_for_status()
            return response.json()
        return {}

    def fetch_articles(self, since: Optional[str] = None, limit: Optional[int] = None) -> Iterator[Article]:
        offset: Optional[str] = None
        yielded = 0
        while True:
            page = self._get_page(self._params(since, offset))
            for row in page.get("records", []):
                article = map_record(row)
                if article is None:
                    continue
                yield article
                yielded += 1
                if limit is not None and yielded >= limit:
                    return
            offset = page.get("offset")
            if not offset:
                return

    def close(self) -> None:
        self._client.close()
