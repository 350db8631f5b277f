from types import SimpleNamespace

import httpx
import pytest

from services.content_source import AirtableArticleSource, map_record


def row(record_id, article_id, title="Brooks Ghost 17 Review", content="Some text", created="2024-05-01T10:00:00.000Z"):
    fields = {"ID": article_id, "Title": title, "Content": content, "Article link": f"https://example.com/{article_id}"}
    return {"id": record_id, "createdTime": created, "fields": fields}


class PagedTable:
    def __init__(self, pages):
        self.pages = pages
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        offset = request.url.params.get("offset")
        index = int(offset) if offset else 0
        body = {"records": self.pages[index]}
        if index + 1 < len(self.pages):
            body["offset"] = str(index + 1)
        return httpx.Response(200, json=body)


def make_source(handler, **kwargs):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return AirtableArticleSource(api_key="key123", base_id="appBase", client=client, **kwargs)


def test_map_record():
    article = map_record(row("rec1", 11))

    assert article.article_id == 11
    assert article.record_id == "rec1"
    assert article.source_link == "https://example.com/11"
    assert article.source_position == "2024-05-01T10:00:00.000Z"


def test_map_record_skips_incomplete_rows():
    assert map_record({"id": "rec1", "fields": {"ID": 1, "Title": "No content"}}) is None
    assert map_record({"id": "rec2"}) is None


def test_fetch_articles_follows_offsets():
    table = PagedTable([[row("rec1", 1), row("rec2", 2)], [row("rec3", 3)]])
    source = make_source(table)

    articles = list(source.fetch_articles())

    assert [a.record_id for a in articles] == ["rec1", "rec2", "rec3"]
    assert len(table.requests) == 2
    assert table.requests[0].headers["Authorization"] == "Bearer key123"
    assert table.requests[0].url.path == "/v0/appBase/Articles"
    assert table.requests[1].url.params["offset"] == "1"


def test_fetch_articles_filters_by_position():
    table = PagedTable([[row("rec1", 1)]])
    source = make_source(table)

    list(source.fetch_articles(since="2024-05-01T10:00:00+00:00"))

    formula = table.requests[0].url.params["filterByFormula"]
    assert formula == "IS_AFTER(CREATED_TIME(), '2024-05-01T10:00:00+00:00')"


def test_fetch_articles_requests_oldest_first():
    table = PagedTable([[row("rec1", 1)]])
    source = make_source(table)

    list(source.fetch_articles(limit=1))

    params = table.requests[0].url.params
    assert params["sort[0][field]"] == "Time created"
    assert params["sort[0][direction]"] == "asc"


def test_fetch_articles_respects_limit_and_skips_bad_rows():
    table = PagedTable([[{"id": "bad", "fields": {}}, row("rec1", 1), row("rec2", 2)], [row("rec3", 3)]])
    source = make_source(table)

    articles = list(source.fetch_articles(limit=2))

    assert [a.record_id for a in articles] == ["rec1", "rec2"]
    assert len(table.requests) == 1


def test_rate_limit_is_retried():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(429, json={"error": "rate limited"})
        return httpx.Response(200, json={"records": [row("rec1", 1)]})

    source = make_source(handler, rate_limit_wait=0)

    assert [a.record_id for a in source.fetch_articles()] == ["rec1"]
    assert len(calls) == 2


def test_server_error_raises():
    source = make_source(lambda request: httpx.Response(500, json={}))

    with pytest.raises(httpx.HTTPStatusError):
        list(source.fetch_articles())


def test_from_settings_requires_credentials():
    missing = SimpleNamespace(
        airtable_api_key=None,
        airtable_base_id="appBase",
        airtable_table_name="Articles",
        airtable_api_base="https://api.airtable.com/v0",
        airtable_page_size=100,
    )

    with pytest.raises(ValueError):
        AirtableArticleSource.from_settings(missing)
