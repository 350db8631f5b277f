import json
from types import SimpleNamespace

import httpx
import openai
import pytest

from services.shoe_extraction.llm_extractor import (
    LLMExtractionError,
    LLMExtractor,
    build_llm_extractor,
    items_from_payload,
    normalize_llm_item,
)
from services.shoe_extraction.models import Article


class FakeCompletions:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.answer)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(answer=None, error=None):
    completions = FakeCompletions(answer=answer, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def make_article(content="A long story about a marathon block."):
    return Article(article_id=3, record_id="rec3", title="Marathon diary", content=content)


def test_normalize_llm_item_converts_units():
    spec = normalize_llm_item({
        "brand_name": "Brooks",
        "model": "Ghost 17",
        "weight": 8.8,
        "price": 150,
        "price_currency": "eur",
        "heel_height": 35,
        "drop": 12,
        "carbon_plate": "false",
    })

    assert spec["weight"] == 249
    assert spec["price"] == pytest.approx(162.0)
    assert spec["heel_height"] == 35
    assert spec["drop"] == 12
    assert spec["carbon_plate"] is False
    assert spec["heading"] == "Brooks Ghost 17"


def test_normalize_llm_item_prefers_price_usd_and_drops_out_of_range():
    spec = normalize_llm_item({
        "brand": "Hoka",
        "model_name": "Clifton 9",
        "price_usd": 145,
        "price": 999,
        "heel_height": 90,
        "drop": 35,
        "weight": 2000,
    })

    assert (spec["brand_name"], spec["model"]) == ("Hoka", "Clifton 9")
    assert spec["price"] == 145
    assert spec["heel_height"] is None
    assert spec["drop"] is None
    assert spec["weight"] is None


def test_normalize_llm_item_skips_non_shoes_and_incomplete_items():
    assert normalize_llm_item({"brand_name": "Nike", "model": "Tempo Shorts", "is_running_shoe": False}) is None
    assert normalize_llm_item({"brand_name": "Nike"}) is None
    assert normalize_llm_item("Nike Pegasus 41") is None


def test_price_without_known_currency_is_dropped():
    assert normalize_llm_item({"brand_name": "Nike", "model": "Pegasus 41", "price": 140})["price"] is None


@pytest.mark.parametrize(
    "payload, count",
    [
        ({"items": [{"brand_name": "A"}, {"brand_name": "B"}]}, 2),
        ({"sneakers": [{"brand_name": "A"}]}, 1),
        ({"model": {"brand_name": "A"}}, 1),
        ({"brand_name": "A", "model": "B"}, 1),
        ({"unexpected": True}, 0),
    ],
)
def test_items_from_payload(payload, count):
    assert len(items_from_payload(payload)) == count


def test_extract_parses_fenced_json():
    answer = "```json\n" + json.dumps({"items": [
        {"brand_name": "Saucony", "model": "Endorphin Speed 4", "weight": 232, "price_usd": 170},
        {"brand_name": "Saucony", "model": "Run Tee", "is_running_shoe": False},
    ]}) + "\n```"
    client, completions = fake_client(answer=answer)

    output = LLMExtractor(client=client, model="test-model").extract(make_article())

    assert output.method == "llm"
    assert [spec["model"] for spec in output.specs] == ["Endorphin Speed 4"]
    request = completions.requests[0]
    assert request["model"] == "test-model"
    assert request["temperature"] == 0
    assert "Marathon diary" in request["messages"][1]["content"]


def test_extract_returns_empty_output_for_unparseable_answer():
    client, _ = fake_client(answer="Sorry, I cannot help with that.")

    output = LLMExtractor(client=client).extract(make_article())

    assert output.specs == []


def test_extract_wraps_api_errors():
    error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    client, _ = fake_client(error=error)

    with pytest.raises(LLMExtractionError):
        LLMExtractor(client=client).extract(make_article())


def test_build_llm_extractor_requires_key_and_flag():
    enabled = SimpleNamespace(
        enable_llm_fallback=True,
        openai_api_key="sk-test",
        openai_api_base="https://api.openai.com/v1",
        openai_model="gpt-4o-mini",
    )

    assert isinstance(build_llm_extractor(enabled), LLMExtractor)
    assert build_llm_extractor(SimpleNamespace(**{**vars(enabled), "openai_api_key": None})) is None
    assert build_llm_extractor(SimpleNamespace(**{**vars(enabled), "enable_llm_fallback": False})) is None
