"""
LLM fallback extractor.

Used only when regex detection finds no usable candidate in an article. The
model answers with JSON items which are range-checked here and then go through
the same relevance and tightening gates as regex output.
"""

import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from constants.spec_patterns import OUNCES_TO_GRAMS, USD_RATES
from services.shoe_extraction.config import (
    MAX_DROP_MM,
    MAX_PRICE_USD,
    MAX_STACK_MM,
    MAX_WEIGHT_GRAMS,
    MIN_DROP_MM,
    MIN_PRICE_USD,
    MIN_STACK_MM,
    MIN_WEIGHT_GRAMS,
    OUNCE_CEILING,
)
from services.shoe_extraction.models import Article, ExtractorOutput
from services.shoe_extraction.normalizer import to_bool_or_none, to_num
from services.shoe_extraction.prompts import load_prompt
from services.shoe_extraction.spec_extractor import require_text
from services.shoe_extraction.text_utils import _parse_json_response

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 24000
ITEM_KEYS = ("items", "sneakers", "models")
PASSTHROUGH_FIELDS = (
    "upper_breathability",
    "primary_use",
    "cushioning_type",
    "surface_type",
    "foot_width",
    "additional_features",
)


class LLMExtractionError(RuntimeError):
    """The LLM API call failed."""


def _bounded(value: Optional[float], low: float, high: float) -> Optional[float]:
    if value is None or not low <= value <= high:
        return None
    return value


def _weight_grams(raw: Any) -> Optional[float]:
    weight = to_num(raw)
    if weight is not None and 0 < weight <= OUNCE_CEILING:
        weight = round(weight * OUNCES_TO_GRAMS)
    return _bounded(weight, MIN_WEIGHT_GRAMS, MAX_WEIGHT_GRAMS)


def _price_usd(item: Dict[str, Any]) -> Optional[float]:
    direct = _bounded(to_num(item.get("price_usd")), MIN_PRICE_USD, MAX_PRICE_USD)
    if direct is not None:
        return round(direct, 2)
    amount = to_num(item.get("price"))
    currency = str(item.get("price_currency") or "").strip().upper()
    rate = USD_RATES.get(currency)
    if amount is None or rate is None:
        return None
    return _bounded(round(amount * rate, 2), MIN_PRICE_USD, MAX_PRICE_USD)


def items_from_payload(payload: Dict[str, Any]) -> List[Any]:
    for key in ITEM_KEYS:
        if isinstance(payload.get(key), list):
            return payload[key]
    if isinstance(payload.get("model"), dict):
        return [payload["model"]]
    if "brand_name" in payload:
        return [payload]
    return []


def normalize_llm_item(item: Any) -> Optional[Dict[str, Any]]:
    """Range-check one LLM item and map it to the loose spec shape."""
    if not isinstance(item, dict) or item.get("is_running_shoe") is False:
        return None
    brand = item.get("brand_name") or item.get("brand")
    model = item.get("model") or item.get("model_name")
    if not brand or not model:
        return None
    spec = {
        "brand_name": brand,
        "model": model,
        "heading": f"{brand} {model}",
        "heel_height": _bounded(to_num(item.get("heel_height")), MIN_STACK_MM, MAX_STACK_MM),
        "forefoot_height": _bounded(to_num(item.get("forefoot_height")), MIN_STACK_MM, MAX_STACK_MM),
        "drop": _bounded(to_num(item.get("drop")), MIN_DROP_MM, MAX_DROP_MM),
        "weight": _weight_grams(item.get("weight")),
        "price": _price_usd(item),
        "carbon_plate": to_bool_or_none(item.get("carbon_plate")),
        "waterproof": to_bool_or_none(item.get("waterproof")),
    }
    for name in PASSTHROUGH_FIELDS:
        spec[name] = item.get(name)
    return spec


class LLMExtractor:
    """Extractor backed by an OpenAI-compatible chat completion API."""

    method = "llm"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        model: str = "gpt-4o-mini",
        client: Any = None,
    ):
        self.model = model
        self._api_key = api_key
        self._api_base = api_base
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = OpenAI(api_key=self._api_key, base_url=self._api_base)
        return self._client

    def _build_messages(self, article: Article, content: str) -> list[dict]:
        system = load_prompt(
            "shoe_extraction_system_prompt",
            min_price=MIN_PRICE_USD,
            max_price=MAX_PRICE_USD,
        )
        user = load_prompt(
            "shoe_extraction_user_prompt",
            article_id=article.article_id,
            title=article.title or "",
            source_url=article.source_link,
            content=content[:MAX_CONTENT_CHARS],
        )
        return [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ]

    def extract(self, article: Article) -> ExtractorOutput:
        content = require_text(article.content)
        messages = self._build_messages(article, content)
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=0,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            logger.error(f"LLM extraction failed for article {article.article_id}: {e}")
            raise LLMExtractionError(str(e)) from e

        answer = response.choices[0].message.content or ""
        payload = _parse_json_response(answer)
        if payload is None:
            logger.warning(f"LLM returned unparseable JSON for article {article.article_id}")
            return ExtractorOutput(method=self.method)

        specs = [spec for spec in map(normalize_llm_item, items_from_payload(payload)) if spec]
        logger.info(f"LLM extracted {len(specs)} items from article {article.article_id}")
        return ExtractorOutput(method=self.method, specs=specs)


def build_llm_extractor(app_settings) -> Optional[LLMExtractor]:
    """Return an extractor when the fallback is enabled and a key is configured."""
    if not app_settings.enable_llm_fallback or not app_settings.openai_api_key:
        return None
    return LLMExtractor(
        api_key=app_settings.openai_api_key,
        api_base=app_settings.openai_api_base,
        model=app_settings.openai_model,
    )
