import pytest

from services.shoe_extraction.models import ReasonCode, TitleAnalysis, TitleScenario
from services.shoe_extraction.relevance import analyze_title, classify, classify_article, matches_title_analysis


def test_accepts_plain_shoe_candidate():
    verdict = classify("Brooks Ghost 17", "brooks::ghost 17", "Ghost 17", "Brooks")

    assert verdict.ok is True
    assert verdict.reason is None


def test_listicle_title_with_generic_model_is_rejected():
    verdict = classify(
        "Best Running Shoes for Beginners",
        "brooks::shoes for every type of runner",
        "shoes for every type of runner",
        "Brooks",
    )

    assert verdict.ok is False
    assert verdict.reason in (ReasonCode.LISTICLE, ReasonCode.BADMODEL)


def test_listicle_checked_before_apparel():
    verdict = classify("Top Picks", "nike::pegasus shorts", "Pegasus Shorts", "Nike")

    assert verdict.reason == ReasonCode.LISTICLE


@pytest.mark.parametrize("model", ["Trail Jacket", "Pegasus Tee", "Run Socks", "Flight Shorts"])
def test_apparel_models_are_rejected(model):
    verdict = classify(f"Nike {model}", None, model, "Nike")

    assert verdict.reason == ReasonCode.APPAREL


def test_nonshoe_footwear_is_rejected():
    verdict = classify("Hoka Ora Recovery Slide 3", "hoka::ora recovery slide 3", "Ora Recovery Slide 3", "Hoka")

    assert verdict.reason == ReasonCode.NONSHOE


def test_bad_brand_tokens_are_rejected():
    verdict = classify("Trail Speedgoat 6", None, "Speedgoat 6", "Trail")

    assert verdict.reason == ReasonCode.BADBRAND


def test_overlong_brand_is_rejected():
    verdict = classify(None, None, "Ghost 17", "A Very Long Made Up Brand Name Inc")

    assert verdict.reason == ReasonCode.BADBRAND


def test_model_with_too_many_words_is_rejected():
    verdict = classify(None, None, "One Two Three Four Five Six Seven", "Brooks")

    assert verdict.reason == ReasonCode.BADMODEL


def test_overlong_model_is_rejected():
    verdict = classify(None, None, "X" * 51, "Brooks")

    assert verdict.reason == ReasonCode.BADMODEL


def test_missing_inputs_do_not_raise():
    assert classify(None, None, None, None).ok is True


def test_offtopic_article_title_is_rejected():
    verdict = classify_article("The Best Running Headphones of 2024")

    assert verdict.ok is False
    assert verdict.reason == ReasonCode.OFFTOPIC


def test_offtopic_word_with_shoe_word_is_kept():
    assert classify_article("Trail Shoes and Hydration Vests We Loved").ok is True


def test_shoe_article_title_is_kept():
    assert classify_article("Brooks Ghost 17 Review").ok is True
    assert classify_article(None).ok is True


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Brooks Ghost 17 Review", TitleAnalysis(TitleScenario.SPECIFIC, "Brooks", "Ghost 17")),
        ("Hoka Speedgoat 6 Trail Review", TitleAnalysis(TitleScenario.SPECIFIC, "Hoka", "Speedgoat 6")),
        ("Nike Vomero Premium Review", TitleAnalysis(TitleScenario.SPECIFIC, "Nike", "Vomero Premium")),
        ("New Balance FuelCell Rebel 4", TitleAnalysis(TitleScenario.SPECIFIC, "New Balance", "FuelCell Rebel 4")),
        ("6 Adidas Running Shoes for Every Runner", TitleAnalysis(TitleScenario.BRAND_ONLY, "Adidas")),
        ("Best Hoka Shoes of 2024", TitleAnalysis(TitleScenario.BRAND_ONLY, "Hoka")),
        ("Nike summer gear", TitleAnalysis(TitleScenario.BRAND_ONLY, "Nike")),
        ("Nike Pegasus 41 vs Hoka Clifton 9", TitleAnalysis(TitleScenario.GENERAL)),
        ("Best Road Running Shoes 2024", TitleAnalysis(TitleScenario.GENERAL)),
        ("On the Run: A Marathon Diary", TitleAnalysis(TitleScenario.GENERAL)),
        ("Why I finally switched away from Brooks", TitleAnalysis(TitleScenario.GENERAL)),
        (None, TitleAnalysis(TitleScenario.GENERAL)),
    ],
)
def test_analyze_title(title, expected):
    assert analyze_title(title) == expected


def test_specific_title_keeps_only_that_model():
    analysis = TitleAnalysis(TitleScenario.SPECIFIC, "Brooks", "Ghost 17")

    assert matches_title_analysis("Brooks", "Ghost 17", analysis) is True
    assert matches_title_analysis("brooks", "Ghost 17 GTX", analysis) is True
    assert matches_title_analysis("Brooks", "Ghost Max 2", analysis) is False
    assert matches_title_analysis("Hoka", "Ghost 17", analysis) is False


def test_brand_only_title_keeps_that_brand():
    analysis = TitleAnalysis(TitleScenario.BRAND_ONLY, "Asics")

    assert matches_title_analysis("ASICS", "Novablast 5", analysis) is True
    assert matches_title_analysis("Nike", "Pegasus 41", analysis) is False


def test_general_title_keeps_everything():
    assert matches_title_analysis(None, None, TitleAnalysis(TitleScenario.GENERAL)) is True
