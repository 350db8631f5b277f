from services.shoe_extraction.heading_detector import (
    detect_candidates,
    detect_structured,
    detect_unstructured,
    is_valid_model_part,
    match_brand_prefix,
)
from services.shoe_extraction.models import DetectionStrategy

ROUNDUP = """# Our favourite daily trainers

## 1. Brooks Ghost 17 ($140)
A soft and forgiving shoe for long easy miles that most runners will get along with from day one.

## 2. **Nike Pegasus 41** (€150)
The workhorse of the Nike lineup, now with ReactX foam and a slightly wider forefoot for comfort.

Best Trail Shoe: Hoka Speedgoat 6
"""


def test_structured_headings_are_found_with_prices():
    headings = detect_structured(ROUNDUP)

    assert [(h.brand, h.model, h.price) for h in headings] == [
        ("Brooks", "Ghost 17", 140.0),
        ("Nike", "Pegasus 41", 162.0),
        ("Hoka", "Speedgoat 6", None),
    ]
    assert all(h.strategy == DetectionStrategy.STRUCTURED for h in headings)


def test_structured_heading_offsets_point_at_the_line():
    headings = detect_structured(ROUNDUP)

    first = headings[0]
    assert ROUNDUP[first.start_index:first.end_index] == "## 1. Brooks Ghost 17 ($140)"


def test_long_lines_are_not_headings():
    line = "Brooks Ghost 17 " + "is a shoe that keeps going and going " * 3
    assert detect_structured(line) == []


def test_sentences_starting_with_brand_are_not_headings():
    assert detect_structured("Nike has updated the Pegasus again.") == []


def test_detect_candidates_prefers_structured():
    result = detect_candidates(ROUNDUP)

    assert result.strategy == DetectionStrategy.STRUCTURED
    assert len(result.candidates) == 3


def test_detect_candidates_falls_back_to_mentions():
    content = (
        "We ran a hundred miles in the Brooks Ghost 17 before trying the Saucony Endorphin Speed 4 "
        "on a track session, and later compared both with the Brooks Ghost 17 again."
    )

    result = detect_candidates(content)

    assert result.strategy == DetectionStrategy.UNSTRUCTURED
    assert [(c.brand, c.model) for c in result.candidates] == [
        ("Brooks", "Ghost 17"),
        ("Saucony", "Endorphin Speed 4"),
        ("Brooks", "Ghost 17"),
    ]
    assert result.candidates[2].start_index > result.candidates[1].end_index


def test_mentions_stop_at_lowercase_words():
    mentions = detect_unstructured("Brooks Ghost 17 weighs 283 grams")

    assert len(mentions) == 1
    assert mentions[0].model == "Ghost 17"
    assert mentions[0].start_index == 0


def test_on_is_matched_case_sensitively():
    assert detect_unstructured("we went on Cloudmonster 2 runs") == []
    mentions = detect_unstructured("The On Cloudmonster 2 is bouncy")
    assert [(m.brand, m.model) for m in mentions] == [("On", "Cloudmonster 2")]


def test_match_brand_prefix_prefers_longest_brand():
    assert match_brand_prefix("New Balance Fresh Foam 1080") == ("New Balance", len("New Balance"))
    assert match_brand_prefix("Onward and upward") is None


def test_is_valid_model_part():
    assert is_valid_model_part("Ghost 17")
    assert is_valid_model_part("Speedgoat")
    assert is_valid_model_part("Gel-Kayano")
    assert not is_valid_model_part("Shoe")
    assert not is_valid_model_part("Lineup")
    assert not is_valid_model_part("X")
    assert not is_valid_model_part("Latest 2")
