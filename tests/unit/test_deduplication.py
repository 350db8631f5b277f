from dataclasses import replace

from services.shoe_extraction.deduplication import (
    deduplicate_in_document,
    has_scalar_conflict,
    is_payload_richer,
    merge_shoe_results,
    richness_score,
)
from services.shoe_extraction.models import ShoeInput


def make_shoe(**overrides) -> ShoeInput:
    values = {
        "article_id": 1,
        "record_id": "rec1",
        "brand_name": "Brooks",
        "model": "Ghost 17",
        "model_key": "brooks::ghost 17",
    }
    values.update(overrides)
    return ShoeInput(**values)


def test_merge_with_itself_is_identity():
    shoe = make_shoe(weight=283, heel_height=32, surface_type="road", carbon_plate=False)

    assert merge_shoe_results(shoe, shoe) == shoe


def test_grams_beat_ounces_in_either_order():
    ounces = make_shoe(weight=8.8)
    grams = make_shoe(weight=249)

    assert merge_shoe_results(ounces, grams).weight == 249
    assert merge_shoe_results(grams, ounces).weight == 249


def test_missing_values_are_filled():
    existing = make_shoe(weight=283)
    incoming = make_shoe(price=140, carbon_plate=False)

    merged = merge_shoe_results(existing, incoming)

    assert merged.weight == 283
    assert merged.price == 140
    assert merged.carbon_plate is False


def test_longer_string_wins():
    existing = make_shoe(additional_features="DNA Loft")
    incoming = make_shoe(additional_features="DNA Loft v3 midsole, engineered mesh")

    assert merge_shoe_results(existing, incoming).additional_features == "DNA Loft v3 midsole, engineered mesh"


def test_numeric_tie_keeps_existing():
    existing = make_shoe(heel_height=32)
    incoming = make_shoe(heel_height=34)

    assert merge_shoe_results(existing, incoming).heel_height == 32


def test_merge_does_not_mutate_inputs():
    existing = make_shoe(weight=8.8)
    incoming = make_shoe(weight=249, price=140)

    merge_shoe_results(existing, incoming)

    assert existing.weight == 8.8
    assert existing.price is None


def test_richness_scoring():
    sparse = make_shoe(surface_type="road")
    rich = make_shoe(weight=283, price=140)

    assert richness_score(rich) > richness_score(sparse)
    assert is_payload_richer(rich, sparse)
    assert not is_payload_richer(sparse, rich)
    assert not is_payload_richer(rich, rich)


def test_grams_weight_earns_bonus():
    assert richness_score(make_shoe(weight=249)) == richness_score(make_shoe(weight=8.8)) + 2


def test_scalar_conflict_detection():
    assert has_scalar_conflict(make_shoe(heel_height=32), make_shoe(heel_height=34))
    assert not has_scalar_conflict(make_shoe(heel_height=32), make_shoe(heel_height=32, drop=10))
    assert not has_scalar_conflict(make_shoe(weight=8.8), make_shoe(weight=249))
    assert not has_scalar_conflict(make_shoe(surface_type="road"), make_shoe(surface_type="trail"))


def test_deduplicate_in_document_folds_same_key():
    first = make_shoe(weight=8.8)
    other = make_shoe(brand_name="Hoka", model="Clifton 9", model_key="hoka::clifton 9", price=145)
    second = make_shoe(weight=249, drop=12)

    records, folded = deduplicate_in_document([first, other, second])

    assert folded == 1
    assert [r.model_key for r in records] == ["brooks::ghost 17", "hoka::clifton 9"]
    assert records[0].weight == 249
    assert records[0].drop == 12


def test_deduplicate_in_document_without_duplicates():
    shoe = make_shoe(weight=283)
    records, folded = deduplicate_in_document([shoe, replace(shoe, model="Glycerin 22", model_key="brooks::glycerin 22")])

    assert folded == 0
    assert len(records) == 2
