"""Tests for compatibility rules and outfit validation."""

from __future__ import annotations

import pytest

from outfit_engine.catalog.garment import Category, InvalidGarmentError, OutfitSelection, UnknownCategoryError
from outfit_engine.recommender.rules_engine import (
    MAX_FORMALITY_SPREAD,
    FormalitySpreadRule,
    RulesEngine,
    styles_compatible,
)
from outfit_engine.recommender.validation import (
    explain_partial_selection,
    is_selection_consistent,
    missing_categories,
    validate_outfit,
    validate_partial_selection,
)


def test_outfit_needs_top_pants_and_shoes(make_garment) -> None:
    shirt = make_garment(Category.SHIRT, 5)
    undershirt = make_garment(Category.UNDERSHIRT, 5)
    pants = make_garment(Category.PANTS, 5)
    shoes = make_garment(Category.SHOES, 5)
    belt = make_garment(Category.BELT, 5)

    assert validate_outfit(OutfitSelection.of(shirt, pants, shoes))
    assert validate_outfit(OutfitSelection.of(undershirt, pants, shoes))
    assert validate_outfit(OutfitSelection.of(shirt, undershirt, pants, shoes, belt))
    assert not validate_outfit(OutfitSelection.of(pants, shoes, belt))
    assert not validate_outfit(OutfitSelection.of(shirt, shoes))
    assert not validate_outfit(OutfitSelection.of(shirt, pants))
    assert not validate_outfit(OutfitSelection())


def test_validate_outfit_ignores_compatibility(make_garment) -> None:
    selection = OutfitSelection.of(
        make_garment(Category.SHIRT, 1, tags={"Adventurer"}),
        make_garment(Category.PANTS, 10, tags={"Refined"}),
        make_garment(Category.SHOES, 5),
    )

    assert validate_outfit(selection)
    assert not is_selection_consistent(selection)


def test_missing_categories_lists_empty_slots(make_garment) -> None:
    selection = OutfitSelection.of(make_garment(Category.PANTS, 5))

    assert missing_categories(selection) == ["Shirt or Undershirt", "Shoes"]


def test_validate_outfit_rejects_non_selection() -> None:
    with pytest.raises(InvalidGarmentError):
        validate_outfit({"Shirt": None})  # type: ignore[arg-type]


def test_style_tags_must_overlap_unless_untagged(make_garment) -> None:
    refined = make_garment(Category.SHIRT, 6, tags={"Refined", "Crossover"})
    crossover = make_garment(Category.PANTS, 6, tags={"Crossover"})
    adventurer = make_garment(Category.PANTS, 6, tags={"Adventurer"})
    untagged = make_garment(Category.PANTS, 6)

    assert styles_compatible(refined, crossover)
    assert styles_compatible(refined, untagged)
    assert not styles_compatible(refined, adventurer)


def test_partial_selection_rejects_disjoint_tags(make_garment) -> None:
    selection = OutfitSelection.of(make_garment(Category.SHIRT, 6, tags={"Refined"}))

    assert validate_partial_selection(selection, make_garment(Category.PANTS, 6, tags={"Refined"}), "Pants")
    assert not validate_partial_selection(
        selection,
        make_garment(Category.PANTS, 6, tags={"Adventurer"}),
        Category.PANTS,
    )


def test_partial_selection_rejects_wide_formality_spread(make_garment) -> None:
    selection = OutfitSelection.of(make_garment(Category.SHOES, 1))

    close = make_garment(Category.SHIRT, 1 + MAX_FORMALITY_SPREAD)
    far = make_garment(Category.SHIRT, 2 + MAX_FORMALITY_SPREAD)

    assert validate_partial_selection(selection, close, Category.SHIRT)
    assert explain_partial_selection(selection, far, Category.SHIRT) == ["formality_spread"]
    assert not validate_partial_selection(selection, make_garment(Category.SHIRT, 10), Category.SHIRT)


def test_partial_selection_replaces_target_slot(make_garment) -> None:
    selection = OutfitSelection.of(
        make_garment(Category.SHIRT, 1, tags={"Adventurer"}),
        make_garment(Category.PANTS, 7, tags={"Refined"}),
    )

    replacement = make_garment(Category.SHIRT, 7, tags={"Refined"})

    assert validate_partial_selection(selection, replacement, Category.SHIRT)


def test_partial_selection_rejects_shorts_with_boots(make_garment) -> None:
    selection = OutfitSelection.of(make_garment(Category.PANTS, 3, name="Cargo Shorts"))

    boots = make_garment(Category.SHOES, 4, name="Chelsea Boots")
    sneakers = make_garment(Category.SHOES, 3, name="Canvas Sneakers")

    assert explain_partial_selection(selection, boots, Category.SHOES) == ["shorts_with_boots"]
    assert validate_partial_selection(selection, sneakers, Category.SHOES)


def test_partial_selection_contract_violations(make_garment) -> None:
    selection = OutfitSelection()
    shirt = make_garment(Category.SHIRT, 5)

    with pytest.raises(UnknownCategoryError):
        validate_partial_selection(selection, shirt, "Cape")
    with pytest.raises(InvalidGarmentError):
        validate_partial_selection(selection, None, Category.SHIRT)  # type: ignore[arg-type]
    with pytest.raises(InvalidGarmentError):
        validate_partial_selection(selection, shirt, Category.PANTS)


def test_custom_rules_engine(make_garment) -> None:
    rules = RulesEngine([FormalitySpreadRule("formality_spread", "spread only")])
    selection = OutfitSelection.of(make_garment(Category.SHIRT, 5, tags={"Refined"}))
    pants = make_garment(Category.PANTS, 5, tags={"Adventurer"})

    assert validate_partial_selection(selection, pants, Category.PANTS, rules=rules)
    assert rules.evaluate(selection.with_item(Category.PANTS, pants)) == []
