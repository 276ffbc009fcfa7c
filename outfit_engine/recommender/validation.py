"""Structural and compatibility checks for outfit selections."""

from __future__ import annotations

from outfit_engine.catalog.garment import (
    Category,
    Garment,
    InvalidGarmentError,
    OutfitSelection,
)
from outfit_engine.recommender.rules_engine import RulesEngine, default_rules_engine

TOP_CATEGORIES: frozenset[Category] = frozenset({Category.SHIRT, Category.UNDERSHIRT})
REQUIRED_CATEGORIES: tuple[Category, ...] = (Category.PANTS, Category.SHOES)


def validate_outfit(selection: OutfitSelection) -> bool:
    """Return ``True`` for a complete, wearable outfit (a top, pants and shoes)."""

    _require_selection(selection)
    occupied = selection.categories
    if occupied.isdisjoint(TOP_CATEGORIES):
        return False
    return all(category in occupied for category in REQUIRED_CATEGORIES)


def missing_categories(selection: OutfitSelection) -> list[str]:
    """Describe which required slots are still empty."""

    _require_selection(selection)
    occupied = selection.categories
    missing: list[str] = []
    if occupied.isdisjoint(TOP_CATEGORIES):
        missing.append(f"{Category.SHIRT.value} or {Category.UNDERSHIRT.value}")
    missing.extend(category.value for category in REQUIRED_CATEGORIES if category not in occupied)
    return missing


def explain_partial_selection(
    selection: OutfitSelection,
    candidate: Garment,
    target_category: Category | str,
    *,
    rules: RulesEngine = default_rules_engine,
) -> list[str]:
    """Return names of rules ``candidate`` would break in ``target_category``."""

    _require_selection(selection)
    target_category = Category.parse(target_category)
    if candidate is None:
        raise InvalidGarmentError(f"A candidate garment is required for {target_category.value}.")
    # with_item rejects a candidate that does not belong to the target slot.
    return rules.evaluate(selection.with_item(target_category, candidate))


def validate_partial_selection(
    selection: OutfitSelection,
    candidate: Garment,
    target_category: Category | str,
    *,
    rules: RulesEngine = default_rules_engine,
) -> bool:
    """
    Return ``True`` if placing ``candidate`` in ``target_category`` keeps the
    selection internally consistent.

    Any garment already in ``target_category`` is treated as replaced. Every
    pair of garments in the resulting selection must satisfy the rules.
    """

    return not explain_partial_selection(selection, candidate, target_category, rules=rules)


def is_selection_consistent(
    selection: OutfitSelection,
    *,
    rules: RulesEngine = default_rules_engine,
) -> bool:
    """Return ``True`` when no pair of garments in ``selection`` breaks a rule."""

    _require_selection(selection)
    return not rules.evaluate(selection)


def _require_selection(selection: OutfitSelection) -> None:
    if not isinstance(selection, OutfitSelection):
        raise InvalidGarmentError(
            f"Expected an OutfitSelection, got {type(selection).__name__}.",
        )
