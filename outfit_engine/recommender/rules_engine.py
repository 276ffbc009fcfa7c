"""Pairwise compatibility rules for garments in the same outfit."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable

from outfit_engine.catalog.garment import Category, Garment, OutfitSelection

# Largest formality gap two garments in one outfit may have.
MAX_FORMALITY_SPREAD = 4


@dataclass(frozen=True, slots=True)
class OutfitRule:
    """Represents a single pairwise constraint between two garments."""

    name: str
    description: str

    def is_satisfied(self, first: Garment, second: Garment) -> bool:
        """Evaluate the rule for two garments occupying different slots."""

        raise NotImplementedError


class StyleTagRule(OutfitRule):
    __slots__ = ()

    def is_satisfied(self, first: Garment, second: Garment) -> bool:
        return styles_compatible(first, second)


class FormalitySpreadRule(OutfitRule):
    __slots__ = ()

    def is_satisfied(self, first: Garment, second: Garment) -> bool:
        return formality_compatible(first, second)


class ShortsWithBootsRule(OutfitRule):
    __slots__ = ()

    def is_satisfied(self, first: Garment, second: Garment) -> bool:
        pair = {first.category: first, second.category: second}
        pants = pair.get(Category.PANTS)
        shoes = pair.get(Category.SHOES)
        if pants is None or shoes is None:
            return True
        return not ("shorts" in pants.name.lower() and "boots" in shoes.name.lower())


DEFAULT_RULES: tuple[OutfitRule, ...] = (
    StyleTagRule("style_tags", "Garments share a style tag, or one of them is untagged."),
    FormalitySpreadRule(
        "formality_spread",
        f"Formality values differ by at most {MAX_FORMALITY_SPREAD}.",
    ),
    ShortsWithBootsRule("shorts_with_boots", "Shorts are never worn with boots."),
)


def styles_compatible(first: Garment, second: Garment) -> bool:
    """Return ``True`` when the tag sets overlap or either item carries no tags."""

    if not first.style_tags or not second.style_tags:
        return True
    return not first.style_tags.isdisjoint(second.style_tags)


def formality_compatible(first: Garment, second: Garment) -> bool:
    return abs(first.formality - second.formality) <= MAX_FORMALITY_SPREAD


class RulesEngine:
    """Evaluates a collection of outfit rules."""

    def __init__(self, rules: Iterable[OutfitRule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[OutfitRule, ...]:
        return self._rules

    def failed_rules(self, first: Garment, second: Garment) -> list[str]:
        """Return names of rules the pair violates."""

        return [rule.name for rule in self._rules if not rule.is_satisfied(first, second)]

    def evaluate(self, selection: OutfitSelection) -> list[str]:
        """Return names of rules that failed for any pair in the selection."""

        failed: list[str] = []
        for first, second in combinations(selection.garments, 2):
            for name in self.failed_rules(first, second):
                if name not in failed:
                    failed.append(name)
        return failed


default_rules_engine = RulesEngine()
