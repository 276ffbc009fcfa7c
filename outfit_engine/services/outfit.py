"""Outfit generation over a wardrobe collection."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Iterator, Sequence

from outfit_engine.catalog.garment import (
    Category,
    CuratedOutfit,
    Garment,
    GeneratedOutfit,
    InvalidGarmentError,
    OutfitSelection,
    OutfitSource,
)
from outfit_engine.config.settings import Settings, get_settings
from outfit_engine.metrics.prometheus_exporter import (
    outfit_generation_exhausted_total,
    outfit_generation_total,
)
from outfit_engine.recommender.rules_engine import RulesEngine, default_rules_engine
from outfit_engine.recommender.scorer import score_percentage
from outfit_engine.recommender.validation import (
    is_selection_consistent,
    validate_outfit,
    validate_partial_selection,
)
from outfit_engine.services.wardrobe import Wardrobe

logger = logging.getLogger(__name__)

# Slots every enumerated outfit fills; a top may be a shirt or an undershirt.
CORE_SLOTS: tuple[tuple[Category, ...], ...] = (
    (Category.SHIRT, Category.UNDERSHIRT),
    (Category.PANTS,),
    (Category.SHOES,),
)

OPTIONAL_RANDOM_CATEGORIES: tuple[Category, ...] = (
    Category.OUTERWEAR,
    Category.BELT,
    Category.WATCH,
)


def rank_key(outfit: GeneratedOutfit) -> tuple[int, tuple[tuple[int, str], ...]]:
    """Descending score, then category-then-id order of the garments."""

    return -outfit.score, tuple(garment.sort_key for garment in outfit.garments)


def generated_outfit(
    selection: OutfitSelection,
    *,
    source: OutfitSource = OutfitSource.GENERATED,
    loved: bool | None = None,
    outfit_id: str | None = None,
) -> GeneratedOutfit:
    return GeneratedOutfit(
        selection=selection,
        score=score_percentage(selection),
        source=source,
        loved=loved,
        id=outfit_id or "+".join(selection.item_ids),
    )


class OutfitGenerator:
    """Samples and enumerates outfits from the wardrobe passed to each call."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
        rules: RulesEngine = default_rules_engine,
    ) -> None:
        self._settings = settings or get_settings()
        self._rng = rng or random.Random()
        self._rules = rules

    def generate_random_outfit(self, wardrobe: Wardrobe | Iterable[Garment]) -> GeneratedOutfit | None:
        """
        Sample one garment per required slot, resampling invalid combinations.

        Returns the best-scoring combination seen when no valid outfit turns up
        within ``random_max_attempts``; ``None`` only when the wardrobe has no
        garment that could be part of an outfit.
        """

        wardrobe = Wardrobe.coerce(wardrobe)
        outfit_generation_total.labels(operation="random").inc()

        best: GeneratedOutfit | None = None
        for _ in range(self._settings.random_max_attempts):
            selection = self._sample_selection(wardrobe)
            if not selection:
                return None
            candidate = generated_outfit(selection)
            if validate_outfit(selection) and is_selection_consistent(selection, rules=self._rules):
                return candidate
            if best is None or rank_key(candidate) < rank_key(best):
                best = candidate

        outfit_generation_exhausted_total.inc()
        logger.warning(
            "No valid outfit after %d attempts; returning best effort %s",
            self._settings.random_max_attempts,
            best.key if best else None,
        )
        return best

    def get_outfits_for_anchor(
        self,
        anchor: Garment,
        wardrobe: Wardrobe | Iterable[Garment],
    ) -> list[GeneratedOutfit]:
        """Enumerate compatible outfits that keep ``anchor`` in its slot."""

        if not isinstance(anchor, Garment):
            raise InvalidGarmentError("An anchor garment is required.")
        wardrobe = Wardrobe.coerce(wardrobe)
        outfit_generation_total.labels(operation="anchor").inc()

        pools = [
            self._pool(wardrobe, slot)
            for slot in CORE_SLOTS
            if anchor.category not in slot
        ]
        outfits = [generated_outfit(selection) for selection in self._expand(OutfitSelection.of(anchor), pools)]
        logger.debug("Anchor %s produced %d outfits", anchor.id, len(outfits))
        return sorted(outfits, key=rank_key)

    def get_all_outfits(self, wardrobe: Wardrobe | Iterable[Garment]) -> list[GeneratedOutfit]:
        """
        Enumerate the compatible outfit space across every possible anchor.

        Core outfits (top, pants, shoes) are what top/pants/shoes anchors
        produce; every other garment anchors the core outfits it is
        compatible with. Outfits are unique by item-id tuple.

        Each outfit holds a single top and at most one non-core garment, so
        layered combinations that ``generate_random_outfit`` may return (a
        shirt over an undershirt, several optional pieces) are not listed.
        """

        wardrobe = Wardrobe.coerce(wardrobe)
        outfit_generation_total.labels(operation="all").inc()

        core_slots = {category for slot in CORE_SLOTS for category in slot}
        core = list(self._expand(OutfitSelection(), [self._pool(wardrobe, slot) for slot in CORE_SLOTS]))

        selections: dict[tuple[str, ...], OutfitSelection] = {s.item_ids: s for s in core}
        for anchor in wardrobe:
            if anchor.category in core_slots:
                continue
            for selection in core:
                if validate_partial_selection(selection, anchor, anchor.category, rules=self._rules):
                    extended = selection.with_item(anchor.category, anchor)
                    selections.setdefault(extended.item_ids, extended)

        outfits = [generated_outfit(selection) for selection in selections.values()]
        logger.debug("Enumerated %d outfits from %d garments", len(outfits), len(wardrobe))
        return sorted(outfits, key=rank_key)

    def get_compatible_items(
        self,
        selection: OutfitSelection,
        target_category: Category | str,
        wardrobe: Wardrobe | Iterable[Garment],
    ) -> list[Garment]:
        """Garments of ``target_category`` that keep ``selection`` consistent."""

        wardrobe = Wardrobe.coerce(wardrobe)
        target_category = Category.parse(target_category)
        return [
            garment
            for garment in wardrobe.items(target_category)
            if validate_partial_selection(selection, garment, target_category, rules=self._rules)
        ]

    def curated_outfits(
        self,
        curated: Iterable[CuratedOutfit],
        wardrobe: Wardrobe | Iterable[Garment],
    ) -> list[GeneratedOutfit]:
        """Resolve stored outfits against the wardrobe and score them."""

        wardrobe = Wardrobe.coerce(wardrobe)
        results: list[GeneratedOutfit] = []
        for record in curated:
            garments = []
            for item_id in record.item_ids:
                garment = wardrobe.get(item_id)
                if garment is None:
                    logger.warning("Curated outfit %s references unknown item %s", record.id, item_id)
                    continue
                garments.append(garment)
            if not garments:
                logger.warning("Curated outfit %s has no known items; skipping", record.id)
                continue
            results.append(
                generated_outfit(
                    OutfitSelection(tuple(garments)),
                    source=OutfitSource.CURATED,
                    loved=record.loved,
                    outfit_id=record.id,
                ),
            )
        return sorted(results, key=rank_key)

    def _sample_selection(self, wardrobe: Wardrobe) -> OutfitSelection:
        include_optional = self._settings.include_optional
        garments: list[Garment] = []

        tops = self._pool(wardrobe, CORE_SLOTS[0])
        if tops:
            top = self._rng.choice(tops)
            garments.append(top)
            layer = Category.UNDERSHIRT if top.category is Category.SHIRT else Category.SHIRT
            layer_pool = wardrobe.items(layer)
            if layer_pool and include_optional and self._coin():
                garments.append(self._rng.choice(layer_pool))

        for category in (Category.PANTS, Category.SHOES):
            pool = wardrobe.items(category)
            if pool:
                garments.append(self._rng.choice(pool))

        if include_optional:
            for category in OPTIONAL_RANDOM_CATEGORIES:
                pool = wardrobe.items(category)
                if pool and self._coin():
                    garments.append(self._rng.choice(pool))

        return OutfitSelection(tuple(garments))

    def _coin(self) -> bool:
        return self._rng.random() < 0.5

    @staticmethod
    def _pool(wardrobe: Wardrobe, slot: Sequence[Category]) -> tuple[Garment, ...]:
        return tuple(garment for category in slot for garment in wardrobe.items(category))

    def _expand(
        self,
        selection: OutfitSelection,
        pools: Sequence[tuple[Garment, ...]],
    ) -> Iterator[OutfitSelection]:
        """Depth-first cross product that prunes incompatible partial outfits."""

        if not pools:
            if validate_outfit(selection):
                yield selection
            return
        head, rest = pools[0], pools[1:]
        for garment in head:
            if validate_partial_selection(selection, garment, garment.category, rules=self._rules):
                yield from self._expand(selection.with_item(garment.category, garment), rest)
