"""Visibility weights for garments based on which layers cover them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet

from outfit_engine.catalog.garment import Category, OutfitSelection


class LayerReason(str, Enum):
    VISIBLE = "visible"
    COVERED = "covered"
    ACCESSORY = "accessory"


@dataclass(frozen=True, slots=True)
class LayerWeight:
    weight: float
    reason: LayerReason


VISIBLE = LayerWeight(1.0, LayerReason.VISIBLE)
ACCESSORY = LayerWeight(0.8, LayerReason.ACCESSORY)
SHIRT_UNDER_OUTERWEAR = LayerWeight(0.7, LayerReason.COVERED)
UNDERSHIRT_COVERED = LayerWeight(0.3, LayerReason.COVERED)

# Categories that hide part of the keyed category when worn over it.
COVERING_LAYERS: dict[Category, tuple[Category, ...]] = {
    Category.SHIRT: (Category.OUTERWEAR,),
    Category.UNDERSHIRT: (Category.SHIRT, Category.OUTERWEAR),
}

# (category, covered?) -> weight. Uncovered entries double as the default.
LAYER_WEIGHTS: dict[tuple[Category, bool], LayerWeight] = {
    (Category.OUTERWEAR, False): VISIBLE,
    (Category.SHIRT, False): VISIBLE,
    (Category.SHIRT, True): SHIRT_UNDER_OUTERWEAR,
    (Category.UNDERSHIRT, False): VISIBLE,
    (Category.UNDERSHIRT, True): UNDERSHIRT_COVERED,
    (Category.PANTS, False): VISIBLE,
    (Category.SHOES, False): VISIBLE,
    (Category.BELT, False): ACCESSORY,
    (Category.WATCH, False): ACCESSORY,
    (Category.DRESS, False): VISIBLE,
    (Category.OTHER, False): VISIBLE,
}


def is_covered(category: Category, occupied: AbstractSet[Category]) -> bool:
    return any(layer in occupied for layer in COVERING_LAYERS.get(category, ()))


def layer_weight_for(category: Category | str, occupied: AbstractSet[Category]) -> LayerWeight:
    """Return the visibility weight of ``category`` given the occupied slots."""

    category = Category.parse(category)
    return LAYER_WEIGHTS[(category, is_covered(category, occupied))]


def layer_weights(selection: OutfitSelection) -> dict[Category, LayerWeight]:
    """Map every occupied category of ``selection`` to its visibility weight."""

    occupied = selection.categories
    return {garment.category: layer_weight_for(garment.category, occupied) for garment in selection}
