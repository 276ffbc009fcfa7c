"""Outfit compatibility scoring and generation engine."""

from outfit_engine.catalog.garment import (
    Category,
    CuratedOutfit,
    Garment,
    GeneratedOutfit,
    InvalidGarmentError,
    OutfitEngineError,
    OutfitSelection,
    OutfitSource,
    UnknownCategoryError,
)
from outfit_engine.recommender.scorer import ScoreBreakdown, calculate_outfit_score
from outfit_engine.recommender.validation import validate_outfit, validate_partial_selection
from outfit_engine.services.outfit import OutfitGenerator
from outfit_engine.services.query import FilterCriteria, OutfitQueryService, filter_outfits
from outfit_engine.services.wardrobe import Wardrobe

__all__ = [
    "Category",
    "CuratedOutfit",
    "FilterCriteria",
    "Garment",
    "GeneratedOutfit",
    "InvalidGarmentError",
    "OutfitEngineError",
    "OutfitGenerator",
    "OutfitQueryService",
    "OutfitSelection",
    "OutfitSource",
    "ScoreBreakdown",
    "UnknownCategoryError",
    "Wardrobe",
    "calculate_outfit_score",
    "filter_outfits",
    "validate_outfit",
    "validate_partial_selection",
]
