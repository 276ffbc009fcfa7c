"""Compatibility rules, layer weighting, scoring and validation."""

from .layers import layer_weight_for, layer_weights
from .rules_engine import MAX_FORMALITY_SPREAD, RulesEngine
from .scorer import CONSISTENCY_WEIGHT, FORMALITY_WEIGHT, ScoreBreakdown, calculate_outfit_score
from .validation import validate_outfit, validate_partial_selection

__all__ = [
    "CONSISTENCY_WEIGHT",
    "FORMALITY_WEIGHT",
    "MAX_FORMALITY_SPREAD",
    "RulesEngine",
    "ScoreBreakdown",
    "calculate_outfit_score",
    "layer_weight_for",
    "layer_weights",
    "validate_outfit",
    "validate_partial_selection",
]
