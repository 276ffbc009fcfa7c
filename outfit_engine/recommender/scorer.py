"""Outfit scoring utilities."""

from __future__ import annotations

import logging
import math
import statistics
from dataclasses import dataclass

from outfit_engine.catalog.garment import MAX_FORMALITY, MIN_FORMALITY, Category, OutfitSelection
from outfit_engine.recommender.layers import LayerReason, layer_weights

logger = logging.getLogger(__name__)

FORMALITY_WEIGHT = 0.93
CONSISTENCY_WEIGHT = 0.07
FORMALITY_SCALE = 10

# Population standard deviation of an even split between both formality extremes.
MAX_FORMALITY_STDEV = (MAX_FORMALITY - MIN_FORMALITY) / 2


@dataclass(frozen=True, slots=True)
class LayerAdjustment:
    """How much one garment contributed to the formality score."""

    category: Category
    item_id: str
    formality: int
    weight: float
    contribution: float
    reason: LayerReason


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    """
    Derived, ephemeral score for a selection.

    ``formality_score`` and ``consistency_bonus`` are on a 0-100 scale;
    ``total`` blends them with ``FORMALITY_WEIGHT``/``CONSISTENCY_WEIGHT``.
    ``percentage`` is ``None`` when the selection has nothing to score.
    """

    total: float
    percentage: int | None
    formality_score: float
    consistency_bonus: float
    layer_adjustments: tuple[LayerAdjustment, ...] = ()
    formality_weight: float = FORMALITY_WEIGHT
    consistency_weight: float = CONSISTENCY_WEIGHT

    @classmethod
    def unscored(cls) -> ScoreBreakdown:
        return cls(total=0.0, percentage=None, formality_score=0.0, consistency_bonus=0.0)

    @property
    def is_scored(self) -> bool:
        return self.percentage is not None

    @property
    def formality_points(self) -> float:
        return self.formality_score * self.formality_weight

    @property
    def consistency_points(self) -> float:
        return self.consistency_bonus * self.consistency_weight


def layer_adjustments(selection: OutfitSelection) -> tuple[LayerAdjustment, ...]:
    """Weight each garment's formality by how visible it is."""

    weights = layer_weights(selection)
    adjustments = []
    for garment in selection:
        layer = weights[garment.category]
        adjustments.append(
            LayerAdjustment(
                category=garment.category,
                item_id=garment.id,
                formality=garment.formality,
                weight=layer.weight,
                contribution=garment.formality * FORMALITY_SCALE * layer.weight,
                reason=layer.reason,
            ),
        )
    return tuple(adjustments)


def calculate_formality_score(adjustments: tuple[LayerAdjustment, ...]) -> float | None:
    """Weighted mean of formality on a 0-100 scale, or ``None`` without weight."""

    weight_sum = sum(adjustment.weight for adjustment in adjustments)
    if weight_sum <= 0:
        return None
    return sum(adjustment.contribution for adjustment in adjustments) / weight_sum


def calculate_consistency_bonus(selection: OutfitSelection) -> float:
    """
    Reward outfits whose pieces share a formality level.

    Returns 0 for fewer than two garments, 100 for identical formality
    values and falls linearly with the population standard deviation
    down to 0 at the widest possible spread.
    """

    values = [garment.formality for garment in selection]
    if len(values) < 2:
        return 0.0
    spread = statistics.pstdev(values)
    return max(0.0, 1.0 - spread / MAX_FORMALITY_STDEV) * 100


def calculate_outfit_score(selection: OutfitSelection) -> ScoreBreakdown:
    """Score a full or partial selection; never raises for a valid selection."""

    if not selection:
        return ScoreBreakdown.unscored()

    adjustments = layer_adjustments(selection)
    formality_score = calculate_formality_score(adjustments)
    if formality_score is None:
        return ScoreBreakdown.unscored()

    consistency_bonus = calculate_consistency_bonus(selection)
    total = formality_score * FORMALITY_WEIGHT + consistency_bonus * CONSISTENCY_WEIGHT
    if not all(math.isfinite(value) for value in (formality_score, consistency_bonus, total)):
        logger.warning("Non-finite score for outfit %s; treating as unscored", selection.item_ids)
        return ScoreBreakdown.unscored()

    return ScoreBreakdown(
        total=total,
        percentage=clamp_percentage(total),
        formality_score=formality_score,
        consistency_bonus=consistency_bonus,
        layer_adjustments=adjustments,
    )


def clamp_percentage(value: float) -> int:
    return max(0, min(100, round(value)))


def score_percentage(selection: OutfitSelection) -> int:
    """Percentage score for ranking; unscored selections rank as 0."""

    breakdown = calculate_outfit_score(selection)
    return breakdown.percentage if breakdown.percentage is not None else 0
