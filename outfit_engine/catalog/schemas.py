"""Pydantic payloads describing wardrobe records from external providers."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field, field_validator

from outfit_engine.catalog.garment import (
    MAX_FORMALITY,
    MIN_FORMALITY,
    Category,
    CuratedOutfit,
    Garment,
    GeneratedOutfit,
)
from outfit_engine.recommender.scorer import LayerAdjustment, ScoreBreakdown


class GarmentPayload(BaseModel):
    """Wardrobe item as stored by the wardrobe provider."""

    id: str = Field(min_length=1)
    category: str
    formality: int = Field(
        ge=MIN_FORMALITY,
        le=MAX_FORMALITY,
        validation_alias=AliasChoices("formality", "formality_score"),
    )
    name: str = ""
    style_tags: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("style_tags", "capsule_tags"),
    )
    brand: str | None = None
    image_reference: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image_reference", "image_url"),
    )

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        return Category.parse(value).value

    def to_garment(self) -> Garment:
        return Garment(
            id=self.id,
            category=Category.parse(self.category),
            formality=self.formality,
            name=self.name,
            style_tags=frozenset(self.style_tags),
            brand=self.brand,
            image_reference=self.image_reference,
        )

    @classmethod
    def from_garment(cls, garment: Garment) -> GarmentPayload:
        return cls(
            id=garment.id,
            category=garment.category.value,
            formality=garment.formality,
            name=garment.name,
            style_tags=sorted(garment.style_tags),
            brand=garment.brand,
            image_reference=garment.image_reference,
        )


class CuratedOutfitPayload(BaseModel):
    id: str = Field(min_length=1)
    items: list[str]
    loved: bool | None = None

    def to_curated(self) -> CuratedOutfit:
        return CuratedOutfit(id=self.id, item_ids=tuple(self.items), loved=self.loved)


class WardrobeDocument(BaseModel):
    """Top-level wardrobe export: garments and optional curated outfits."""

    items: list[GarmentPayload]
    outfits: list[CuratedOutfitPayload] = Field(default_factory=list)


class LayerAdjustmentPayload(BaseModel):
    category: str
    item_id: str
    formality: int
    weight: float
    contribution: float
    reason: str

    @classmethod
    def from_adjustment(cls, adjustment: LayerAdjustment) -> LayerAdjustmentPayload:
        return cls(
            category=adjustment.category.value,
            item_id=adjustment.item_id,
            formality=adjustment.formality,
            weight=adjustment.weight,
            contribution=adjustment.contribution,
            reason=adjustment.reason.value,
        )


class ScoreBreakdownPayload(BaseModel):
    total: float
    percentage: int | None
    formality_score: float
    consistency_bonus: float
    formality_weight: float
    consistency_weight: float
    layer_adjustments: list[LayerAdjustmentPayload]

    @classmethod
    def from_breakdown(cls, breakdown: ScoreBreakdown) -> ScoreBreakdownPayload:
        return cls(
            total=breakdown.total,
            percentage=breakdown.percentage,
            formality_score=breakdown.formality_score,
            consistency_bonus=breakdown.consistency_bonus,
            formality_weight=breakdown.formality_weight,
            consistency_weight=breakdown.consistency_weight,
            layer_adjustments=[
                LayerAdjustmentPayload.from_adjustment(adjustment)
                for adjustment in breakdown.layer_adjustments
            ],
        )


class GeneratedOutfitPayload(BaseModel):
    id: str | None
    score: int
    source: str
    loved: bool | None
    items: list[GarmentPayload]

    @classmethod
    def from_outfit(cls, outfit: GeneratedOutfit) -> GeneratedOutfitPayload:
        return cls(
            id=outfit.id,
            score=outfit.score,
            source=outfit.source.value,
            loved=outfit.loved,
            items=[GarmentPayload.from_garment(garment) for garment in outfit.garments],
        )
