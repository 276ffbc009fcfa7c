"""Request bodies accepted by the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from outfit_engine.catalog.garment import OutfitSelection
from outfit_engine.catalog.schemas import CuratedOutfitPayload, GarmentPayload
from outfit_engine.services.query import FilterCriteria
from outfit_engine.services.wardrobe import Wardrobe


class SelectionRequest(BaseModel):
    items: list[GarmentPayload]

    def to_selection(self) -> OutfitSelection:
        return OutfitSelection(tuple(item.to_garment() for item in self.items))


class WardrobeRequest(BaseModel):
    wardrobe: list[GarmentPayload]

    def to_wardrobe(self) -> Wardrobe:
        return Wardrobe(item.to_garment() for item in self.wardrobe)


class RandomOutfitRequest(WardrobeRequest):
    seed: int | None = None


class AnchorRequest(WardrobeRequest):
    anchor_id: str


class CompatibleItemsRequest(WardrobeRequest):
    category: str
    selected_ids: list[str] = Field(default_factory=list)


class CriteriaRequest(BaseModel):
    min_score: int | None = None
    source: str | None = None
    loved_only: bool = False
    required_categories: list[str] = Field(default_factory=list)
    pinned_item_ids: list[str] = Field(default_factory=list)

    def to_criteria(self) -> FilterCriteria:
        return FilterCriteria(
            min_score=self.min_score,
            source=self.source,
            loved_only=self.loved_only,
            required_categories=frozenset(self.required_categories),
            pinned_item_ids=frozenset(self.pinned_item_ids),
        )


class SearchRequest(WardrobeRequest):
    search_term: str = ""
    criteria: CriteriaRequest = Field(default_factory=CriteriaRequest)
    curated: list[CuratedOutfitPayload] = Field(default_factory=list)


class ValidationResponse(BaseModel):
    valid: bool
    missing_categories: list[str]
    failed_rules: list[str]
