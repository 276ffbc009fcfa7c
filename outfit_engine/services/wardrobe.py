"""Read-only wardrobe collection supplied by the wardrobe provider."""

from __future__ import annotations

from typing import Iterable, Iterator

from outfit_engine.catalog.garment import (
    CATEGORY_ORDER,
    Category,
    Garment,
    InvalidGarmentError,
    OutfitSelection,
)


class Wardrobe:
    """Garments grouped by category, in the order the provider supplied them."""

    def __init__(self, garments: Iterable[Garment] = ()) -> None:
        self._by_id: dict[str, Garment] = {}
        self._by_category: dict[Category, list[Garment]] = {}
        for garment in garments:
            if not isinstance(garment, Garment):
                raise InvalidGarmentError(f"Expected a Garment, got {type(garment).__name__}.")
            if garment.id in self._by_id:
                raise InvalidGarmentError(f"Duplicate garment id {garment.id!r} in wardrobe.")
            self._by_id[garment.id] = garment
            self._by_category.setdefault(garment.category, []).append(garment)

    @classmethod
    def coerce(cls, wardrobe: Wardrobe | Iterable[Garment]) -> Wardrobe:
        if isinstance(wardrobe, Wardrobe):
            return wardrobe
        if wardrobe is None:
            raise InvalidGarmentError("A wardrobe is required.")
        return cls(wardrobe)

    def items(self, category: Category | str) -> tuple[Garment, ...]:
        """Return garments of ``category`` (empty when the wardrobe has none)."""

        return tuple(self._by_category.get(Category.parse(category), ()))

    def get(self, item_id: str) -> Garment | None:
        return self._by_id.get(item_id)

    def require(self, item_id: str) -> Garment:
        garment = self._by_id.get(item_id)
        if garment is None:
            raise InvalidGarmentError(f"Garment {item_id!r} is not in the wardrobe.")
        return garment

    def selection_for(self, item_ids: Iterable[str]) -> OutfitSelection:
        """Build a selection from wardrobe ids; unknown ids fail fast."""

        return OutfitSelection(tuple(self.require(item_id) for item_id in item_ids))

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(category for category in CATEGORY_ORDER if self._by_category.get(category))

    def summarise(self) -> dict[str, int]:
        """Return a lightweight per-category count of the wardrobe."""

        return {category.value: len(self._by_category[category]) for category in self.categories}

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def __iter__(self) -> Iterator[Garment]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __repr__(self) -> str:
        return f"Wardrobe({self.summarise()!r})"
