"""Typed representation of wardrobe items and outfit selections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Mapping


class OutfitEngineError(ValueError):
    """Raised when the engine is called with malformed input."""


class UnknownCategoryError(OutfitEngineError):
    """Raised when a category key is not part of the closed category set."""


class InvalidGarmentError(OutfitEngineError):
    """Raised when a garment (or a missing garment) breaks the input contract."""


class Category(str, Enum):
    """Garment slots an outfit can occupy."""

    OUTERWEAR = "Outerwear"
    SHIRT = "Shirt"
    UNDERSHIRT = "Undershirt"
    PANTS = "Pants"
    SHOES = "Shoes"
    BELT = "Belt"
    WATCH = "Watch"
    DRESS = "Dress"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: Category | str) -> Category:
        """Resolve a category from its value, member name or slot key."""

        if isinstance(value, Category):
            return value
        if not isinstance(value, str):
            raise UnknownCategoryError(f"Category must be a string, got {type(value).__name__}.")
        lookup = value.strip().lower()
        for member in cls:
            if lookup in (member.value.lower(), member.name.lower()):
                return member
        alias = CATEGORY_ALIASES.get(lookup)
        if alias is not None:
            return alias
        raise UnknownCategoryError(f"Unknown garment category: {value!r}.")

    @property
    def order(self) -> int:
        return CATEGORY_ORDER.index(self)


CATEGORY_ORDER: tuple[Category, ...] = tuple(Category)

# Names used by older wardrobe exports.
CATEGORY_ALIASES: dict[str, Category] = {
    "jacket": Category.OUTERWEAR,
    "overshirt": Category.OUTERWEAR,
    "jacket/overshirt": Category.OUTERWEAR,
}

MIN_FORMALITY = 1
MAX_FORMALITY = 10


class OutfitSource(str, Enum):
    """Where a generated outfit came from."""

    CURATED = "curated"
    GENERATED = "generated"


@dataclass(frozen=True, slots=True)
class Garment:
    """Read-only wardrobe item supplied by the wardrobe provider."""

    id: str
    category: Category
    formality: int
    name: str = ""
    style_tags: frozenset[str] = field(default_factory=frozenset)
    brand: str | None = None
    image_reference: str | None = None

    def __post_init__(self) -> None:
        if not self.id or not isinstance(self.id, str):
            raise InvalidGarmentError("Garment id must be a non-empty string.")
        object.__setattr__(self, "category", Category.parse(self.category))
        formality = self.formality
        if isinstance(formality, bool) or not isinstance(formality, int):
            raise InvalidGarmentError(
                f"Garment {self.id!r} formality must be an integer, got {formality!r}.",
            )
        if not MIN_FORMALITY <= formality <= MAX_FORMALITY:
            raise InvalidGarmentError(
                f"Garment {self.id!r} formality {formality} is outside "
                f"{MIN_FORMALITY}-{MAX_FORMALITY}.",
            )
        if isinstance(self.style_tags, str):
            tags: Iterable[str] = (self.style_tags,)
        else:
            tags = self.style_tags or ()
        object.__setattr__(self, "style_tags", frozenset(tag for tag in tags if tag))

    @property
    def sort_key(self) -> tuple[int, str]:
        return self.category.order, self.id


@dataclass(frozen=True, slots=True)
class OutfitSelection:
    """
    Partial mapping from category to at most one garment.

    Instances are immutable; ``with_item`` and ``without`` return a new
    selection with a single category replaced.
    """

    garments: tuple[Garment, ...] = ()

    def __post_init__(self) -> None:
        seen: set[Category] = set()
        for garment in self.garments:
            if garment is None:
                raise InvalidGarmentError("Outfit selection cannot contain None.")
            if garment.category in seen:
                raise InvalidGarmentError(
                    f"Category {garment.category.value} appears more than once in the selection.",
                )
            seen.add(garment.category)
        object.__setattr__(self, "garments", tuple(sorted(self.garments, key=lambda g: g.sort_key)))

    @classmethod
    def of(cls, *garments: Garment) -> OutfitSelection:
        return cls(tuple(garments))

    @classmethod
    def from_mapping(cls, mapping: Mapping[Category | str, Garment | None]) -> OutfitSelection:
        """Build a selection from ``{category: garment}``; ``None`` values mean an empty slot."""

        garments: list[Garment] = []
        for key, garment in mapping.items():
            category = Category.parse(key)
            if garment is None:
                continue
            _check_slot(garment, category)
            garments.append(garment)
        return cls(tuple(garments))

    def get(self, category: Category | str) -> Garment | None:
        category = Category.parse(category)
        for garment in self.garments:
            if garment.category is category:
                return garment
        return None

    def with_item(self, category: Category | str, garment: Garment) -> OutfitSelection:
        """Return a copy with ``category`` occupied by ``garment``."""

        category = Category.parse(category)
        _check_slot(garment, category)
        kept = tuple(g for g in self.garments if g.category is not category)
        return OutfitSelection(kept + (garment,))

    def without(self, category: Category | str) -> OutfitSelection:
        category = Category.parse(category)
        return OutfitSelection(tuple(g for g in self.garments if g.category is not category))

    @property
    def categories(self) -> frozenset[Category]:
        return frozenset(g.category for g in self.garments)

    @property
    def item_ids(self) -> tuple[str, ...]:
        """Ids in category order; identifies the combination."""

        return tuple(g.id for g in self.garments)

    def __contains__(self, category: object) -> bool:
        try:
            return self.get(category) is not None  # type: ignore[arg-type]
        except UnknownCategoryError:
            return False

    def __iter__(self) -> Iterator[Garment]:
        return iter(self.garments)

    def __len__(self) -> int:
        return len(self.garments)

    def __bool__(self) -> bool:
        return bool(self.garments)


@dataclass(frozen=True, slots=True)
class GeneratedOutfit:
    """Outfit selection with engine-owned derived fields attached."""

    selection: OutfitSelection
    score: int
    source: OutfitSource = OutfitSource.GENERATED
    loved: bool | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise OutfitEngineError(f"Outfit score {self.score} is outside 0-100.")
        object.__setattr__(self, "source", OutfitSource(self.source))

    @property
    def key(self) -> tuple[str, ...]:
        return self.selection.item_ids

    @property
    def garments(self) -> tuple[Garment, ...]:
        return self.selection.garments

    def get(self, category: Category | str) -> Garment | None:
        return self.selection.get(category)


@dataclass(frozen=True, slots=True)
class CuratedOutfit:
    """Stored outfit record: wardrobe ids plus the user's ``loved`` flag."""

    id: str
    item_ids: tuple[str, ...]
    loved: bool | None = None


def _check_slot(garment: Garment | None, category: Category) -> None:
    if garment is None:
        raise InvalidGarmentError(f"A garment is required for category {category.value}.")
    if not isinstance(garment, Garment):
        raise InvalidGarmentError(f"Expected a Garment, got {type(garment).__name__}.")
    if garment.category is not category:
        raise InvalidGarmentError(
            f"Garment {garment.id!r} is a {garment.category.value}, not a {category.value}.",
        )
