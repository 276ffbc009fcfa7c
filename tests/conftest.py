"""Shared fixtures for outfit engine tests."""

from __future__ import annotations

from typing import Callable, Iterable

import pytest

from outfit_engine.catalog.garment import Category, Garment
from outfit_engine.config.settings import Settings, get_settings
from outfit_engine.services.query import _filter_cached
from outfit_engine.services.wardrobe import Wardrobe

GarmentFactory = Callable[..., Garment]


@pytest.fixture(autouse=True)
def _fresh_caches() -> Iterable[None]:
    get_settings.cache_clear()
    _filter_cached.cache_clear()
    yield
    get_settings.cache_clear()
    _filter_cached.cache_clear()


@pytest.fixture
def make_garment() -> GarmentFactory:
    counter = {"next": 0}

    def _make(
        category: Category | str,
        formality: int,
        *,
        id: str | None = None,
        name: str = "",
        tags: Iterable[str] = (),
        brand: str | None = None,
    ) -> Garment:
        counter["next"] += 1
        category = Category.parse(category)
        return Garment(
            id=id or f"{category.name.lower()}-{counter['next']}",
            category=category,
            formality=formality,
            name=name or f"{category.value} {counter['next']}",
            style_tags=frozenset(tags),
            brand=brand,
        )

    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(random_max_attempts=50, include_optional=True, query_debounce_seconds=0.0)


@pytest.fixture
def refined_wardrobe(make_garment: GarmentFactory) -> Wardrobe:
    """Small wardrobe where every garment shares the ``Refined`` tag."""

    return Wardrobe(
        [
            make_garment(Category.SHIRT, 7, id="shirt-oxford", name="Oxford Shirt", tags={"Refined"}),
            make_garment(Category.SHIRT, 6, id="shirt-linen", name="Linen Shirt", tags={"Refined"}),
            make_garment(Category.PANTS, 6, id="pants-chino", name="Navy Chinos", tags={"Refined"}),
            make_garment(Category.SHOES, 7, id="shoes-loafer", name="Suede Loafers", tags={"Refined"}),
            make_garment(Category.OUTERWEAR, 8, id="outer-blazer", name="Wool Blazer", tags={"Refined"}),
            make_garment(Category.BELT, 7, id="belt-leather", name="Leather Belt", tags={"Refined"}),
        ],
    )
