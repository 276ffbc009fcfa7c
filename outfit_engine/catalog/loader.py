"""JSON-backed wardrobe provider."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from outfit_engine.catalog.garment import CuratedOutfit, OutfitEngineError
from outfit_engine.catalog.schemas import WardrobeDocument
from outfit_engine.services.wardrobe import Wardrobe

logger = logging.getLogger(__name__)


class WardrobeLoadError(OutfitEngineError):
    """Raised when a wardrobe document cannot be parsed."""


@dataclass(slots=True)
class LoadedWardrobe:
    wardrobe: Wardrobe
    curated: list[CuratedOutfit]


def parse_wardrobe(payload: Any) -> LoadedWardrobe:
    """Validate a decoded document: ``{"items": [...], "outfits": [...]}`` or a bare item list."""

    if isinstance(payload, list):
        payload = {"items": payload}
    try:
        document = WardrobeDocument.model_validate(payload)
    except ValidationError as exc:
        raise WardrobeLoadError(f"Invalid wardrobe document: {exc}") from exc

    wardrobe = Wardrobe(item.to_garment() for item in document.items)
    curated = [outfit.to_curated() for outfit in document.outfits]
    logger.info("Loaded %d garments and %d curated outfits", len(wardrobe), len(curated))
    return LoadedWardrobe(wardrobe=wardrobe, curated=curated)


def load_wardrobe(path: str | Path) -> LoadedWardrobe:
    """Read and validate a wardrobe JSON file."""

    file_path = Path(path)
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WardrobeLoadError(f"Cannot read wardrobe file {file_path}: {exc}") from exc
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise WardrobeLoadError(f"Wardrobe file {file_path} is not valid JSON.") from exc
    return parse_wardrobe(payload)
