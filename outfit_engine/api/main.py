"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
import random

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from outfit_engine.api.requests import (
    AnchorRequest,
    CompatibleItemsRequest,
    RandomOutfitRequest,
    SearchRequest,
    SelectionRequest,
    ValidationResponse,
    WardrobeRequest,
)
from outfit_engine.catalog.garment import OutfitEngineError
from outfit_engine.catalog.schemas import (
    GarmentPayload,
    GeneratedOutfitPayload,
    ScoreBreakdownPayload,
)
from outfit_engine.config.settings import get_settings
from outfit_engine.monitoring.logging import configure_logging
from outfit_engine.recommender.rules_engine import default_rules_engine
from outfit_engine.recommender.scorer import calculate_outfit_score
from outfit_engine.recommender.validation import missing_categories, validate_outfit
from outfit_engine.services.outfit import OutfitGenerator, rank_key
from outfit_engine.services.query import filter_outfits

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title="Outfit Engine API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
    )
    app.mount("/metrics", make_asgi_app())

    @app.exception_handler(OutfitEngineError)
    async def engine_error_handler(_: Request, exc: OutfitEngineError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.post("/outfits/score", tags=["outfits"])
    def score_outfit(body: SelectionRequest) -> ScoreBreakdownPayload:
        return ScoreBreakdownPayload.from_breakdown(calculate_outfit_score(body.to_selection()))

    @app.post("/outfits/validate", tags=["outfits"])
    def validate(body: SelectionRequest) -> ValidationResponse:
        selection = body.to_selection()
        failed_rules = default_rules_engine.evaluate(selection)
        return ValidationResponse(
            valid=validate_outfit(selection) and not failed_rules,
            missing_categories=missing_categories(selection),
            failed_rules=failed_rules,
        )

    @app.post("/outfits/random", tags=["outfits"])
    def random_outfit(body: RandomOutfitRequest) -> GeneratedOutfitPayload | None:
        generator = OutfitGenerator(settings, rng=random.Random(body.seed))
        outfit = generator.generate_random_outfit(body.to_wardrobe())
        return GeneratedOutfitPayload.from_outfit(outfit) if outfit else None

    @app.post("/outfits/anchor", tags=["outfits"])
    def anchor_outfits(body: AnchorRequest) -> list[GeneratedOutfitPayload]:
        wardrobe = body.to_wardrobe()
        anchor = wardrobe.get(body.anchor_id)
        if anchor is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Garment {body.anchor_id!r} is not in the wardrobe.",
            )
        outfits = OutfitGenerator(settings).get_outfits_for_anchor(anchor, wardrobe)
        return [GeneratedOutfitPayload.from_outfit(outfit) for outfit in outfits]

    @app.post("/outfits/all", tags=["outfits"])
    def all_outfits(body: WardrobeRequest) -> list[GeneratedOutfitPayload]:
        outfits = OutfitGenerator(settings).get_all_outfits(body.to_wardrobe())
        return [GeneratedOutfitPayload.from_outfit(outfit) for outfit in outfits]

    @app.post("/outfits/compatible", tags=["outfits"])
    def compatible_items(body: CompatibleItemsRequest) -> list[GarmentPayload]:
        wardrobe = body.to_wardrobe()
        selection = wardrobe.selection_for(body.selected_ids)
        items = OutfitGenerator(settings).get_compatible_items(selection, body.category, wardrobe)
        return [GarmentPayload.from_garment(item) for item in items]

    @app.post("/outfits/search", tags=["outfits"])
    def search_outfits(body: SearchRequest) -> list[GeneratedOutfitPayload]:
        wardrobe = body.to_wardrobe()
        generator = OutfitGenerator(settings)
        curated = generator.curated_outfits((item.to_curated() for item in body.curated), wardrobe)
        outfits = sorted(curated + generator.get_all_outfits(wardrobe), key=rank_key)
        matches = filter_outfits(outfits, body.search_term, body.criteria.to_criteria())
        return [GeneratedOutfitPayload.from_outfit(outfit) for outfit in matches]

    logger.info("Outfit Engine API initialised (environment=%s)", settings.environment)
    return app


app = create_app()
