"""Search and filtering over pre-generated outfit lists."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, Iterable, Sequence

from outfit_engine.catalog.garment import (
    Category,
    GeneratedOutfit,
    OutfitEngineError,
    OutfitSource,
)
from outfit_engine.config.settings import Settings, get_settings
from outfit_engine.metrics.prometheus_exporter import (
    outfit_filter_pending,
    outfit_filter_superseded_total,
    outfit_filter_total,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Structured filters applied on top of the free-text search."""

    min_score: int | None = None
    source: OutfitSource | None = None
    loved_only: bool = False
    required_categories: frozenset[Category] = field(default_factory=frozenset)
    pinned_item_ids: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.source is not None:
            try:
                source = OutfitSource(self.source)
            except ValueError as exc:
                raise OutfitEngineError(f"Unknown outfit source: {self.source!r}.") from exc
            object.__setattr__(self, "source", source)
        object.__setattr__(
            self,
            "required_categories",
            frozenset(Category.parse(category) for category in self.required_categories),
        )
        object.__setattr__(self, "pinned_item_ids", frozenset(self.pinned_item_ids))

    def matches(self, outfit: GeneratedOutfit) -> bool:
        if self.min_score is not None and outfit.score < self.min_score:
            return False
        if self.source is not None and outfit.source is not self.source:
            return False
        if self.loved_only and not outfit.loved:
            return False
        categories = outfit.selection.categories
        if not self.required_categories <= categories:
            return False
        return self.pinned_item_ids <= set(outfit.key)


NO_CRITERIA = FilterCriteria()


def normalise_search_term(search_term: str | None) -> str:
    """Casefold ``search_term``; a blank term becomes empty, any other is kept as typed."""

    term = search_term or ""
    if not term.strip():
        return ""
    return term.casefold()


def matches_search(outfit: GeneratedOutfit, term: str) -> bool:
    """Case-insensitive substring match against the names of the outfit's garments."""

    if not term:
        return True
    return any(term in garment.name.casefold() for garment in outfit.garments)


def filter_outfits(
    outfits: Iterable[GeneratedOutfit],
    search_term: str | None = "",
    criteria: FilterCriteria | None = None,
) -> list[GeneratedOutfit]:
    """
    Return outfits matching ``search_term`` and ``criteria`` in input order.

    Results are memoised on the ``(outfits, search_term, criteria)`` key, so
    repeating a call with unchanged arguments does no filtering work.
    """

    return list(
        _filter_cached(tuple(outfits), normalise_search_term(search_term), criteria or NO_CRITERIA),
    )


@lru_cache(maxsize=64)
def _filter_cached(
    outfits: tuple[GeneratedOutfit, ...],
    term: str,
    criteria: FilterCriteria,
) -> tuple[GeneratedOutfit, ...]:
    outfit_filter_total.inc()
    return tuple(outfit for outfit in outfits if criteria.matches(outfit) and matches_search(outfit, term))


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Filtered outfits delivered for one submitted request."""

    request_id: int
    search_term: str
    criteria: FilterCriteria
    outfits: tuple[GeneratedOutfit, ...]


class OutfitQueryService:
    """
    Debounced filtering where the most recent request wins.

    ``submit`` returns immediately with a task; the filter runs after the
    debounce delay in a worker thread. A request superseded by a newer one
    resolves to ``None`` and never reaches ``on_result``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        on_result: Callable[[QueryResult], None] | None = None,
    ) -> None:
        self._delay = (settings or get_settings()).query_debounce_seconds
        self._on_result = on_result
        self._latest_request = 0
        self._delivered_request = 0
        self._latest_result: QueryResult | None = None
        self._tasks: set[asyncio.Task[QueryResult | None]] = set()

    @property
    def latest_result(self) -> QueryResult | None:
        return self._latest_result

    def submit(
        self,
        outfits: Sequence[GeneratedOutfit],
        search_term: str | None = "",
        criteria: FilterCriteria | None = None,
    ) -> asyncio.Task[QueryResult | None]:
        """Schedule a filter for the newest input; must be called inside a running loop."""

        self._latest_request += 1
        request_id = self._latest_request
        task = asyncio.get_running_loop().create_task(
            self._run(request_id, tuple(outfits), search_term or "", criteria or NO_CRITERIA),
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def search(
        self,
        outfits: Sequence[GeneratedOutfit],
        search_term: str | None = "",
        criteria: FilterCriteria | None = None,
    ) -> QueryResult | None:
        """Submit and wait; ``None`` if a newer request arrived meanwhile."""

        return await self.submit(outfits, search_term, criteria)

    async def drain(self) -> QueryResult | None:
        """Wait until every scheduled filter settles and return the latest delivered result."""

        while self._tasks:
            await asyncio.gather(*self._tasks)
        return self._latest_result

    async def _run(
        self,
        request_id: int,
        outfits: tuple[GeneratedOutfit, ...],
        search_term: str,
        criteria: FilterCriteria,
    ) -> QueryResult | None:
        try:
            outfit_filter_pending.inc()
            if self._delay:
                await asyncio.sleep(self._delay)
            if self._is_stale(request_id):
                return self._supersede(request_id)

            filtered = await asyncio.to_thread(filter_outfits, outfits, search_term, criteria)
            if self._is_stale(request_id):
                return self._supersede(request_id)

            result = QueryResult(
                request_id=request_id,
                search_term=search_term,
                criteria=criteria,
                outfits=tuple(filtered),
            )
            self._delivered_request = request_id
            self._latest_result = result
            if self._on_result is not None:
                self._on_result(result)
            return result
        finally:
            outfit_filter_pending.dec()

    def _is_stale(self, request_id: int) -> bool:
        return request_id != self._latest_request or request_id <= self._delivered_request

    @staticmethod
    def _supersede(request_id: int) -> None:
        outfit_filter_superseded_total.inc()
        logger.debug("Dropping superseded filter request %d", request_id)
        return None
