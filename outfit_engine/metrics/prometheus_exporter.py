"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter, Gauge


outfit_generation_total = Counter(
    "outfit_generation_total",
    "Total number of outfit generation calls.",
    ["operation"],
)

outfit_generation_exhausted_total = Counter(
    "outfit_generation_exhausted_total",
    "Random generations that ran out of attempts and returned a best effort.",
)

outfit_filter_total = Counter(
    "outfit_filter_total",
    "Outfit filter computations actually executed.",
)

outfit_filter_superseded_total = Counter(
    "outfit_filter_superseded_total",
    "Scheduled outfit filters dropped because a newer request arrived.",
)

outfit_filter_pending = Gauge(
    "outfit_filter_pending",
    "Number of scheduled outfit filters that have not settled yet.",
)
