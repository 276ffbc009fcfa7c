"""Print the ranked outfit space for a wardrobe JSON file."""

from __future__ import annotations

import argparse
from typing import Iterable, Sequence

from outfit_engine.catalog.garment import GeneratedOutfit
from outfit_engine.catalog.loader import load_wardrobe
from outfit_engine.monitoring.logging import configure_logging
from outfit_engine.services.outfit import OutfitGenerator, rank_key
from outfit_engine.services.query import FilterCriteria, filter_outfits


def _format_outfit(outfit: GeneratedOutfit) -> str:
    marker = "♥" if outfit.loved else " "
    pieces = ", ".join(f"{g.category.value}: {g.name or g.id}" for g in outfit.garments)
    return f"{marker} {outfit.score:>3}% [{outfit.source.value}] {pieces}"


def print_outfits(outfits: Iterable[GeneratedOutfit]) -> None:
    for outfit in outfits:
        print(_format_outfit(outfit))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("wardrobe", help="Path to the wardrobe JSON document.")
    parser.add_argument("--search", default="", help="Only outfits with a garment name containing this text.")
    parser.add_argument("--min-score", type=int, default=None)
    parser.add_argument("--limit", type=int, default=20)
    parser.add_argument("--random", action="store_true", help="Print one random outfit instead.")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging()

    loaded = load_wardrobe(args.wardrobe)
    generator = OutfitGenerator()
    if args.random:
        outfit = generator.generate_random_outfit(loaded.wardrobe)
        print(_format_outfit(outfit) if outfit else "Wardrobe has nothing to wear.")
        return

    curated = generator.curated_outfits(loaded.curated, loaded.wardrobe)
    outfits = sorted(curated + generator.get_all_outfits(loaded.wardrobe), key=rank_key)
    matches = filter_outfits(outfits, args.search, FilterCriteria(min_score=args.min_score))
    print_outfits(matches[: args.limit])


if __name__ == "__main__":
    main()
