"""Tests for the outfit listing script."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from scripts.generate_outfits import main


@pytest.fixture
def wardrobe_file(tmp_path: Path) -> Path:
    path = tmp_path / "wardrobe.json"
    path.write_text(
        json.dumps(
            {
                "items": [
                    {"id": "s1", "category": "Shirt", "formality": 7, "name": "Oxford Shirt"},
                    {"id": "p1", "category": "Pants", "formality": 6, "name": "Navy Chinos"},
                    {"id": "f1", "category": "Shoes", "formality": 7, "name": "Suede Loafers"},
                ],
                "outfits": [{"id": "fav", "items": ["s1", "p1"], "loved": True}],
            },
        ),
        encoding="utf-8",
    )
    return path


def test_lists_ranked_outfits(wardrobe_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main([str(wardrobe_file)])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert "Shoes: Suede Loafers" in lines[0]
    assert lines[1].startswith("♥")
    assert "[curated]" in lines[1]


def test_search_and_random(wardrobe_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main([str(wardrobe_file), "--search", "velvet"])
    assert capsys.readouterr().out == ""

    main([str(wardrobe_file), "--random"])
    assert "Oxford Shirt" in capsys.readouterr().out
