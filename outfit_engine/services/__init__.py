"""Wardrobe collection, outfit generation and outfit search."""
