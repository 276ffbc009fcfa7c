"""Garment model and wardrobe payloads."""
