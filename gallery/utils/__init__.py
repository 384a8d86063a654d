"""Utility helpers shared across the gallery package."""
