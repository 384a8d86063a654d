"""
Gallery Repository
Introductory remarks: This module is part of the Gallery codebase.

Central configuration constants for the gallery domain core.
"""

from __future__ import annotations

# Collection keys -----------------------------------------------------------

ARTISTS_KEY = "artists"
"""Key-value store key holding the artist collection."""

ARTWORKS_KEY = "artworks"
"""Key-value store key holding the artwork collection."""

EXHIBITIONS_KEY = "exhibitions"
"""Key-value store key holding the exhibition collection."""

EVALUATIONS_KEY = "evaluations"
"""Key-value store key holding the evaluation collection."""

COLLECTION_KEYS = (ARTISTS_KEY, ARTWORKS_KEY, EXHIBITIONS_KEY, EVALUATIONS_KEY)

# Evaluation bounds ----------------------------------------------------------

MIN_RATING = 1
MAX_RATING = 10

# Read models ----------------------------------------------------------------

DASHBOARD_RECENT_ARTWORKS = 3
"""Number of most recently added artworks shown on the dashboard."""

UNKNOWN_LABEL = "Unknown"
"""Placeholder shown when a listing meets a dangling reference."""

UNKNOWN_EXHIBITION_LABEL = "Unknown Exhibition"
