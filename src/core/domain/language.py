"""Language utilities for BizBoost.

This module centralizes the output languages offered to business owners.
Keeping it in the domain layer allows both CLI and service layers to share
a single source of truth without creating circular imports with adapters.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for generated copy."""

    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"
    URDU = "Urdu"
    HINDI = "Hindi"
    MANDARIN = "Mandarin"
    ARABIC = "Arabic"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.ENGLISH

