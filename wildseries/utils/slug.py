# wildseries/utils/slug.py
"""
Slug generation for program and episode titles.

    >>> generate_slug("  Walking Dead: Saison 1 ")
    'walking-dead-saison-1'
    >>> generate_slug("Éléphant & Château")
    'elephant-chateau'
    >>> generate_slug("New", reserved=PROGRAM_RESERVED_SLUGS)
    'new-1'
"""

from typing import Collection

from slugify import slugify

# Path segments that already name a route under /programs/.
PROGRAM_RESERVED_SLUGS = frozenset({"new"})


def generate_slug(title: str, reserved: Collection[str] = ()) -> str:
    """Lowercase ASCII slug, words joined by single hyphens, no edge hyphens.

    Deterministic for a given title. A slug in `reserved` gets a `-1`
    suffix. Uniqueness is not checked; callers that resolve by slug take
    the oldest match.
    """
    slug = slugify(title or "", lowercase=True, separator="-")
    if slug in reserved:
        slug = f"{slug}-1"
    return slug


def has_slug(title: str) -> bool:
    """True when `title` yields a non-empty slug (at least one letter or digit)."""
    return bool(generate_slug(title))


__all__ = ["PROGRAM_RESERVED_SLUGS", "generate_slug", "has_slug"]
