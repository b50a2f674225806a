"""Slug generation.

Examples:
    "Home" -> "home"
    "Crème Brûlée" -> "creme-brulee"
    "  Admin / Owner_2 " -> "admin-owner-2"

When the base slug is taken within the scope, the smallest free numeric
suffix starting at 2 is appended: "home", "home-2", "home-3", ...
"""

import re
import unicodedata
from collections.abc import Collection

_SEPARATOR_RE = re.compile(r"[\W_]+")


def slugify(value: str) -> str:
    """Normalize a display name into a base slug (may be empty)."""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    slug = _SEPARATOR_RE.sub("-", stripped.casefold())
    return slug.strip("-")


def base_slug(display_name: str, fallback: str) -> str:
    """Base slug for a display name, or for ``fallback`` when it slugifies to nothing."""
    return slugify(display_name) or slugify(fallback)


def generate_slug(
    display_name: str,
    existing_slugs: Collection[str],
    fallback: str,
) -> str:
    """Derive a slug not present in ``existing_slugs``.

    ``existing_slugs`` is the scope snapshot; the caller's insert remains the
    authoritative uniqueness check. ``fallback`` is the base when the display
    name has no alphanumeric characters.
    """
    base = base_slug(display_name, fallback)
    if base not in existing_slugs:
        return base
    suffix = 2
    while f"{base}-{suffix}" in existing_slugs:
        suffix += 1
    return f"{base}-{suffix}"
