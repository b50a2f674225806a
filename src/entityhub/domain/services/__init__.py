"""Domain services - pure functions over domain state."""

from entityhub.domain.services.slug import base_slug, generate_slug, slugify

__all__ = [
    "base_slug",
    "generate_slug",
    "slugify",
]
