"""Category slug lookup for directory URLs."""

from __future__ import annotations

from typing import Optional

CATEGORY_SLUG_MAP: dict[str, str] = {
    "getting-started": "Getting Started with Web3",
    "digital-assets": "Managing Your Digital Assets",
    "communities": "Participating in Decentralized Communities",
    "creative-publishing": "Creative & Publishing",
    "data-infrastructure": "Data & Infrastructure",
    "real-world-apps": "Real-World Applications",
}


def get_category_by_slug(slug: str) -> Optional[str]:
    """Return the category title for a URL slug, or None."""
    return CATEGORY_SLUG_MAP.get(slug)


def get_slug_by_category(category_title: str) -> Optional[str]:
    """Return the URL slug for a category title, or None."""
    for slug, title in CATEGORY_SLUG_MAP.items():
        if title == category_title:
            return slug
    return None
