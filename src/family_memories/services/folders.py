"""Folder path conventions used as the album identity."""

import re

MEMORIES_ROOT = "memories"
TRAVELS_ROOT = "travels"
PHOTOS = "photos"
SCHOOL_WORK = "school-work"
MEMORY_CATEGORIES = (PHOTOS, SCHOOL_WORK)
YEAR_BUCKETS = (
    "0-12-months",
    "1-year",
    "2-years",
    "3-years",
    "4-years",
    "5-years",
    "6-years",
    "7-years",
    "8-years",
    "9-years",
    "10-years",
)

_WHITESPACE = re.compile(r"\s+")


def memories_folder(year: str, category: str) -> str:
    """Return the folder holding one category of a year bucket."""
    return f"{MEMORIES_ROOT}/{year}/{category}"


def travel_slug(travel_name: str) -> str:
    """Derive the durable travel identifier from its display name."""
    return _WHITESPACE.sub("-", travel_name.strip()).lower()


def travel_folder(slug: str) -> str:
    """Return the folder holding a travel album."""
    return f"{TRAVELS_ROOT}/{slug}"


def humanize_slug(slug: str) -> str:
    """Turn ``summer-trip`` into ``Summer Trip``."""
    return " ".join(word.capitalize() for word in slug.replace("-", " ").split())
