"""Slug helpers for service and location URL segments."""

import re

_QUOTES = re.compile(r"['\"`]")
_WHITESPACE = re.compile(r"\s+")
_NOT_SLUG_CHAR = re.compile(r"[^a-z0-9-]")
_HYPHENS = re.compile(r"-+")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_slug(value: str) -> str:
    """Lowercase and trim an incoming path segment."""
    return (value or "").strip().lower()


def derive_slug(shop_name: str) -> str:
    """Recompute the SEO slug a shop name was assigned at creation.

    "Paws & Claws!!" -> "paws-and-claws", "A&B Kennels" -> "aandb-kennels"
    """
    text = (shop_name or "").lower().strip().replace("&", "and")
    text = _QUOTES.sub("", text)
    text = _WHITESPACE.sub("-", text)
    text = _NOT_SLUG_CHAR.sub("", text)
    return _HYPHENS.sub("-", text).strip("-")


def location_segment(value: str, fallback: str = "unknown") -> str:
    """URL segment for a state, district or area name."""
    return _NON_ALNUM.sub("-", (value or "").strip().lower()).strip("-") or fallback
