"""
URL-safe slugs derived from event titles.
"""

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def generate_slug(title: str) -> str:
    """
    Lowercase the title, drop anything but letters, digits, whitespace and
    hyphens, then join words with single hyphens.

    May return an empty string (e.g. for "!!!"); callers decide whether
    that is acceptable.
    """
    slug = str(title).strip().lower()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
