"""
Tests for slug generation.
"""

import re

import pytest

from evently.domain import generate_slug


@pytest.mark.parametrize(
    "title, expected",
    [
        ("Hello, World!!", "hello-world"),
        ("Python Meetup 2026", "python-meetup-2026"),
        ("  leading and trailing  ", "leading-and-trailing"),
        ("multi   space\tand\nnewline", "multi-space-and-newline"),
        ("already-a-slug", "already-a-slug"),
        ("dashes -- everywhere --", "dashes-everywhere"),
        ("-edge-", "edge"),
        ("Café Crème", "caf-crme"),
    ],
)
def test_generate_slug(title, expected):
    assert generate_slug(title) == expected


def test_blank_title_gives_empty_slug():
    """Empty output is not an error here; the event pipeline rejects it."""
    assert generate_slug("   ") == ""
    assert generate_slug("!!!") == ""


def test_slug_shape():
    """Only lowercase letters, digits and single inner hyphens."""
    titles = ["A  B  C", "--x--y--", "Rock & Roll: Live!", "2026 / Q4 -- kickoff"]
    for title in titles:
        slug = generate_slug(title)
        assert re.fullmatch(r"[a-z0-9]+(?:-[a-z0-9]+)*", slug), slug


def test_generate_slug_is_idempotent():
    slug = generate_slug("Hello, World!!")
    assert generate_slug(slug) == slug
