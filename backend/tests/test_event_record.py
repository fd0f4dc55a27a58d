"""
Tests for the event write pipeline (validation, normalization, derivation).
"""

import pytest

from evently.core.errors import (
    EmptyFieldError,
    InvalidArrayElementError,
    InvalidFormatError,
    InvalidValueError,
    MissingFieldError,
)
from evently.domain import prepare_event


@pytest.fixture
def stored(event_payload):
    """A record as it would be after a successful create."""
    return prepare_event(event_payload)


def test_create_derives_slug_date_and_time(event_payload):
    record = prepare_event(event_payload)
    assert record["title"] == "Python Meetup: Async Deep Dive!"
    assert record["slug"] == "python-meetup-async-deep-dive"
    assert record["date"] == "2026-11-20"
    assert record["time"] == "18:30"
    assert record["agenda"] == ["Doors open", "Talks", "Networking"]


def test_create_ignores_caller_slug_and_unknown_fields(event_payload):
    record = prepare_event({**event_payload, "slug": "hand-picked", "admin": True})
    assert record["slug"] == "python-meetup-async-deep-dive"
    assert "admin" not in record


def test_title_without_letters_or_digits_is_rejected(event_payload):
    with pytest.raises(InvalidValueError) as exc_info:
        prepare_event({**event_payload, "title": "!!! ???"})
    assert exc_info.value.field == "title"


def test_create_requires_every_field(event_payload):
    del event_payload["organizer"]
    with pytest.raises(MissingFieldError) as exc_info:
        prepare_event(event_payload)
    assert exc_info.value.field == "organizer"


def test_blank_date_is_empty_not_format_error(event_payload):
    with pytest.raises(EmptyFieldError) as exc_info:
        prepare_event({**event_payload, "date": "  "})
    assert exc_info.value.field == "date"


def test_bad_agenda_element(event_payload):
    with pytest.raises(InvalidArrayElementError) as exc_info:
        prepare_event({**event_payload, "agenda": ["Talk", "", " Lunch "]})
    assert exc_info.value.field == "agenda"
    assert exc_info.value.index == 1


def test_bad_time_carries_field(event_payload):
    with pytest.raises(InvalidFormatError) as exc_info:
        prepare_event({**event_payload, "time": "9:5"})
    assert exc_info.value.field == "time"


def test_length_is_checked_after_trimming(event_payload):
    record = prepare_event({**event_payload, "title": "Ok" + " " * 260})
    assert record["title"] == "Ok"
    assert record["slug"] == "ok"


def test_too_long_value_is_rejected(event_payload):
    with pytest.raises(InvalidValueError) as exc_info:
        prepare_event({**event_payload, "mode": "x" * 51})
    assert exc_info.value.field == "mode"
    assert exc_info.value.message == "mode must be at most 50 characters"


def test_update_without_title_keeps_slug(stored):
    record = prepare_event({"venue": "New Hall"}, current={**stored, "slug": "legacy-slug"})
    assert record["slug"] == "legacy-slug"
    assert record["venue"] == "New Hall"


def test_update_with_title_rederives_slug(stored):
    record = prepare_event({"title": "Renamed Event"}, current=stored)
    assert record["slug"] == "renamed-event"


def test_update_only_normalizes_supplied_date_and_time(stored):
    record = prepare_event({"time": "9am"}, current=stored)
    assert record["time"] == "09:00"
    assert record["date"] == stored["date"]

    record = prepare_event({"date": "2027-01-02T10:00:00Z"}, current=stored)
    assert record["date"] == "2027-01-02"
    assert record["time"] == stored["time"]


def test_update_does_not_reparse_untouched_stored_values(stored):
    """Stored values are trusted; only the change-set goes through the normalizers."""
    legacy = {**stored, "time": "18:30"}
    record = prepare_event({"overview": "Updated"}, current=legacy)
    assert record["time"] == "18:30"


def test_update_still_validates_supplied_fields(stored):
    with pytest.raises(EmptyFieldError):
        prepare_event({"venue": "   "}, current=stored)
    with pytest.raises(InvalidArrayElementError):
        prepare_event({"tags": ["ok", 1]}, current=stored)


def test_update_with_explicit_none_is_missing(stored):
    with pytest.raises(MissingFieldError):
        prepare_event({"mode": None}, current=stored)
