"""Tests for the translation helper."""

from daysky.i18n import _STRINGS, t
from daysky.models import DaySchedule
from daysky.schedule import sundial_events


def test_english_and_korean():
    assert t("sunrise", "en") == "Sunrise"
    assert t("sunrise", "ko") == "일출"


def test_unknown_language_falls_back_to_english():
    assert t("full_moon", "fr") == "Full Moon"


def test_unknown_key_returns_key():
    assert t("no_such_key", "ko") == "no_such_key"


def test_every_event_and_label_translated(schedule):
    keys = set(DaySchedule.__dataclass_fields__) | {"midnight"}
    keys |= {event.label for event in sundial_events(schedule)}
    for key in keys:
        assert set(_STRINGS[key]) == {"en", "ko"}, key
