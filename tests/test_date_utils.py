from datetime import date, datetime, timedelta, timezone

import pytest

from ravehub.date_utils import (
    EPOCH,
    format_day_month_es,
    format_with_offset,
    normalize_offset,
    parse_iso,
    short_weekday_es,
    to_datetime,
)

UTC = timezone.utc


@pytest.mark.parametrize("value, expected", [
    ({"seconds": 0}, EPOCH),
    ({"_seconds": 60, "_nanoseconds": 0}, EPOCH + timedelta(seconds=60)),
    (1700000000, datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)),
    (1700000000000, datetime(2023, 11, 14, 22, 13, 20, tzinfo=UTC)),
    ("2025-03-15T20:00:00Z", datetime(2025, 3, 15, 20, 0, tzinfo=UTC)),
    ("2025-03-15T20:00:00-03:00", datetime(2025, 3, 15, 23, 0, tzinfo=UTC)),
    ("2025-03-15T20:00:00.123Z", datetime(2025, 3, 15, 20, 0, 0, 123000, tzinfo=UTC)),
    (datetime(2025, 3, 15, 20, 0), datetime(2025, 3, 15, 20, 0, tzinfo=UTC)),
    (date(2025, 3, 15), datetime(2025, 3, 15, tzinfo=UTC)),
])
def test_to_datetime(value, expected):
    assert to_datetime(value) == expected


@pytest.mark.parametrize("value", [None, "", "not a date", {"nanoseconds": 1}, True, ["2025-01-01"]])
def test_to_datetime_unparseable(value):
    assert to_datetime(value) is None


def test_to_datetime_converts_to_utc():
    tz = timezone(timedelta(hours=-5))
    assert to_datetime(datetime(2025, 1, 1, 19, 0, tzinfo=tz)).tzinfo == UTC


def test_parse_iso_fallback_formats():
    assert parse_iso("15/03/2025") == datetime(2025, 3, 15)
    assert parse_iso("  ") is None


@pytest.mark.parametrize("offset, expected", [
    ("-03", "-03:00"),
    ("-03:00", "-03:00"),
    ("+0530", "+05:30"),
    ("+5", "+05:00"),
    ("UTC", None),
    ("", None),
    (None, None),
])
def test_normalize_offset(offset, expected):
    assert normalize_offset(offset) == expected


@pytest.mark.parametrize("args, expected", [
    (("2025-03-15", "20:00", "-03"), "2025-03-15T20:00:00-03:00"),
    (("2025-03-15", "20:00", None), "2025-03-15T20:00:00"),
    (("2025-03-15", None, "-05:00"), "2025-03-15T00:00:00-05:00"),
    (("2025-03-15T18:30:00", None, "-03:00"), "2025-03-15T18:30:00-03:00"),
    (("2025-03-15", "late", "-03:00"), "2025-03-15T00:00:00-03:00"),
    ((None, "20:00", "-03:00"), None),
    (("someday", "20:00", "-03:00"), "someday"),
])
def test_format_with_offset(args, expected):
    assert format_with_offset(*args) == expected


def test_spanish_formatting():
    assert format_day_month_es(date(2025, 3, 15)) == "15 de marzo"
    assert format_day_month_es(date(2025, 12, 1)) == "1 de diciembre"
    assert short_weekday_es(date(2025, 3, 16)) == "dom"
    assert short_weekday_es(date(2025, 3, 12)) == "mié"
