from datetime import date, datetime

import pytz

from shiftdesk.common.datetime_utils import (
    format_wall_time,
    minutes_since_midnight,
    parse_lenient,
    to_canonical_datetime,
    to_date_only,
    to_wall_clock,
)


def test_to_date_only_accepts_every_wire_form():
    assert to_date_only("2025-01-06T09:15:00.000Z") == "2025-01-06"
    assert to_date_only("2025-01-06 09:15:00") == "2025-01-06"
    assert to_date_only("2025-01-06") == "2025-01-06"
    assert to_date_only(date(2025, 1, 6)) == "2025-01-06"
    assert to_date_only(None) == ""


def test_to_date_only_is_idempotent():
    once = to_date_only("2025-01-06T09:15:00Z")
    assert to_date_only(once) == once


def test_canonical_datetime_from_iso_and_space_forms():
    assert to_canonical_datetime("2025-01-06T09:15:30.000Z") == "2025-01-06 09:15:30"
    assert to_canonical_datetime("2025-01-06 09:15:30") == "2025-01-06 09:15:30"
    assert to_canonical_datetime(datetime(2025, 1, 6, 9, 15, 30)) == "2025-01-06 09:15:30"


def test_canonical_datetime_converts_offsets_to_utc():
    assert to_canonical_datetime("2025-01-06T11:15:30+02:00") == "2025-01-06 09:15:30"


def test_canonical_datetime_is_idempotent():
    once = to_canonical_datetime("2025-01-06T09:15:30Z")
    assert to_canonical_datetime(once) == once


def test_canonical_datetime_rejects_garbage():
    assert to_canonical_datetime(None) is None
    assert to_canonical_datetime("") is None
    assert to_canonical_datetime("not a time") is None


def test_parse_lenient_reads_naive_values_as_utc():
    parsed = parse_lenient("2025-01-06 09:00:00")
    assert parsed == datetime(2025, 1, 6, 9, 0, tzinfo=pytz.UTC)


def test_minutes_since_midnight_keeps_seconds():
    assert minutes_since_midnight(datetime(2025, 1, 6, 9, 30, 0)) == 570
    assert minutes_since_midnight(datetime(2025, 1, 6, 9, 30, 1)) > 570


def test_wall_clock_helpers_use_the_given_zone():
    tz = pytz.timezone("Asia/Ho_Chi_Minh")
    instant = datetime(2025, 1, 6, 2, 0, tzinfo=pytz.UTC)
    assert to_wall_clock(instant, tz).hour == 9
    assert format_wall_time("2025-01-06 02:00:00", tz) == "09:00"
    assert format_wall_time(None, tz) == "-"
