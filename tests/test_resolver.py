import math

import pytest

from epoch_api.clock import FixedClock
from epoch_api.errors import ParseError
from epoch_api.resolver import (
    SECONDS_CUTOFF,
    describe_relative,
    parse_instant,
    resolve,
    to_resolved_time,
)

NOW_MS = 1_709_812_800_000  # 2024-03-07T12:00:00Z
MIDNIGHT_MS = NOW_MS - 12 * 3_600_000
DAY_MS = 86_400_000


class TestNumericInput:
    @pytest.mark.parametrize(
        "text, expected_ms",
        [
            ("0", 0),
            ("1.5", 1_500),
            ("-1", -1_000),
            ("  42 ", 42_000),
            ("+7", 7_000),
            ("1e3", 1_000_000),
            ("1.0005", 1_000),
            ("4102444799", 4_102_444_799_000),
            ("4102444800", 4_102_444_800),
            ("1700000000123", 1_700_000_000_123),
            ("4102444800000.9", 4_102_444_800_000),
        ],
    )
    def test_parse_number(self, text, expected_ms):
        assert parse_instant(text) == expected_ms

    @pytest.mark.parametrize("text", ["0", "1.5", "-1.5", "86399.999", "1700000000", "4102444799.5"])
    def test_seconds_interpretation_floors(self, text):
        resolved = resolve(text, FixedClock(NOW_MS))
        assert float(text) < SECONDS_CUTOFF
        assert resolved.epoch_seconds == math.floor(float(text))

    @pytest.mark.parametrize("text", ["4102444800", "9999999999999", "1709812800000"])
    def test_milliseconds_interpretation(self, text):
        assert resolve(text, FixedClock(NOW_MS)).epoch_millis == int(text)


class TestDateStrings:
    @pytest.mark.parametrize(
        "text, expected_ms",
        [
            ("2024-03-07", MIDNIGHT_MS),
            ("2024-03-07T12:00:00Z", NOW_MS),
            ("2024-03-07T12:00:00.250Z", NOW_MS + 250),
            ("2024-03-07 12:00:00", NOW_MS),
            ("2024-03-07T14:00:00+02:00", NOW_MS),
            ("Thu, 07 Mar 2024 12:00:00 GMT", NOW_MS),
            ("Thu, 07 Mar 2024 14:00:00 +0200", NOW_MS),
            ("March 7, 2024", MIDNIGHT_MS),
            ("Mar 7 2024 12:00", NOW_MS),
            ("7 March 2024", MIDNIGHT_MS),
            ("2024/03/07 12:00:00", NOW_MS),
            ("03/07/2024", MIDNIGHT_MS),
            ("2024-03-07T12:00:00.1Z", NOW_MS + 100),
            ("2024-03-07T12:00:00.1234567Z", NOW_MS + 123),
            ("2024-03-07T14:00:00.5+02:00", NOW_MS + 500),
            ("2024-03-07 12:00:00.25", NOW_MS + 250),
            ("+275760-09-13T00:00:00.000Z", 8_640_000_000_000_000),
            ("-271821-04-20T00:00:00.000Z", -8_640_000_000_000_000),
            ("0000-12-31T23:59:59.000Z", -62_135_596_801_000),
        ],
    )
    def test_parse_date_string(self, text, expected_ms):
        assert parse_instant(text) == expected_ms

    @pytest.mark.parametrize(
        "text",
        [
            "not-a-date",
            "",
            "   ",
            "Infinity",
            "NaN",
            "1e400",
            "-1e400",
            "1e99999999999999999999",
            "1e-99999999999999999999",
            "0x1A",
            "\u0661\u0662\u0663",
            "2024-13-40",
            "2023-02-29T00:00:00.000Z",
            "-000000-01-01T00:00:00.000Z",
            "+275760-09-13T00:00:00.001Z",
            "8640000000000001",
            "-8640000000001",
        ],
    )
    def test_unparseable(self, text):
        with pytest.raises(ParseError) as info:
            parse_instant(text)
        assert info.value.input == text
        assert str(info.value) == f"Could not parse: {text}"


class TestRelative:
    @pytest.mark.parametrize(
        "offset_ms, expected",
        [
            (0, "0 seconds ago"),
            (1_000, "1 second ago"),
            (30_000, "30 seconds ago"),
            (59_999, "59 seconds ago"),
            (60_000, "1 minute ago"),
            (3_599_999, "59 minutes ago"),
            (3_600_000, "1 hour ago"),
            (29 * DAY_MS, "29 days ago"),
            (30 * DAY_MS, "1 month ago"),
            (364 * DAY_MS, "12 months ago"),
            (365 * DAY_MS, "1 year ago"),
            (-2 * 3_600_000, "2 hours from now"),
            (-1_500, "1 second from now"),
            (-45 * DAY_MS, "1 month from now"),
        ],
    )
    def test_buckets(self, offset_ms, expected):
        assert describe_relative(NOW_MS - offset_ms, NOW_MS) == expected


class TestResolvedTime:
    def test_resolve_none_is_now(self):
        resolved = resolve(None, FixedClock(NOW_MS))
        assert resolved.epoch_millis == NOW_MS
        assert resolved.relative_description == "0 seconds ago"

    def test_representations_agree(self):
        resolved = to_resolved_time(1_700_000_000_123, NOW_MS)
        assert resolved.epoch_seconds == 1_700_000_000
        assert resolved.iso_string == "2023-11-14T22:13:20.123Z"
        assert resolved.utc_string == "Tue, 14 Nov 2023 22:13:20 GMT"
        fields = resolved.calendar_fields
        assert (fields.year, fields.month, fields.day) == (2023, 11, 14)
        assert (fields.hour, fields.minute, fields.second) == (22, 13, 20)

    def test_negative_instant(self):
        resolved = to_resolved_time(-1, NOW_MS)
        assert resolved.epoch_seconds == -1
        assert resolved.iso_string == "1969-12-31T23:59:59.999Z"

    @pytest.mark.parametrize(
        "ms",
        [
            0,
            -1,
            1_709_812_800_001,
            4_102_444_800_000,
            -62_135_596_800_000,
            -62_167_219_200_000,
            -62_167_219_200_001,
            300_000_000_000_000,
            8_640_000_000_000_000,
            -8_640_000_000_000_000,
        ],
    )
    def test_iso_round_trip(self, ms):
        iso = to_resolved_time(ms, NOW_MS).iso_string
        assert parse_instant(iso) == ms

    def test_resolved_time_is_immutable(self):
        resolved = to_resolved_time(0, NOW_MS)
        with pytest.raises(AttributeError):
            resolved.epoch_millis = 1  # type: ignore[misc]


class TestExtendedRange:
    @pytest.mark.parametrize(
        "ms, iso, utc",
        [
            (8_640_000_000_000_000, "+275760-09-13T00:00:00.000Z", "Sat, 13 Sep 275760 00:00:00 GMT"),
            (-8_640_000_000_000_000, "-271821-04-20T00:00:00.000Z", "Tue, 20 Apr -271821 00:00:00 GMT"),
            (300_000_000_000_000, "+011476-08-15T05:20:00.000Z", "Tue, 15 Aug 11476 05:20:00 GMT"),
            (-62_135_596_801_000, "0000-12-31T23:59:59.000Z", "Sun, 31 Dec 0000 23:59:59 GMT"),
            (-62_167_219_200_001, "-000001-12-31T23:59:59.999Z", "Fri, 31 Dec -0001 23:59:59 GMT"),
        ],
    )
    def test_extreme_representations(self, ms, iso, utc):
        resolved = to_resolved_time(ms, NOW_MS)
        assert resolved.iso_string == iso
        assert resolved.utc_string == utc

    def test_seconds_before_year_one(self):
        resolved = resolve("-62135596801", FixedClock(NOW_MS))
        assert resolved.epoch_seconds == -62_135_596_801
        fields = resolved.calendar_fields
        assert (fields.year, fields.month, fields.day) == (0, 12, 31)
        assert (fields.hour, fields.minute, fields.second) == (23, 59, 59)

    @pytest.mark.parametrize("text", ["-8640000000000", "8640000000000000"])
    def test_range_limits_are_inclusive(self, text):
        resolved = resolve(text, FixedClock(NOW_MS))
        assert abs(resolved.epoch_millis) == 8_640_000_000_000_000
