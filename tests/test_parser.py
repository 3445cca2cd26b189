"""Tests for log_insight/parser.py"""

import unittest
from datetime import datetime, timezone

from log_insight.errors import InvalidDate
from log_insight.parser import Opaque, Record, parse_date_bound, parse_line, parse_timestamp


class TestParseLine(unittest.TestCase):
    def test_json_object_becomes_record(self):
        line = '{"time":"2024-01-01T00:00:00Z","level":"info","msg":"a"}'
        result = parse_line(line)
        self.assertIsInstance(result, Record)
        self.assertEqual(result.fields, {"time": "2024-01-01T00:00:00Z", "level": "info", "msg": "a"})
        self.assertEqual(result.line, line)
        self.assertEqual(result.timestamp, datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_plain_text_is_opaque(self):
        self.assertEqual(parse_line("not json"), Opaque("not json"))

    def test_truncated_line_is_opaque(self):
        line = '{"time":"2024-01-01T00:00:00Z","msg":"cut o'
        self.assertEqual(parse_line(line), Opaque(line))

    def test_non_object_top_level_is_opaque(self):
        for line in ("[1, 2, 3]", '"just a string"', "42", "null", "true"):
            self.assertIsInstance(parse_line(line), Opaque, line)

    def test_nan_constant_is_opaque(self):
        self.assertIsInstance(parse_line('{"value": NaN}'), Opaque)

    def test_missing_time_gives_no_timestamp(self):
        result = parse_line('{"msg":"no time"}')
        self.assertIsInstance(result, Record)
        self.assertIsNone(result.timestamp)

    def test_opaque_keeps_line_verbatim(self):
        line = "  garbage\twith\r"
        self.assertEqual(parse_line(line).line, line)


class TestRecordSearch(unittest.TestCase):
    def test_contains_is_case_insensitive(self):
        record = parse_line('{"msg":"Database Timeout"}')
        self.assertTrue(record.contains("database timeout"))
        self.assertTrue(record.contains("TIMEOUT"))

    def test_contains_matches_keys(self):
        record = parse_line('{"userId":"u1"}')
        self.assertTrue(record.contains("userid"))

    def test_serialized_is_compact(self):
        record = parse_line('{ "a" : 1,  "b" : "x" }')
        self.assertEqual(record.serialized(), '{"a":1,"b":"x"}')
        self.assertTrue(record.contains('"a":1'))

    def test_integral_floats_search_like_ints(self):
        record = parse_line('{"tokens": 2.0, "ratio": 0.5, "nested": [3.0]}')
        self.assertEqual(record.serialized(), '{"tokens":2,"ratio":0.5,"nested":[3]}')
        self.assertTrue(record.contains('"tokens":2,'))
        self.assertEqual(record.fields["tokens"], 2.0)

    def test_serialized_keeps_unicode(self):
        record = parse_line('{"msg":"caf\\u00e9"}')
        self.assertTrue(record.contains("CAFÉ"))


class TestParseTimestamp(unittest.TestCase):
    def test_iso_with_z(self):
        self.assertEqual(
            parse_timestamp("2024-02-01T10:30:00.123Z"),
            datetime(2024, 2, 1, 10, 30, 0, 123000, tzinfo=timezone.utc),
        )

    def test_iso_with_offset(self):
        ts = parse_timestamp("2024-02-01T12:00:00+02:00")
        self.assertEqual(ts, datetime(2024, 2, 1, 10, 0, tzinfo=timezone.utc))

    def test_naive_is_utc(self):
        self.assertEqual(parse_timestamp("2024-02-01T00:00:00"), datetime(2024, 2, 1, tzinfo=timezone.utc))

    def test_date_only(self):
        self.assertEqual(parse_timestamp("2024-02-01"), datetime(2024, 2, 1, tzinfo=timezone.utc))

    def test_epoch_milliseconds(self):
        self.assertEqual(parse_timestamp(1704067200000), datetime(2024, 1, 1, tzinfo=timezone.utc))

    def test_unorderable_values(self):
        for value in (None, "", "yesterday", "2024-13-45", True, {"a": 1}, [1]):
            self.assertIsNone(parse_timestamp(value), value)


class TestParseDateBound(unittest.TestCase):
    def test_absent(self):
        self.assertIsNone(parse_date_bound(None, "startDate"))
        self.assertIsNone(parse_date_bound("", "startDate"))

    def test_valid(self):
        self.assertEqual(parse_date_bound("2024-02-28", "endDate"), datetime(2024, 2, 28, tzinfo=timezone.utc))

    def test_invalid_raises(self):
        with self.assertRaises(InvalidDate) as ctx:
            parse_date_bound("last tuesday", "endDate")
        self.assertEqual(ctx.exception.field, "endDate")
        self.assertEqual(ctx.exception.value, "last tuesday")

    def test_non_string_raises(self):
        with self.assertRaises(InvalidDate):
            parse_date_bound(1704067200000, "startDate")


if __name__ == "__main__":
    unittest.main()
