"""
Tests for domain models (models/domain_models.py, models/base.py)
"""

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from log_inspector.exceptions import ValidationError
from log_inspector.models import (
    ExtractSpec,
    LogRecord,
    SearchRequest,
    TwoPhaseResult,
    format_rfc3339,
)
from tests.helpers import BASE_TIME


class TestLogRecord:
    """Test LogRecord construction and serialization."""

    def test_from_event(self):
        record = LogRecord.from_event("/aws/app", {
            'timestamp': 1700000000123,
            'logStreamName': 'stream-1',
            'message': 'hello',
        })

        assert record.timestamp == datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=timezone.utc)
        assert record.log_group == "/aws/app"
        assert record.log_stream == "stream-1"
        assert record.message == "hello"

    def test_from_event_missing_fields(self):
        record = LogRecord.from_event("/aws/app", {})

        assert record.timestamp == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert record.log_stream == ""
        assert record.message == ""

    def test_json_uses_output_field_names(self):
        record = LogRecord(timestamp=1700000000123, log_group="g", log_stream="s", message="m")

        assert record.model_dump(mode="json", by_alias=True) == {
            'Timestamp': "2023-11-14T22:13:20.123Z",
            'LogGroup': "g",
            'LogStream': "s",
            'Message': "m",
        }

    def test_iso_string_timestamp(self):
        record = LogRecord(timestamp="2024-01-01T10:00:00+02:00", log_group="g")

        assert record.timestamp == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

    def test_naive_datetime_assumed_utc(self):
        record = LogRecord(timestamp=datetime(2024, 1, 1, 10, 0), log_group="g")

        assert record.timestamp.tzinfo == timezone.utc
        assert record.timestamp.hour == 10

    def test_bool_timestamp_rejected(self):
        with pytest.raises(PydanticValidationError):
            LogRecord(timestamp=True, log_group="g")

    def test_frozen(self):
        record = LogRecord(timestamp=0, log_group="g")

        with pytest.raises(PydanticValidationError):
            record.message = "changed"

    def test_sort_key_order(self):
        a = LogRecord(timestamp=1, log_group="b", log_stream="a", message="a")
        b = LogRecord(timestamp=2, log_group="a", log_stream="a", message="a")
        c = LogRecord(timestamp=2, log_group="a", log_stream="b", message="a")

        assert sorted([c, b, a], key=LogRecord.sort_key) == [a, b, c]


class TestFormatRfc3339:
    """Test timestamp formatting."""

    def test_with_millis(self):
        assert format_rfc3339(BASE_TIME + timedelta(milliseconds=7)) == "2023-11-14T22:13:20.007Z"

    def test_without_millis(self):
        assert format_rfc3339(BASE_TIME, with_millis=False) == "2023-11-14T22:13:20Z"

    def test_none(self):
        assert format_rfc3339(None) is None


class TestSearchRequest:
    """Test search request validation."""

    def test_valid_request(self):
        request = SearchRequest.create(("a", "b"), "x", BASE_TIME, BASE_TIME + timedelta(seconds=1))

        assert request.sources == ["a", "b"]
        assert request.end_ms - request.start_ms == 1000

    def test_equal_start_and_end_allowed(self):
        request = SearchRequest.create(["a"], "x", BASE_TIME, BASE_TIME)

        assert request.start_ms == request.end_ms

    @pytest.mark.parametrize("sources,pattern,message,field", [
        ([], "x", "no log groups configured", "sources"),
        (None, "x", "no log groups configured", "sources"),
        (["a", ""], "x", "must not be empty", "sources"),
        (["a", "a"], "x", "must be distinct", "sources"),
        (["a"], "", "empty filter pattern", "filter_pattern"),
    ])
    def test_invalid_fields(self, sources, pattern, message, field):
        with pytest.raises(ValidationError, match=message) as exc_info:
            SearchRequest.create(sources, pattern, BASE_TIME, BASE_TIME)

        assert field in exc_info.value.errors

    def test_inverted_window(self):
        with pytest.raises(ValidationError, match="start is after end") as exc_info:
            SearchRequest.create(["a"], "x", BASE_TIME, BASE_TIME - timedelta(milliseconds=1))

        assert 'request' in exc_info.value.errors


class TestExtractSpec:
    """Test name=path parsing."""

    def test_parse(self):
        spec = ExtractSpec.parse("id=user.id")

        assert spec.name == "id"
        assert spec.path == "user.id"

    def test_splits_on_first_equals(self):
        spec = ExtractSpec.parse("v=items[?k=='a'].v")

        assert spec.name == "v"
        assert spec.path == "items[?k=='a'].v"

    def test_trims_whitespace(self):
        assert ExtractSpec.parse(" id = user.id ") == ExtractSpec(name="id", path="user.id")

    @pytest.mark.parametrize("raw", ["noequals", "=path", "name=", ""])
    def test_malformed(self, raw):
        with pytest.raises(ValidationError, match="expected name=path"):
            ExtractSpec.parse(raw)

    @pytest.mark.parametrize("raw", [" =path", "name= "])
    def test_blank_side(self, raw):
        with pytest.raises(ValidationError, match="empty name or path"):
            ExtractSpec.parse(raw)


class TestTwoPhaseResult:
    """Test two-phase result defaults and JSON output."""

    def test_defaults(self):
        result = TwoPhaseResult()

        assert result.records == []
        assert result.found is False
        assert result.next_records is None

    def test_nested_records_serialize_with_aliases(self):
        result = TwoPhaseResult(records=[LogRecord(timestamp=0, log_group="g")])

        data = json.loads(result.model_dump_json(by_alias=True))

        assert data['records'][0]['Timestamp'] == "1970-01-01T00:00:00.000Z"
