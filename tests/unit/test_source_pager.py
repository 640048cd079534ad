"""
Tests for SourcePager (handlers/search/pager.py)
"""

from datetime import datetime, timezone
from unittest.mock import Mock, call

import pytest

from log_inspector.exceptions import QueryError
from log_inspector.handlers.search import SourcePager


class TestSourcePager:
    """Test single-group pagination."""

    def test_single_page(self):
        query = Mock(return_value=([{'timestamp': 1700000000123, 'logStreamName': 's1', 'message': 'hello'}], None))

        records = SourcePager(query).fetch_all("/aws/app", "ERROR", 1, 2)

        query.assert_called_once_with("/aws/app", "ERROR", 1, 2, None)
        assert len(records) == 1
        assert records[0].timestamp == datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=timezone.utc)
        assert records[0].log_group == "/aws/app"
        assert records[0].log_stream == "s1"
        assert records[0].message == "hello"

    def test_follows_tokens_until_exhausted(self):
        query = Mock(side_effect=[
            ([{'timestamp': 1, 'message': 'a'}], "t1"),
            ([{'timestamp': 2, 'message': 'b'}], "t2"),
            ([{'timestamp': 3, 'message': 'c'}], None),
        ])

        records = SourcePager(query).fetch_all("g", "x", 0, 10)

        assert [r.message for r in records] == ["a", "b", "c"]
        assert query.call_args_list == [
            call("g", "x", 0, 10, None),
            call("g", "x", 0, 10, "t1"),
            call("g", "x", 0, 10, "t2"),
        ]

    def test_empty_string_token_ends_pagination(self):
        query = Mock(return_value=([{'timestamp': 1, 'message': 'a'}], ""))

        records = SourcePager(query).fetch_all("g", "x", 0, 10)

        assert len(records) == 1
        query.assert_called_once()

    def test_repeated_token_terminates(self):
        # A misbehaving backend that returns the same cursor forever
        query = Mock(side_effect=[
            ([{'timestamp': 1, 'message': 'a'}], "stuck"),
            ([{'timestamp': 2, 'message': 'b'}], "stuck"),
            ([{'timestamp': 3, 'message': 'never'}], "stuck"),
        ])

        records = SourcePager(query).fetch_all("g", "x", 0, 10)

        assert [r.message for r in records] == ["a", "b"]
        assert query.call_count == 2

    def test_missing_stream_becomes_empty_string(self):
        query = Mock(return_value=([{'timestamp': 5, 'message': 'no stream'}], None))

        records = SourcePager(query).fetch_all("g", "x", 0, 10)

        assert records[0].log_stream == ""

    def test_missing_message_becomes_empty_string(self):
        query = Mock(return_value=([{'timestamp': 5, 'logStreamName': 's'}], None))

        records = SourcePager(query).fetch_all("g", "x", 0, 10)

        assert records[0].message == ""

    def test_error_aborts_without_partial_results(self):
        error = QueryError("throttled", "g")
        query = Mock(side_effect=[([{'timestamp': 1, 'message': 'a'}], "t1"), error])

        with pytest.raises(QueryError) as exc_info:
            SourcePager(query).fetch_all("g", "x", 0, 10)

        assert exc_info.value is error
        assert query.call_count == 2

    def test_empty_pages_with_token_keep_paging(self):
        query = Mock(side_effect=[([], "t1"), ([], "t2"), ([{'timestamp': 1, 'message': 'late'}], None)])

        records = SourcePager(query).fetch_all("g", "x", 0, 10)

        assert [r.message for r in records] == ["late"]
        assert query.call_count == 3
