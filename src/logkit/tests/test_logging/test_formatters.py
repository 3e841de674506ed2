# src/logkit/tests/test_logging/test_formatters.py
import itertools
import logging
import math
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from logkit.constants import Severity
from logkit.exceptions.base import InvalidRecordError, RecordSerializationError
from logkit.models.records import ApiRequestLog, QueryLog
from logkit.core.logging.formatters import (
    SeverityColorFormatter,
    format_api_request,
    format_api_response,
    format_error,
    format_line,
    format_query,
    format_timestamp,
    serialize_value,
)


def power_set(items):
    return itertools.chain.from_iterable(
        itertools.combinations(items, size) for size in range(len(items) + 1)
    )


class TestApiRequestFormatting:
    def test_request_with_body(self):
        out = format_api_request({"method": "POST", "url": "/users", "body": {"name": "John"}})
        assert out == '[Method=POST] [URL=/users] [Body={"name":"John"}]'

    def test_request_all_fields_in_fixed_order(self):
        # keys deliberately supplied in reverse order
        data = {
            "ip": "10.0.0.1",
            "userAgent": "curl/8.0",
            "headers": {"accept": "application/json"},
            "body": [1, 2],
            "url": "/items?page=2",
            "method": "GET",
        }
        assert format_api_request(data) == (
            "[Method=GET] [URL=/items?page=2] [Body=[1,2]] "
            '[Headers={"accept":"application/json"}] [UserAgent=curl/8.0] [IP=10.0.0.1]'
        )

    @pytest.mark.parametrize("present", list(power_set(["body", "headers", "user_agent", "ip"])))
    def test_optional_field_power_set(self, present):
        values = {
            "body": ({"a": 1}, '[Body={"a":1}]'),
            "headers": ({"x": "y"}, '[Headers={"x":"y"}]'),
            "user_agent": ("ua", "[UserAgent=ua]"),
            "ip": ("::1", "[IP=::1]"),
        }
        data = {"method": "GET", "url": "/x"}
        data.update({name: values[name][0] for name in present})
        expected = ["[Method=GET]", "[URL=/x]"] + [
            values[name][1] for name in ("body", "headers", "user_agent", "ip") if name in present
        ]
        assert format_api_request(data) == " ".join(expected)

    def test_falsy_but_present_body_is_rendered(self):
        assert format_api_request({"method": "GET", "url": "/", "body": {}}) == "[Method=GET] [URL=/] [Body={}]"
        assert format_api_request({"method": "GET", "url": "/", "body": 0}) == "[Method=GET] [URL=/] [Body=0]"
        assert format_api_request({"method": "GET", "url": "/", "body": ""}) == '[Method=GET] [URL=/] [Body=""]'

    def test_missing_method_is_invalid_record(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            format_api_request({"url": "/x"})
        assert exc_info.value.fields == ["method"]
        assert exc_info.value.error_code == "invalid_record"

    def test_none_required_field_is_invalid_record(self):
        with pytest.raises(InvalidRecordError):
            format_api_request({"method": None, "url": "/x"})

    def test_model_instance_is_accepted(self):
        record = ApiRequestLog(method="DELETE", url="/users/1", user_agent="pytest")
        assert format_api_request(record) == "[Method=DELETE] [URL=/users/1] [UserAgent=pytest]"


class TestApiResponseFormatting:
    def test_zero_status_and_duration_render(self):
        assert format_api_response({"status": 0, "duration": 0}) == "[Status=0] [Duration=0ms]"

    def test_all_fields(self):
        out = format_api_response({
            "status": 201,
            "duration": 35,
            "body": {"id": 7, "tags": ["a", "b"]},
            "content_length": 0,
            "timestamp": datetime(2024, 1, 2, 3, 4, 5, 678900, tzinfo=timezone.utc),
        })
        assert out == (
            '[Status=201] [Duration=35ms] [Body={"id":7,"tags":["a","b"]}] '
            "[ContentLength=0] [Timestamp=2024-01-02T03:04:05.678Z]"
        )

    def test_timestamp_string_is_parsed(self):
        out = format_api_response({"status": 200, "duration": 1, "timestamp": "2024-05-01T12:00:00+02:00"})
        assert out.endswith("[Timestamp=2024-05-01T10:00:00.000Z]")

    def test_missing_status_is_invalid_record(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            format_api_response({"duration": 5})
        assert "status" in exc_info.value.fields


class TestQueryFormatting:
    def test_zero_duration_and_rows_render(self):
        assert format_query({"sql": "SELECT 1", "duration": 0, "rows": 0}) == "[SQL=SELECT 1] [Duration=0ms] [Rows=0]"

    def test_params_sit_between_sql_and_duration(self):
        out = format_query({"sql": "SELECT * FROM t WHERE id = ?", "params": [42, "x", None], "duration": 3})
        assert out == '[SQL=SELECT * FROM t WHERE id = ?] [Params=[42,"x",null]] [Duration=3ms]'

    def test_empty_params_list_is_present(self):
        assert format_query({"sql": "SELECT 1", "params": [], "duration": 1}) == "[SQL=SELECT 1] [Params=[]] [Duration=1ms]"

    @pytest.mark.parametrize("present", list(power_set(["params", "rows", "database", "table"])))
    def test_optional_field_power_set(self, present):
        values = {
            "params": ([1], "[Params=[1]]"),
            "rows": (0, "[Rows=0]"),
            "database": ("main", "[Database=main]"),
            "table": ("users", "[Table=users]"),
        }
        data = {"sql": "SELECT 1", "duration": 4}
        data.update({name: values[name][0] for name in present})

        expected = ["[SQL=SELECT 1]"]
        if "params" in present:
            expected.append(values["params"][1])
        expected.append("[Duration=4ms]")
        expected += [values[name][1] for name in ("rows", "database", "table") if name in present]

        assert format_query(data) == " ".join(expected)
        # model instance renders identically to the mapping
        assert format_query(QueryLog(**data)) == " ".join(expected)

    def test_missing_duration_is_invalid_record(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            format_query({"sql": "SELECT 1"})
        assert exc_info.value.fields == ["duration"]


class TestErrorFormatting:
    @pytest.mark.parametrize(
        "present",
        list(power_set(["exception", "file_name", "line_number", "user_id", "request_id"])),
    )
    def test_optional_field_power_set(self, present):
        values = {
            "exception": ("ValueError", "[Exception=ValueError]"),
            "file_name": ("users.py", "[File=users.py]"),
            "line_number": (0, "[Line=0]"),
            "user_id": ("u-1", "[UserId=u-1]"),
            "request_id": ("r-1", "[RequestId=r-1]"),
        }
        data = {"message": "boom"}
        data.update({name: values[name][0] for name in present})
        expected = ["[Message=boom]"] + [
            values[name][1]
            for name in ("exception", "file_name", "line_number", "user_id", "request_id")
            if name in present
        ]
        assert format_error(data) == " ".join(expected)

    def test_stack_trace_is_not_part_of_message(self):
        assert format_error({"message": "boom", "stackTrace": "line-1\nline-2"}) == "[Message=boom]"

    def test_empty_message_is_still_rendered(self):
        assert format_error({"message": ""}) == "[Message=]"


class TestSerializeValue:
    def test_compact_and_insertion_ordered(self):
        assert serialize_value({"b": 1, "a": {"c": [1, 2]}}) == '{"b":1,"a":{"c":[1,2]}}'

    def test_non_ascii_is_preserved(self):
        assert serialize_value({"name": "สมชาย"}) == '{"name":"สมชาย"}'

    def test_extra_types(self):
        value = {
            "at": datetime(2024, 1, 1, tzinfo=timezone(timedelta(hours=7))),
            "price": Decimal("9.90"),
            "id": UUID("12345678-1234-5678-1234-567812345678"),
            "sev": Severity.WARN,
        }
        assert serialize_value(value) == (
            '{"at":"2023-12-31T17:00:00.000Z","price":"9.90",'
            '"id":"12345678-1234-5678-1234-567812345678","sev":"WARN"}'
        )

    def test_pydantic_model_value(self):
        record = ApiRequestLog(method="GET", url="/")
        assert '"method":"GET"' in serialize_value(record)

    def test_circular_reference_raises(self):
        body = {"name": "loop"}
        body["self"] = body
        with pytest.raises(RecordSerializationError) as exc_info:
            format_api_request({"method": "POST", "url": "/x", "body": body})
        assert exc_info.value.fields == ["body"]
        assert exc_info.value.error_code == "serialization_failed"

    def test_unknown_type_raises(self):
        with pytest.raises(RecordSerializationError):
            format_query({"sql": "SELECT ?", "params": [{1, 2}], "duration": 1})

    def test_nan_raises(self):
        with pytest.raises(RecordSerializationError):
            serialize_value([math.nan])


class TestFormatTimestamp:
    def test_naive_datetime_is_utc(self):
        assert format_timestamp(datetime(2024, 2, 29, 23, 59, 59)) == "2024-02-29T23:59:59.000Z"

    def test_offset_is_converted(self):
        value = datetime(2024, 1, 1, 0, 0, 0, 1500, tzinfo=timezone(timedelta(hours=-5)))
        assert format_timestamp(value) == "2024-01-01T05:00:00.001Z"


class TestFormatLine:
    def test_without_context(self):
        assert format_line(Severity.LOG, "hello") == "[LOG] hello"

    def test_with_context(self):
        assert format_line(Severity.ERROR, "boom", "Svc") == "[ERROR][Svc] boom"

    def test_empty_context_adds_no_brackets(self):
        assert format_line(Severity.DEBUG, "x", "") == "[DEBUG] x"


class TestSeverityColorFormatter:
    def make_record(self, msg):
        return logging.LogRecord("logkit.output", logging.INFO, __file__, 1, msg, None, None)

    def test_plain_passthrough(self):
        fmt = SeverityColorFormatter()
        assert fmt.format(self.make_record("[LOG][Svc] 100% done")) == "[LOG][Svc] 100% done"

    def test_color_wraps_only_severity_tag(self):
        fmt = SeverityColorFormatter(color=True)
        out = fmt.format(self.make_record("[WARN][Svc] slow"))
        assert out == "\033[33m[WARN]\033[0m[Svc] slow"

    def test_color_leaves_untagged_lines_alone(self):
        fmt = SeverityColorFormatter(color=True)
        assert fmt.format(self.make_record("Traceback (most recent call last):")) == "Traceback (most recent call last):"

    def test_timestamps_prefix(self):
        fmt = SeverityColorFormatter(timestamps=True, datefmt="%Y")
        out = fmt.format(self.make_record("[LOG] hi"))
        year, line = out.split(" ", 1)
        assert year.isdigit() and line == "[LOG] hi"
