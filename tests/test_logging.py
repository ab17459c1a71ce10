import json
import logging

from opentelemetry import trace

from app.logging import ContextFilter, JsonFormatter, MaskingFilter


def make_record(msg, level=logging.INFO, args=None, name="mask_test"):
    return logging.LogRecord(name, level, __file__, 1, msg, args, None)


def test_sensitive_fields_masked_in_info(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    record = make_record({
        "email": "user@example.com",
        "otp": "1234",
        "gstNumber": "27ABCDE1234F1Z5",
        "phoneNumber": "9876543210",
        "shopName": "Fresh Veg Traders",
    })
    assert MaskingFilter().filter(record) is True
    assert record.msg["email"] == "[REDACTED]"
    assert record.msg["otp"] == "[REDACTED]"
    assert record.msg["gstNumber"] == "[REDACTED]"
    assert record.msg["phoneNumber"] == "******3210"
    assert record.msg["shopName"] == "Fresh Veg Traders"


def test_nested_payloads_are_masked(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    record = make_record({"event": "signup", "body": {"otp": "1234", "name": "Jane"}})
    MaskingFilter().filter(record)
    assert record.msg["body"] == {"otp": "[REDACTED]", "name": "Jane"}


def test_sensitive_fields_visible_in_debug_outside_production(monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")
    record = make_record({"otp": "1234"}, level=logging.DEBUG)
    MaskingFilter().filter(record)
    assert record.msg["otp"] == "1234"


def test_debug_is_masked_in_production(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    record = make_record({"otp": "1234"}, level=logging.DEBUG)
    MaskingFilter().filter(record)
    assert record.msg["otp"] == "[REDACTED]"


def test_request_id_attached_inside_request(app):
    with app.test_request_context("/__log"):
        from flask import g
        g.request_id = "rid-abc"
        record = make_record("hello")
        ContextFilter().filter(record)
    assert record.request_id == "rid-abc"


def test_request_id_outside_context():
    record = make_record("hello")
    ContextFilter().filter(record)
    assert record.request_id == "n/a"


def test_json_formatter_output():
    record = make_record("order %s created", args=("abc",))
    record.request_id = "rid-1"
    line = json.loads(JsonFormatter().format(record))
    assert line["message"] == "order abc created"
    assert line["level"] == "INFO"
    assert line["request_id"] == "rid-1"
    assert line["trace_id"] == "n/a"


def test_json_formatter_merges_dict_messages():
    record = make_record({"event": "otp_issued", "phoneNumber": "******3210"})
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "otp_issued"
    assert "message" not in line


def test_log_endpoint_echoes_request_id(client):
    resp = client.get("/__log", headers={"X-Request-ID": "rid-xyz"})
    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "rid-xyz"


def test_trace_ids_attached_inside_span(app):
    tracer = trace.get_tracer("log-test")
    with tracer.start_as_current_span("work") as span:
        record = make_record("inside span")
        ContextFilter().filter(record)
        expected = format(span.get_span_context().trace_id, "032x")
    assert record.trace_id == expected
    assert len(record.span_id) == 16


def test_trace_ids_outside_span():
    record = make_record("no span")
    ContextFilter().filter(record)
    assert (record.trace_id, record.span_id) == ("n/a", "n/a")
