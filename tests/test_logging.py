import json
import logging

from app.logging import JsonFormatter, MaskingFilter, mask_sensitive


def test_request_id_header_and_propagation(client):
    resp = client.get("/__ok", headers={"X-Request-ID": "my-fixed-id-123"})
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "my-fixed-id-123"


def test_request_id_generated_when_missing(client):
    resp = client.get("/__ok")
    assert len(resp.headers.get("X-Request-ID")) == 32


def test_logs_include_request_id_attribute(app, client, caplog):
    caplog.set_level("INFO")
    for handler in app.logger.handlers:
        for f in handler.filters:
            caplog.handler.addFilter(f)
    resp = client.get("/__log", headers={"X-Request-ID": "rid-abc"})
    assert resp.status_code == 200
    assert any(getattr(r, "request_id", "") == "rid-abc" for r in caplog.records)


def test_sensitive_fields_masked_in_info(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "testing")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test")
    logger.info({"event": "checkout_submitted", "email": "user@example.com", "card_number": "4242"})
    record = next(r for r in caplog.records if r.name == "mask_test")
    assert record.msg["email"] == "[REDACTED]"
    assert record.msg["card_number"] == "[REDACTED]"
    assert record.msg["event"] == "checkout_submitted"


def test_sensitive_fields_visible_in_debug(monkeypatch, caplog):
    monkeypatch.setenv("APP_ENV", "development")
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_debug")
    logger.debug({"phone": "555-0100"})
    record = next(r for r in caplog.records if r.name == "mask_test_debug")
    assert record.msg["phone"] == "555-0100"


def test_nested_dicts_are_masked():
    masked = mask_sensitive({"customer": {"email": "a@b.c", "id": 3}, "order_id": 1})
    assert masked == {"customer": {"email": "[REDACTED]", "id": 3}, "order_id": 1}


def test_json_formatter_merges_dict_messages():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, {"event": "order_placed", "order_id": 5}, None, None)
    out = json.loads(JsonFormatter().format(record))
    assert out["event"] == "order_placed"
    assert out["order_id"] == 5
    assert out["request_id"] == "n/a"
    assert "message" not in out
