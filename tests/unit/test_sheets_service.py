import httpx
import pytest
from core.config import settings
from services import sheets_service
from services.sheets_service import notify_order_created

PAYLOAD = {"code": "1A2B3C4D", "total_amount": "140"}


@pytest.fixture
def live_sheet(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    monkeypatch.setattr(settings, "SHEETS_WEBHOOK_URL", "https://sheets.example.test/hook")


def test_skipped_in_testing():
    assert settings.ENV == "testing"
    assert notify_order_created(PAYLOAD) is False


def test_skipped_without_webhook(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    monkeypatch.setattr(settings, "SHEETS_WEBHOOK_URL", None)

    assert notify_order_created(PAYLOAD) is False


def test_posts_payload(live_sheet, monkeypatch):
    calls = []

    def fake_post(url, json, timeout):
        calls.append((url, json))
        return httpx.Response(200, request=httpx.Request("POST", url))

    monkeypatch.setattr(sheets_service.httpx, "post", fake_post)

    assert notify_order_created(PAYLOAD) is True
    assert calls == [("https://sheets.example.test/hook", PAYLOAD)]


def test_failure_is_logged_not_raised(live_sheet, monkeypatch):
    def failing_post(url, json, timeout):
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(sheets_service.httpx, "post", failing_post)

    assert notify_order_created(PAYLOAD) is False


def test_error_status_is_logged_not_raised(live_sheet, monkeypatch):
    def bad_gateway(url, json, timeout):
        return httpx.Response(502, request=httpx.Request("POST", url))

    monkeypatch.setattr(sheets_service.httpx, "post", bad_gateway)

    assert notify_order_created(PAYLOAD) is False
