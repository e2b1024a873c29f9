"""Tests for the natural-language question client."""

import io
import json
import urllib.error
import urllib.request

import pytest

from facility_insights import assistant
from facility_insights.assistant import AssistantError, ask, stats_context
from facility_insights.models import DashboardStats, RegionStats

ENDPOINT = "https://example.test/functions/v1/healthcare-chat"


class _FakeResponse:
    def __init__(self, payload: bytes):
        self._payload = payload

    def read(self) -> bytes:
        return self._payload

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _patch_urlopen(monkeypatch, handler):
    sent = {}

    def fake_urlopen(req, timeout=None):
        sent["url"] = req.full_url
        sent["body"] = json.loads(req.data.decode("utf-8"))
        sent["method"] = req.get_method()
        return handler(req)

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    return sent


def test_ask_posts_question_and_returns_answer(monkeypatch):
    sent = _patch_urlopen(monkeypatch, lambda req: _FakeResponse(b'{"answer": "Upper East lacks emergency care."}'))
    assert ask("Which regions lack emergency services?", endpoint=ENDPOINT) == "Upper East lacks emergency care."
    assert sent["url"] == ENDPOINT
    assert sent["method"] == "POST"
    assert sent["body"] == {"question": "Which regions lack emergency services?"}


def test_ask_surfaces_error_payload(monkeypatch):
    _patch_urlopen(monkeypatch, lambda req: _FakeResponse(b'{"error": "Rate limited"}'))
    with pytest.raises(AssistantError, match="Rate limited"):
        ask("hello", endpoint=ENDPOINT)


def test_ask_surfaces_http_error_message(monkeypatch):
    def handler(req):
        raise urllib.error.HTTPError(ENDPOINT, 500, "Server Error", {}, io.BytesIO(b'{"error": "Model unavailable"}'))

    _patch_urlopen(monkeypatch, handler)
    with pytest.raises(AssistantError, match="Model unavailable"):
        ask("hello", endpoint=ENDPOINT)


def test_ask_generic_fallback_on_unparseable_error(monkeypatch):
    def handler(req):
        raise urllib.error.HTTPError(ENDPOINT, 502, "Bad Gateway", {}, io.BytesIO(b"<html>"))

    _patch_urlopen(monkeypatch, handler)
    with pytest.raises(AssistantError, match="Failed to get response"):
        ask("hello", endpoint=ENDPOINT)


def test_ask_generic_fallback_when_unreachable(monkeypatch):
    def handler(req):
        raise urllib.error.URLError("connection refused")

    _patch_urlopen(monkeypatch, handler)
    with pytest.raises(AssistantError, match="Failed to get response"):
        ask("hello", endpoint=ENDPOINT)


def test_ask_rejects_empty_question():
    with pytest.raises(ValueError):
        ask("   ", endpoint=ENDPOINT)


def test_ask_without_any_backend(monkeypatch):
    monkeypatch.setattr(assistant, "OPENAI_API_KEY", "")
    with pytest.raises(AssistantError, match="No question endpoint configured"):
        ask("hello", endpoint="")


def test_stats_context_mentions_regions():
    stats = DashboardStats(total_facilities=3, medical_deserts=1, incomplete_records=2, suspicious_claims=1)
    regions = [RegionStats(region="Upper East", total_facilities=1, coverage_score=15)]
    text = stats_context(stats, regions)
    assert "Facilities: 3" in text
    assert "Upper East: 1 facilities, coverage 15 (Critical)" in text
