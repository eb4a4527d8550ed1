import pytest
import requests
from fastapi.testclient import TestClient

from storefront.adapters import invitation_ai
from storefront.adapters.invitation_ai import (
    AIConfigurationError,
    AIServiceError,
    InvitationRequest,
    InvitationWriter,
    build_prompt,
)
from storefront.main import app

client = TestClient(app)

REQUEST = InvitationRequest(
    groom_name="Bimo",
    bride_name="Sari",
    date="2024-06-06",
    venue="Gedung Serbaguna Serpong",
    tone="javanese",
    language="jw",
)


class FakeResponse:
    def __init__(self, body, status=200):
        self.body = body
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.body


def test_prompt_mentions_details():
    prompt = build_prompt(REQUEST)
    assert "Bimo" in prompt and "Sari" in prompt
    assert "Gedung Serbaguna Serpong" in prompt
    assert "Jawa Halus (Krama Inggil)" in prompt


def test_missing_key():
    with pytest.raises(AIConfigurationError) as exc:
        InvitationWriter(api_key="").generate(REQUEST)
    assert str(exc.value) == "API Key belum dikonfigurasi."


def test_generate_returns_text(monkeypatch):
    calls = {}

    def fake_post(url, params=None, json=None, timeout=None):
        calls["url"] = url
        calls["params"] = params
        calls["json"] = json
        return FakeResponse({"candidates": [{"content": {"parts": [{"text": "Dengan hormat,"}]}}]})

    monkeypatch.setattr(invitation_ai.requests, "post", fake_post)
    writer = InvitationWriter(api_key="k-123", model="gemini-test", base_url="https://ai.example/models")
    assert writer.generate(REQUEST) == "Dengan hormat,"
    assert calls["url"] == "https://ai.example/models/gemini-test:generateContent"
    assert calls["params"] == {"key": "k-123"}
    assert "Bimo" in calls["json"]["contents"][0]["parts"][0]["text"]


def test_empty_response_falls_back(monkeypatch):
    monkeypatch.setattr(invitation_ai.requests, "post", lambda *a, **kw: FakeResponse({"candidates": []}))
    assert InvitationWriter(api_key="k").generate(REQUEST) == "Maaf, gagal menghasilkan teks saat ini."


def test_service_error(monkeypatch):
    monkeypatch.setattr(invitation_ai.requests, "post", lambda *a, **kw: FakeResponse({}, status=500))
    with pytest.raises(AIServiceError) as exc:
        InvitationWriter(api_key="k").generate(REQUEST)
    assert str(exc.value) == "Gagal menghubungi layanan AI. Silakan coba lagi nanti."


def test_api_without_key_reports_configuration_error():
    res = client.post(
        "/api/ai/invitation",
        json={"groom_name": "Bimo", "bride_name": "Sari", "date": "2024-06-06", "venue": "Serpong"},
    )
    assert res.status_code == 503
    assert res.json()["detail"] == "API Key belum dikonfigurasi."


def test_api_rejects_unknown_tone():
    res = client.post(
        "/api/ai/invitation",
        json={"groom_name": "A", "bride_name": "B", "date": "x", "venue": "y", "tone": "rap"},
    )
    assert res.status_code == 422
