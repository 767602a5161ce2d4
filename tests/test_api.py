"""HTTP boundary: request validation, response envelope and error mapping."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

import app as app_module
from config import update_config


@pytest.fixture
def client() -> TestClient:
    return TestClient(app_module.app)


def test_analyze_returns_success_envelope(client: TestClient) -> None:
    response = client.post(
        "/api/analyze",
        json={"review": "This movie was absolutely amazing and the acting was superb"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["sentiment"] == "Positive"
    assert data["confidence"] == 100.0
    assert data["wordCounts"]["negative"] == 0
    assert data["detectedWords"]["positive"] == ["amazing", "superb"]


def test_analyze_reports_negation(client: TestClient) -> None:
    response = client.post("/api/analyze", json={"review": "Honestly, not amazing at all."})

    data = response.json()["data"]
    assert data["sentiment"] == "Negative"
    assert data["detectedWords"]["negative"] == ["not amazing"]


@pytest.mark.parametrize(
    "payload",
    [{}, {"review": None}, {"review": 42}, {"review": ""}, ["review"]],
)
def test_analyze_rejects_missing_review(client: TestClient, payload) -> None:
    response = client.post("/api/analyze", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Review text is required and must be a string"}


def test_analyze_rejects_unparseable_body(client: TestClient) -> None:
    response = client.post(
        "/api/analyze",
        content=b"review=hello",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Review text is required and must be a string"}


def test_analyze_length_boundary(client: TestClient) -> None:
    short = client.post("/api/analyze", json={"review": "  123456789  "})
    exact = client.post("/api/analyze", json={"review": "  1234567890  "})

    assert short.status_code == 400
    assert short.json() == {"error": "Review must be at least 10 characters long"}
    assert exact.status_code == 200
    assert exact.json()["data"]["sentiment"] == "Neutral"
    assert exact.json()["data"]["confidence"] == 0


def test_internal_fault_is_generic(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def _explode(text):
        raise RuntimeError("lexicon exploded")

    monkeypatch.setattr(app_module.sentiment_service, "analyze", _explode)

    response = client.post("/api/analyze", json={"review": "A perfectly normal review"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_simple_mode_uses_ratio_confidence(client: TestClient) -> None:
    update_config(SENTIMENT_MODE="simple")

    response = client.post("/api/analyze", json={"review": "Decent, fine, okay but brilliant"})

    data = response.json()["data"]
    assert data["sentiment"] == "Positive"
    assert data["confidence"] == 1.0
    assert data["wordCounts"]["neutral"] == 3


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.post(
        "/api/analyze",
        json={"review": "Great soundtrack and a lovely cast"},
        headers={"X-Request-ID": "req-123"},
    )

    assert response.headers["X-Request-ID"] == "req-123"


def test_request_id_is_generated(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert response.headers["X-Request-ID"]


def test_report_endpoint_returns_plain_text(client: TestClient) -> None:
    response = client.post("/api/analyze/report", json={"review": "Dull plot, but a great cast"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    text = response.text
    assert text.startswith("Movie Review: Dull plot, but a great cast")
    assert "Sentiment: Neutral (100.0% confidence)" in text
    assert "- Positive: 1" in text
    assert "- Negative: 1" in text


def test_report_endpoint_validates(client: TestClient) -> None:
    response = client.post("/api/analyze/report", json={"review": "short"})

    assert response.status_code == 400
    assert response.json() == {"error": "Review must be at least 10 characters long"}


def _negative_classifications() -> float:
    return REGISTRY.get_sample_value(
        "review_classifications_total", {"sentiment": "Negative", "mode": "neutral_aware"}
    ) or 0.0


def test_metrics_endpoint_counts_classifications(client: TestClient) -> None:
    before = _negative_classifications()

    client.post("/api/analyze", json={"review": "An awful, tedious mess of a film"})
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "review_classifications_total" in response.text
    assert _negative_classifications() == before + 1


def test_report_endpoint_accepts_lone_surrogates(client: TestClient) -> None:
    body = b'{"review": "\\ud800 a perfectly great film"}'
    headers = {"Content-Type": "application/json"}

    report = client.post("/api/analyze/report", content=body, headers=headers)
    analysis = client.post("/api/analyze", content=body, headers=headers)

    assert report.status_code == 200
    assert report.text.startswith("Movie Review: ? a perfectly great film")
    assert analysis.status_code == 200
    assert analysis.json()["data"]["sentiment"] == "Positive"


def test_server_options_follow_config() -> None:
    options = app_module.server_options(update_config(APP_ENV="development", PORT=9100))

    assert options == {"host": "0.0.0.0", "port": 9100, "reload": True}
    assert app_module.server_options(update_config(APP_ENV="prod"))["reload"] is False
