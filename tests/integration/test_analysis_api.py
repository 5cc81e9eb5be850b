import pytest
from fastapi.testclient import TestClient

from app import app
from mock_data.simulated_series import (
    get_head_and_shoulders_prices,
    get_uptrend_channel_prices,
    to_payload,
)

PATTERNS_URL = "/api/v1/analysis/patterns"


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestDetectPatternsEndpoint:

    def test_uptrend_series(self, client):
        response = client.post(PATTERNS_URL, json={"symbol": "AAPL", "data": to_payload(get_uptrend_channel_prices())})

        assert response.status_code == 200
        body = response.json()
        assert body["symbol"] == "AAPL"
        assert body["dataPoints"] == 15
        assert body["marketContext"]["trend"] == "strong upward"
        assert body["patternSummary"] == "- Uptrend Channel: Price moving within an upward trending channel"

        [pattern] = body["patterns"]
        assert pattern["patternKey"] == "uptrend"
        assert pattern["startIndex"] == 0
        assert pattern["endIndex"] == 14
        assert set(pattern["overlayData"]) == {"lines"}

        insight = body["technicalInsight"]
        assert insight["type"] == "technical"
        assert insight["title"] == "Technical Pattern: Uptrend Channel"
        assert insight["confidence"] == 70
        assert insight["description"].startswith("Price moving within an upward trending channel. Bullish trend")
        assert insight["technicalPattern"]["patternKey"] == "uptrend"

    def test_head_and_shoulders_series(self, client):
        response = client.post(PATTERNS_URL, json={"data": to_payload(get_head_and_shoulders_prices())})

        assert response.status_code == 200
        body = response.json()
        assert "symbol" not in body
        keys = [p["patternKey"] for p in body["patterns"]]
        assert "head-and-shoulders" in keys
        assert len(keys) <= 4

    def test_short_series_has_no_patterns(self, client):
        response = client.post(PATTERNS_URL, json={"data": to_payload([100, 101, 102])})

        assert response.status_code == 200
        assert response.json()["patterns"] == []
        assert response.json()["patternSummary"] == ""
        assert "technicalInsight" not in response.json()

    def test_rejects_non_positive_price(self, client):
        payload = to_payload(get_uptrend_channel_prices())
        payload[4]["price"] = 0

        response = client.post(PATTERNS_URL, json={"data": payload})

        assert response.status_code == 422

    def test_rejects_point_without_volume(self, client):
        payload = to_payload(get_uptrend_channel_prices())
        del payload[2]["volume"]

        response = client.post(PATTERNS_URL, json={"data": payload})

        assert response.status_code == 422

    def test_rejects_unsorted_dates(self, client):
        payload = to_payload(get_uptrend_channel_prices())
        payload[3], payload[4] = payload[4], payload[3]

        response = client.post(PATTERNS_URL, json={"data": payload})

        assert response.status_code == 422
        assert response.json()["error"] == "Historical data must be ordered oldest first"


class TestMatchPatternEndpoint:

    @pytest.fixture
    def detected(self, client):
        response = client.post(PATTERNS_URL, json={"data": to_payload(get_uptrend_channel_prices())})
        return response.json()["patterns"]

    def test_resolves_tag(self, client, detected):
        response = client.post(
            "/api/v1/analysis/patterns/match",
            json={"patterns": detected, "patternType": "uptrend"}
        )

        assert response.status_code == 200
        assert response.json()["pattern"]["type"] == "Uptrend Channel"

    def test_none_tag(self, client, detected):
        response = client.post(
            "/api/v1/analysis/patterns/match",
            json={"patterns": detected, "patternType": "none"}
        )

        assert response.status_code == 200
        assert response.json() == {"pattern": None}

    def test_unknown_tag_returns_null_pattern(self, client, detected):
        response = client.post(
            "/api/v1/analysis/patterns/match",
            json={"patterns": detected, "patternType": "cup-and-handle"}
        )

        assert response.status_code == 200
        assert response.json() == {"pattern": None}


def test_pattern_keys_listed_in_run_order(client):
    response = client.get("/api/v1/analysis/pattern-keys")

    assert response.status_code == 200
    detectors = response.json()
    assert [(d["name"], d["window"]) for d in detectors] == [
        ("triangle", 15),
        ("head_and_shoulders", 20),
        ("double_top_bottom", 15),
        ("support_resistance", 10),
        ("trend_channel", 15),
    ]
    assert detectors[-1]["patternKeys"] == ["uptrend", "downtrend"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_pattern_keys_filtered_by_key(client):
    response = client.get("/api/v1/analysis/pattern-keys", params={"key": "support"})

    assert response.status_code == 200
    assert [d["name"] for d in response.json()] == ["support_resistance"]
