from __future__ import annotations

from fastapi.testclient import TestClient

from tests.conftest import issue_test_code, token_form


def test_health_reports_ok(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["checks"]["auth_code_store"] == "in_memory"
    assert set(body["token_exchanges"]) == {"total", "issued", "rejected"}


def test_health_counts_registered_clients(
    client: TestClient, registered_client
) -> None:
    assert client.get("/health").json()["checks"]["registered_clients"] == 1


def test_health_tracks_rejected_exchanges(client: TestClient, clock) -> None:
    before = client.get("/health").json()["token_exchanges"]
    client.post("/oauth/token", data=token_form(issue_test_code()))  # no client
    after = client.get("/health").json()["token_exchanges"]

    assert after["rejected"] - before["rejected"] == 1
    assert after["issued"] == before["issued"]


def test_ready(client: TestClient) -> None:
    assert client.get("/ready").status_code == 200


def test_metrics_endpoint_serves_prometheus_text(client: TestClient) -> None:
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "http_requests_total" in resp.text
