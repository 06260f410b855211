import importlib
import json
import logging

from fastapi.testclient import TestClient

import safeconfig.main
from safeconfig.main import app

client = TestClient(app)

PUBLIC_DB = json.dumps({
    "services": [
        {"name": "user-db", "type": "db", "public": True,
         "resourceLimits": {"cpu": 1, "memoryMb": 512}}
    ]
})
PRIVATE_DB = json.dumps({
    "services": [
        {"name": "user-db", "type": "db",
         "resourceLimits": {"cpu": 1, "memoryMb": 512}}
    ]
})


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "safeconfig-backend"}


def test_analyze_returns_violations():
    response = client.post("/api/analyze", json={"config": PUBLIC_DB, "format": "json"})

    assert response.status_code == 200
    body = response.json()
    assert body["errors"] == []
    assert body["ir"]["services"][0]["name"] == "user-db"
    assert [v["id"] for v in body["violations"]] == ["R1_NO_PUBLIC_DB"]


def test_analyze_parse_failure_is_400_with_errors():
    response = client.post("/api/analyze", json={"config": "services: [", "format": "yaml"})

    assert response.status_code == 400
    body = response.json()
    assert list(body) == ["errors"]
    assert len(body["errors"]) == 1


def test_analyze_bad_request_body():
    response = client.post("/api/analyze", json={"config": PUBLIC_DB})

    assert response.status_code == 400
    assert "config (string)" in response.json()["error"]


def test_diff_endpoint():
    response = client.post(
        "/api/diff",
        json={"oldConfig": PUBLIC_DB, "newConfig": PRIVATE_DB, "format": "json"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["diff"]["summary"]["totalResolvedViolations"] == 1
    assert body["diff"]["changes"][0]["riskImpact"] == "risk_decrease"
    assert body["oldViolations"][0]["id"] == "R1_NO_PUBLIC_DB"
    assert body["newViolations"] == []
    assert body["oldIr"]["metadata"]["rawHash"] != body["newIr"]["metadata"]["rawHash"]


def test_diff_with_one_bad_side():
    response = client.post(
        "/api/diff",
        json={"oldConfig": PUBLIC_DB, "newConfig": "{", "format": "json"},
    )

    assert response.status_code == 400
    assert list(response.json()) == ["errors"]


def test_diff_bad_request_body():
    response = client.post("/api/diff", json={"oldConfig": PUBLIC_DB, "format": "json"})

    assert response.status_code == 400
    assert "oldConfig, newConfig" in response.json()["error"]


def test_analyze_echoes_escaped_surrogate():
    config_text = '{"services": [{"name": "\\ud800", "type": "api"}]}'
    response = client.post("/api/analyze", json={"config": config_text, "format": "json"})

    assert response.status_code == 200
    body = response.json()
    assert body["ir"]["services"][0]["name"] == "\ud800"
    assert body["violations"][0]["serviceName"] == "\ud800"


def test_importing_app_leaves_logging_alone(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    importlib.reload(safeconfig.main)

    assert calls == []
