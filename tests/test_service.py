"""Tests for the HTTP service."""
import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from suilend_agent.core.settings import settings
from suilend_agent.service.service import create_app, dispatcher_from_settings


@pytest.fixture
def no_auth(monkeypatch):
    monkeypatch.setattr(settings, "AUTH_SECRET", None)


@pytest.fixture
def http(dispatcher, no_auth):
    return TestClient(create_app(dispatcher))


def test_health(http):
    response = http.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_info_lists_operations(http):
    response = http.get("/info")

    assert response.status_code == 200
    operations = response.json()["operations"]
    assert len(operations) == 17
    deposit = next(op for op in operations if op["name"] == "deposit_into_obligation")
    assert [param["name"] for param in deposit["parameters"]] == [
        "owner_id", "coin_type", "value", "obligation_owner_cap_id",
    ]


def test_invoke_tool(http):
    response = http.post(
        "/tools/deposit_into_obligation/invoke",
        json={"args": ["0xOWNER", "0x2::sui::SUI", "1000000", "0xCAP"]},
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["status"] == "success"
    assert body[0]["errors"] == []


def test_invoke_tool_failure_is_enveloped(http):
    response = http.post("/tools/get_obligation/invoke", json={"args": [42]})

    assert response.status_code == 200
    body = response.json()
    assert body[0]["status"] == "failure"
    assert body[0]["response"] == ""
    assert body[0]["errors"]


def test_unknown_tool_is_404(http):
    response = http.post("/tools/unknown/invoke", json={"args": []})
    assert response.status_code == 404


def test_bearer_auth(dispatcher, monkeypatch):
    monkeypatch.setattr(settings, "AUTH_SECRET", SecretStr("s3cret"))
    http = TestClient(create_app(dispatcher))

    assert http.get("/info").status_code == 401
    assert http.get("/info", headers={"Authorization": "Bearer wrong"}).status_code == 401
    assert http.get("/info", headers={"Authorization": "Bearer s3cret"}).status_code == 200


def test_dispatcher_requires_configured_factories(monkeypatch):
    monkeypatch.setattr(settings, "LENDING_CLIENT_FACTORY", None)
    monkeypatch.setattr(settings, "TRANSACTION_FACTORY", None)

    with pytest.raises(RuntimeError, match="LENDING_CLIENT_FACTORY"):
        dispatcher_from_settings()
