"""Tests for the typer command-line interface."""
import json

import httpx
import pytest
from typer.testing import CliRunner

from booking_client import cli
from booking_client.api.client import BookingClient
from booking_client.api.transport import HttpxTransport
from booking_client.storage.credentials import MemoryCredentialStore

runner = CliRunner()


def backend(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/user/login/":
        body = json.loads(request.content)
        if body["password"] != "secret":
            return httpx.Response(401, json={"detail": "No active account"})
        return httpx.Response(200, json={"access": "tok2", "refresh": "ref1"})
    if path == "/user/token/refresh/":
        return httpx.Response(400, json={"detail": "Token is invalid or expired"})
    if request.headers.get("Authorization") == "Bearer tok2":
        return httpx.Response(200, json={"centers": [{"id": 1, "name": "North"}]})
    return httpx.Response(401, json={"detail": "Authentication credentials were not provided."})


@pytest.fixture
def store(monkeypatch):
    store = MemoryCredentialStore()

    def factory():
        transport = HttpxTransport("https://booking.test/", transport=httpx.MockTransport(backend))
        return BookingClient(store, transport)

    monkeypatch.setattr(cli, "get_client", factory)
    return store


def test_login_stores_tokens(store):
    result = runner.invoke(cli.app, ["login", "--username", "ana", "--password", "secret"])
    assert result.exit_code == 0, result.output
    assert "Logged in as ana" in result.output
    assert store.snapshot() == {"accessToken": "tok2", "refreshToken": "ref1"}


def test_login_rejected(store):
    result = runner.invoke(cli.app, ["login", "--username", "ana", "--password", "wrong"])
    assert result.exit_code == 1
    assert "Login rejected" in result.output
    assert store.snapshot() == {}


def test_request_by_endpoint_name(store):
    store.set("accessToken", "tok2")
    store.set("refreshToken", "ref1")
    result = runner.invoke(cli.app, ["request", "GET", "centers"])
    assert result.exit_code == 0, result.output
    assert "200 OK" in result.output
    assert "North" in result.output


def test_request_with_expired_session(store):
    store.set("accessToken", "tok1")
    store.set("refreshToken", "ref1")
    result = runner.invoke(cli.app, ["request", "GET", "api/centers/"])
    assert result.exit_code == 1
    assert "Session expired" in result.output
    assert store.snapshot() == {}


def test_request_invalid_json(store):
    result = runner.invoke(cli.app, ["request", "POST", "FEEDBACKS", "--json", "{oops"])
    assert result.exit_code == 2
    assert "Invalid JSON body" in result.output


def test_status_and_logout(store):
    store.set("accessToken", "tok2")
    store.set("refreshToken", "ref1")
    result = runner.invoke(cli.app, ["status"])
    assert "https://booking.test/" in result.output
    assert "Logged in" in result.output

    result = runner.invoke(cli.app, ["logout"])
    assert result.exit_code == 0
    assert store.snapshot() == {}

    result = runner.invoke(cli.app, ["status"])
    assert "Not logged in" in result.output


def test_refresh_failure_reports_error(store):
    store.set("refreshToken", "ref1")
    result = runner.invoke(cli.app, ["refresh"])
    assert result.exit_code == 1
    assert "Token refresh failed" in result.output


def test_endpoints_table(tmp_path, monkeypatch):
    monkeypatch.setattr("booking_client.storage.config.SETTINGS_FILE", tmp_path / "settings.json")
    result = runner.invoke(cli.app, ["endpoints"])
    assert result.exit_code == 0
    assert "CONFIRM_ATTENDANCE" in result.output
    assert "api/records/confirm_attendance/" in result.output
