"""CLI tests — commands hit the right routes and render responses.

Learn: The HTTP layer is replaced by httpx.MockTransport, so these run
without a server. Each test records the requests the CLI made.
"""

import json

import httpx
import pytest
from click.testing import CliRunner

from tasktrack.cli import main as cli_main

TASK = {
    "id": 7,
    "title": "pay bills",
    "description": "electricity and water",
    "status": "OPEN",
    "owner_id": 1,
    "created_at": "2026-01-01T00:00:00",
    "updated_at": "2026-01-01T00:00:00",
}


@pytest.fixture
def api(monkeypatch):
    """Route CLI traffic to a handler; returns (requests, set_handler)."""
    seen: list[httpx.Request] = []
    state = {"handler": lambda request: httpx.Response(200, json={})}

    def transport_handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return state["handler"](request)

    def fake_client(token=None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return httpx.AsyncClient(
            transport=httpx.MockTransport(transport_handler),
            base_url="http://test",
            headers=headers,
        )

    monkeypatch.setattr(cli_main, "_client", fake_client)

    def set_handler(fn):
        state["handler"] = fn

    return seen, set_handler


def test_signup(api):
    seen, set_handler = api
    set_handler(lambda r: httpx.Response(201, json={"id": 1, "username": "alice"}))

    result = CliRunner().invoke(cli_main.cli, ["signup", "alice", "--password", "Sup3r-secret"])
    assert result.exit_code == 0, result.output
    assert "User alice created" in result.output
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/auth/signup"
    assert json.loads(seen[0].content) == {"username": "alice", "password": "Sup3r-secret"}


def test_signin_prints_token(api):
    seen, set_handler = api
    set_handler(lambda r: httpx.Response(200, json={"accessToken": "tok123", "tokenType": "bearer"}))

    result = CliRunner().invoke(cli_main.cli, ["signin", "alice", "--password", "Sup3r-secret"])
    assert result.exit_code == 0
    assert result.output.strip() == "tok123"
    assert seen[0].url.path == "/auth/signin"


def test_signin_failure_exits_nonzero(api):
    _, set_handler = api
    set_handler(lambda r: httpx.Response(401, json={"detail": "Invalid credentials"}))

    result = CliRunner().invoke(cli_main.cli, ["signin", "alice", "--password", "nope"])
    assert result.exit_code == 1
    assert "Invalid credentials" in result.output


def test_tasks_requires_token(api, monkeypatch):
    monkeypatch.delenv("TASKTRACK_TOKEN", raising=False)
    result = CliRunner().invoke(cli_main.cli, ["tasks", "list"])
    assert result.exit_code != 0


def test_tasks_list_sends_filters_and_token(api):
    seen, set_handler = api
    set_handler(lambda r: httpx.Response(200, json=[TASK]))

    result = CliRunner().invoke(
        cli_main.cli,
        ["tasks", "--token", "tok123", "list", "--search", "pay", "--status", "OPEN"],
    )
    assert result.exit_code == 0, result.output
    assert "pay bills" in result.output
    req = seen[0]
    assert req.url.path == "/tasks"
    assert req.url.params["search"] == "pay"
    assert req.url.params["status"] == "OPEN"
    assert req.headers["Authorization"] == "Bearer tok123"


def test_tasks_list_token_from_env(api, monkeypatch):
    seen, set_handler = api
    set_handler(lambda r: httpx.Response(200, json=[]))
    monkeypatch.setenv("TASKTRACK_TOKEN", "envtok")

    result = CliRunner().invoke(cli_main.cli, ["tasks", "list"])
    assert result.exit_code == 0
    assert "No tasks found." in result.output
    assert seen[0].headers["Authorization"] == "Bearer envtok"


def test_tasks_create(api):
    seen, set_handler = api
    set_handler(lambda r: httpx.Response(201, json=TASK))

    result = CliRunner().invoke(
        cli_main.cli,
        ["tasks", "--token", "t", "create", "pay bills", "electricity and water"],
    )
    assert result.exit_code == 0
    assert "Task #7 created" in result.output
    assert json.loads(seen[0].content) == {
        "title": "pay bills",
        "description": "electricity and water",
    }


def test_tasks_status(api):
    seen, set_handler = api
    set_handler(lambda r: httpx.Response(200, json={**TASK, "status": "DONE"}))

    result = CliRunner().invoke(cli_main.cli, ["tasks", "--token", "t", "status", "7", "DONE"])
    assert result.exit_code == 0
    assert seen[0].method == "PATCH"
    assert seen[0].url.path == "/tasks/7/status"
    assert json.loads(seen[0].content) == {"status": "DONE"}


def test_tasks_status_rejects_unknown_value(api):
    seen, _ = api
    result = CliRunner().invoke(cli_main.cli, ["tasks", "--token", "t", "status", "7", "ARCHIVED"])
    assert result.exit_code != 0
    assert seen == []


def test_tasks_show(api):
    seen, set_handler = api
    set_handler(lambda r: httpx.Response(200, json=TASK))

    result = CliRunner().invoke(cli_main.cli, ["tasks", "--token", "t", "show", "7"])
    assert result.exit_code == 0
    assert json.loads(result.output)["id"] == 7
    assert seen[0].url.path == "/tasks/7"


def test_tasks_delete_not_found(api):
    seen, set_handler = api
    set_handler(lambda r: httpx.Response(404, json={"detail": "Task with ID 7 not found"}))

    result = CliRunner().invoke(cli_main.cli, ["tasks", "--token", "t", "delete", "7"])
    assert result.exit_code == 1
    assert "not found" in result.output
    assert seen[0].method == "DELETE"
