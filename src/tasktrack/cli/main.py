"""tasktrack CLI — sign up, sign in and manage tasks over the HTTP API.

Usage:
    tasktrack signup alice                       # Prompts for a password
    tasktrack signin alice                       # Prints an access token
    export TASKTRACK_TOKEN=<token>
    tasktrack tasks list --status OPEN --search bills
    tasktrack tasks create "pay bills" "electricity and water"
    tasktrack tasks status 3 DONE
    tasktrack tasks delete 3
    tasktrack serve                              # Run the API with uvicorn
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

from tasktrack import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:8000"
STATUSES = ("OPEN", "IN_PROGRESS", "DONE")


def _api_url() -> str:
    return os.environ.get("TASKTRACK_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the tasktrack backend."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(base_url=_api_url(), headers=headers, timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. Click's CliRunner inside an async
    test) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _check(r: httpx.Response) -> None:
    """Exit with the API's error detail on a non-2xx response."""
    if r.is_success:
        return
    try:
        detail = r.json().get("detail", r.text)
    except ValueError:
        detail = r.text
    if not isinstance(detail, str):
        detail = json.dumps(detail)
    click.secho(f"Error ({r.status_code}): {detail}", fg="red", err=True)
    sys.exit(1)


def _status_color(status: str) -> str:
    return {"OPEN": "white", "IN_PROGRESS": "yellow", "DONE": "green"}.get(status, "white")


def _print_task(t: dict) -> None:
    status_str = click.style(f"{t['status']:11s}", fg=_status_color(t["status"]))
    click.echo(f"  #{t['id']:<5} {status_str}  {t['title'][:50]}")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="tasktrack")
def cli():
    """tasktrack — personal task tracking."""


# ---------------------------------------------------------------------------
# tasktrack signup / signin
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("username")
@click.password_option()
def signup(username: str, password: str):
    """Create an account."""
    _run(_signup_impl(username, password))


async def _signup_impl(username: str, password: str):
    async with _client() as c:
        r = await c.post("/auth/signup", json={"username": username, "password": password})
        _check(r)
        click.secho(f"User {r.json()['username']} created", fg="green")


@cli.command()
@click.argument("username")
@click.option("--password", prompt=True, hide_input=True)
def signin(username: str, password: str):
    """Sign in and print an access token (export it as TASKTRACK_TOKEN)."""
    _run(_signin_impl(username, password))


async def _signin_impl(username: str, password: str):
    async with _client() as c:
        r = await c.post("/auth/signin", json={"username": username, "password": password})
        _check(r)
        click.echo(r.json()["accessToken"])


# ---------------------------------------------------------------------------
# tasktrack tasks ...
# ---------------------------------------------------------------------------


@cli.group()
@click.option("--token", envvar="TASKTRACK_TOKEN", required=True,
              help="Access token (or set TASKTRACK_TOKEN)")
@click.pass_context
def tasks(ctx: click.Context, token: str):
    """Manage your tasks."""
    ctx.obj = token


@tasks.command("list")
@click.option("--search", "-s", help="Substring of title or description")
@click.option("--status", type=click.Choice(STATUSES), help="Filter by status")
@click.pass_obj
def list_tasks(token: str, search: Optional[str], status: Optional[str]):
    """List your tasks (oldest first)."""
    _run(_list_impl(token, search, status))


async def _list_impl(token: str, search: Optional[str], status: Optional[str]):
    params = {}
    if search:
        params["search"] = search
    if status:
        params["status"] = status

    async with _client(token) as c:
        r = await c.get("/tasks", params=params)
        _check(r)
        items = r.json()

    if not items:
        click.echo("No tasks found.")
        return
    click.secho(f"Tasks ({len(items)}):", bold=True)
    for t in items:
        _print_task(t)


@tasks.command("show")
@click.argument("task_id", type=int)
@click.pass_obj
def show_task(token: str, task_id: int):
    """Show one task as JSON."""
    _run(_show_impl(token, task_id))


async def _show_impl(token: str, task_id: int):
    async with _client(token) as c:
        r = await c.get(f"/tasks/{task_id}")
        _check(r)
        click.echo(json.dumps(r.json(), indent=2, default=str))


@tasks.command("create")
@click.argument("title")
@click.argument("description")
@click.pass_obj
def create_task(token: str, title: str, description: str):
    """Create a task (starts as OPEN)."""
    _run(_create_impl(token, title, description))


async def _create_impl(token: str, title: str, description: str):
    async with _client(token) as c:
        r = await c.post("/tasks", json={"title": title, "description": description})
        _check(r)
        task = r.json()
    click.secho(f"Task #{task['id']} created", fg="green")


@tasks.command("status")
@click.argument("task_id", type=int)
@click.argument("status", type=click.Choice(STATUSES))
@click.pass_obj
def set_status(token: str, task_id: int, status: str):
    """Change a task's status."""
    _run(_status_impl(token, task_id, status))


async def _status_impl(token: str, task_id: int, status: str):
    async with _client(token) as c:
        r = await c.patch(f"/tasks/{task_id}/status", json={"status": status})
        _check(r)
        _print_task(r.json())


@tasks.command("delete")
@click.argument("task_id", type=int)
@click.pass_obj
def delete_task(token: str, task_id: int):
    """Delete a task."""
    _run(_delete_impl(token, task_id))


async def _delete_impl(token: str, task_id: int):
    async with _client(token) as c:
        r = await c.delete(f"/tasks/{task_id}")
        _check(r)
    click.secho(f"Task #{task_id} deleted", fg="green")


# ---------------------------------------------------------------------------
# tasktrack serve
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--host", default=None, help="Bind address (default: TASKTRACK_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: TASKTRACK_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server with uvicorn."""
    import uvicorn

    from tasktrack.config import settings

    uvicorn.run(
        "tasktrack.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
