import asyncio
from contextlib import asynccontextmanager
import json
import logging
from pathlib import Path
from typing import List, Optional

import aiohttp
import typer
from gidgethub import aiohttp as gh_aiohttp

from cigate import config
from cigate.github.api import API, TransientPlatformError
from cigate.handler import handle_payload
from cigate.logger import setup_logging
from cigate.trigger import MalformedEventError, decide, parse_event


logger = logging.getLogger("cigate")

app = typer.Typer()


@app.callback()
def init():
    setup_logging()


@asynccontextmanager
async def token_client(token: str):
    async with aiohttp.ClientSession() as session:
        yield gh_aiohttp.GitHubAPI(session, "cigate", oauth_token=token)


def load_payload(event_path: Path) -> dict:
    try:
        with event_path.open(encoding="utf-8") as fh:
            payload = json.load(fh)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedEventError(f"{event_path} is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedEventError(f"{event_path} does not hold a JSON object")
    return payload


@app.command()
def handle(
    event_name: str,
    event_path: Path = typer.Argument(..., exists=True, dir_okay=False),
    dry_run: bool = typer.Option(config.DRY_RUN, "--dry-run"),
):
    """Handle one delivered event, e.g. from a workflow step."""

    if config.GITHUB_TOKEN is None:
        raise typer.BadParameter("GITHUB_TOKEN is not set")

    async def run():
        payload = load_payload(event_path)
        async with token_client(config.GITHUB_TOKEN) as gh:
            return await handle_payload(event_name, payload, API(gh), dry_run=dry_run)

    try:
        applied = asyncio.run(run())
    except MalformedEventError as e:
        logger.error("Dropping malformed %s event: %s", event_name, e)
        return
    except TransientPlatformError as e:
        logger.error("Platform error, nothing further applied: %s", e)
        raise typer.Exit(code=1)

    for action in applied:
        typer.echo(repr(action))


@app.command()
def plan(
    event_name: str,
    event_path: Path = typer.Argument(..., exists=True, dir_okay=False),
    label: Optional[List[str]] = typer.Option(
        None, "--label", help="Labels on the PR, defaults to the ones in the payload"
    ),
):
    """Print the actions an event would produce, without contacting GitHub."""
    try:
        event = parse_event(event_name, load_payload(event_path))
    except MalformedEventError as e:
        typer.echo(f"Malformed event: {e}", err=True)
        raise typer.Exit(code=2)

    if label:
        labels = frozenset(label)
    else:
        labels = event.pull_request.inline_labels or frozenset()

    actions = decide(event, labels)
    if len(actions) == 0:
        typer.echo("No action")
    for action in actions:
        typer.echo(repr(action))
        if hasattr(action, "body"):
            typer.echo(action.body)


@app.command()
def serve(host: str = config.HOST, port: int = config.PORT):
    from cigate.web import create_app

    create_app().run(host=host, port=port, single_process=True)
