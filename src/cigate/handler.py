from typing import Any, List, Mapping

from gidgethub.routing import Router
from gidgethub.sansio import Event
from sanic.log import logger

from cigate import config as app_config
from cigate.github.api import API
from cigate.github.model import Repository
from cigate.metric import webhook_skipped_counter
from cigate.model import TriggerConfig
from cigate.trigger import (
    ActionExecutor,
    Ignored,
    PullRequestEvent,
    TriggerAction,
    decide,
    parse_event,
    read_labels,
)


async def handle_event(
    event: PullRequestEvent,
    api: API,
    config: TriggerConfig | None = None,
    dry_run: bool | None = None,
) -> List[TriggerAction]:
    """Read the labels, decide, apply. Returns the actions that were applied."""
    pr = event.pull_request
    logger.info("Begin handling %s for %s", type(event).__name__, pr)

    if isinstance(event, Ignored):
        logger.debug("Ignoring %s action %s on %s", event.event, event.action, pr)
        webhook_skipped_counter.labels(event=event.event, reason="action").inc()
        return []

    labels = await read_labels(api, pr)
    actions = decide(event, labels, config)
    if len(actions) == 0:
        logger.info("Nothing to do for %s", pr)
        return []

    applied = await ActionExecutor(api, pr, dry_run=dry_run).apply(actions)
    logger.info("Finished handling %s, API calls: %d", pr, api.call_count)
    return applied


async def handle_payload(
    event_name: str,
    payload: Mapping[str, Any],
    api: API,
    config: TriggerConfig | None = None,
    dry_run: bool | None = None,
) -> List[TriggerAction]:
    event = parse_event(event_name, payload)
    return await handle_event(event, api, config=config, dry_run=dry_run)


def validate_source_repo(repo: Repository) -> bool:
    if repo.private:
        if app_config.REPO_ALLOWLIST is not None:
            if repo.full_name in app_config.REPO_ALLOWLIST:
                return True
        logger.warning("Webhook triggered on private repository: %s", repo.html_url)
        return False

    return True


def create_router():
    router = Router()

    @router.register("pull_request")
    @router.register("pull_request_review")
    async def on_pull_request(event: Event, api: API, **kwargs):
        logger.debug(
            "Received %s event, action %s", event.event, event.data.get("action")
        )

        # parsing first, a broken repository section is a malformed event
        pr_event = parse_event(event.event, event.data)

        repo = Repository.model_validate(event.data["repository"])
        if not validate_source_repo(repo):
            webhook_skipped_counter.labels(event=event.event, reason="private").inc()
            return

        await handle_event(pr_event, api, **kwargs)

    return router
