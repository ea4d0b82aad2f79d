from __future__ import annotations

import logging
from typing import Iterable, List

from cigate import config as app_config
from cigate.github.api import API, TransientPlatformError
from cigate.metric import action_counter
from cigate.trigger.types import (
    AddLabel,
    PostComment,
    PullRequestRef,
    RemoveLabel,
    TriggerAction,
)

logger = logging.getLogger("cigate")


class ActionFailedError(TransientPlatformError):
    action: TriggerAction
    applied: List[TriggerAction]

    def __init__(self, *args, **kwargs):
        self.action = kwargs.pop("action")
        self.applied = kwargs.pop("applied")
        super().__init__(*args, **kwargs)


class ActionExecutor:
    """
    Applies trigger actions to one pull request, in order.

    Label changes are idempotent. The first failing action stops the run;
    whatever was applied before it stays applied, the next event recomputes
    from the live labels.
    """

    def __init__(self, api: API, pr: PullRequestRef, dry_run: bool | None = None):
        self.api = api
        self.pr = pr
        self.dry_run = app_config.DRY_RUN if dry_run is None else dry_run

    async def apply(self, actions: Iterable[TriggerAction]) -> List[TriggerAction]:
        applied: List[TriggerAction] = []
        for action in actions:
            if self.dry_run:
                logger.info("[dry run] %s: would apply %r", self.pr, action)
                action_counter.labels(kind=action.kind, result="dry_run").inc()
                applied.append(action)
                continue

            try:
                result = await self.apply_one(action)
            except TransientPlatformError as e:
                action_counter.labels(kind=action.kind, result="failed").inc()
                logger.error(
                    "%s: %r failed after %d applied action(s)",
                    self.pr,
                    action,
                    len(applied),
                )
                raise ActionFailedError(
                    str(e), action=action, applied=list(applied)
                ) from e

            action_counter.labels(kind=action.kind, result=result).inc()
            applied.append(action)
        return applied

    async def apply_one(self, action: TriggerAction) -> str:
        repo_url, number = self.pr.repo_url, self.pr.number

        if isinstance(action, AddLabel):
            logger.info("%s: adding label %s", self.pr, action.name)
            await self.api.add_labels(repo_url, number, [action.name])
            return "applied"

        if isinstance(action, RemoveLabel):
            logger.info("%s: removing label %s", self.pr, action.name)
            if await self.api.remove_label(repo_url, number, action.name):
                return "applied"
            return "noop"

        if isinstance(action, PostComment):
            if not action.allow_repeats and await self._has_comment(action.body):
                logger.info("%s: identical comment exists, not posting", self.pr)
                return "noop"
            comment = await self.api.post_comment(repo_url, number, action.body)
            logger.info(
                "%s: posted comment %s", self.pr, comment.html_url or comment.id
            )
            return "applied"

        raise TypeError(f"Unknown action {action!r}")

    async def _has_comment(self, body: str) -> bool:
        async for comment in self.api.get_comments(self.pr.repo_url, self.pr.number):
            if comment.body.strip() == body.strip():
                return True
        return False
