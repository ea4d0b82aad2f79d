from __future__ import annotations

import logging
from typing import AbstractSet, List

from cigate.model import TriggerConfig
from cigate.trigger.types import (
    AddLabel,
    CodePush,
    Ignored,
    PostComment,
    PullRequestEvent,
    RemoveLabel,
    ReviewOutcome,
    ReviewSubmitted,
    TriggerAction,
)

logger = logging.getLogger("cigate")


def decide(
    event: PullRequestEvent,
    labels: AbstractSet[str],
    config: TriggerConfig | None = None,
) -> List[TriggerAction]:
    """
    Map an event and the labels currently on its pull request to the actions
    to take.

    The marker label records that the full suite was already triggered for the
    current head. A push clears it and asks for the fast tests; the first
    approval afterwards sets it and asks for the full suite. Every other
    combination yields no action, so replaying an event against the same
    labels always gives the same answer.
    """
    config = config or TriggerConfig()
    approved = config.approved_label in labels

    actions: List[TriggerAction] = []

    if isinstance(event, CodePush):
        # the removal goes first, it re-arms the full suite for the new head
        if approved:
            actions.append(RemoveLabel(config.approved_label))
        actions.append(PostComment(config.fast_trigger(), allow_repeats=True))

    elif isinstance(event, ReviewSubmitted):
        if event.outcome is ReviewOutcome.approved and not approved:
            actions.append(AddLabel(config.approved_label))
            actions.append(PostComment(config.full_trigger(), allow_repeats=True))

    elif isinstance(event, Ignored):
        pass

    else:
        raise TypeError(f"Unknown event {event!r}")

    logger.info(
        "%s: %s with approved=%s -> %s",
        event.pull_request,
        type(event).__name__,
        approved,
        actions,
    )
    return actions
