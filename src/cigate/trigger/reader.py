from __future__ import annotations

import logging

from cigate.github.api import API
from cigate.trigger.types import LabelSet, PullRequestRef

logger = logging.getLogger("cigate")


async def read_labels(api: API, pr: PullRequestRef) -> LabelSet:
    # always asks GitHub, labels may have been edited by hand since delivery
    labels = frozenset(
        label.name for label in await api.get_labels(pr.repo_url, pr.number)
    )
    logger.debug("%s has labels %s", pr, sorted(labels))
    return labels
