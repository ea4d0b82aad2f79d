from __future__ import annotations

from typing import Any, Mapping

import pydantic

from cigate.github.model import PullRequest, Repository, Review
from cigate.trigger.types import (
    CodePush,
    Ignored,
    PullRequestEvent,
    PullRequestRef,
    ReviewOutcome,
    ReviewSubmitted,
)

SUPPORTED_EVENTS = frozenset({"pull_request", "pull_request_review"})

PUSH_ACTIONS = frozenset({"opened", "synchronize", "reopened"})


class MalformedEventError(Exception):
    """The payload lacks a field needed to classify the event."""


def _pull_request_ref(payload: Mapping[str, Any]) -> PullRequestRef:
    try:
        repo = Repository.model_validate(payload["repository"])
        pr = PullRequest.model_validate(payload["pull_request"])
    except KeyError as e:
        raise MalformedEventError(f"Payload has no {e.args[0]!r} field") from e
    except pydantic.ValidationError as e:
        raise MalformedEventError(str(e)) from e

    return PullRequestRef(
        repo_url=repo.url,
        number=pr.number,
        repo_full_name=repo.full_name,
        head_sha=pr.head.sha if pr.head is not None else None,
        inline_labels=frozenset(label.name for label in pr.labels),
    )


def parse_event(event: str, payload: Mapping[str, Any]) -> PullRequestEvent:
    if event not in SUPPORTED_EVENTS:
        raise MalformedEventError(f"Unsupported event type {event!r}")

    action = payload.get("action")
    if not isinstance(action, str):
        raise MalformedEventError(f"{event} payload has no action")

    pr = _pull_request_ref(payload)

    if event == "pull_request":
        if action in PUSH_ACTIONS:
            return CodePush(pull_request=pr, action=action)
        return Ignored(pull_request=pr, event=event, action=action)

    if action != "submitted":
        return Ignored(pull_request=pr, event=event, action=action)

    try:
        review = Review.model_validate(payload["review"])
    except KeyError as e:
        raise MalformedEventError("Review payload has no 'review' field") from e
    except pydantic.ValidationError as e:
        raise MalformedEventError(str(e)) from e

    try:
        outcome = ReviewOutcome(review.state.lower())
    except ValueError as e:
        raise MalformedEventError(f"Unknown review state {review.state!r}") from e

    return ReviewSubmitted(pull_request=pr, outcome=outcome)
