from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Union

LabelSet = FrozenSet[str]


class ReviewOutcome(Enum):
    approved = "approved"
    changes_requested = "changes_requested"
    commented = "commented"


@dataclass(frozen=True)
class PullRequestRef:
    repo_url: str
    number: int
    repo_full_name: str | None = None
    head_sha: str | None = None
    # labels as delivered in the payload, only used for offline planning
    inline_labels: LabelSet | None = None

    def __str__(self) -> str:
        name = self.repo_full_name or self.repo_url
        return f"PR({name}#{self.number})"


@dataclass(frozen=True)
class CodePush:
    pull_request: PullRequestRef
    action: str = "synchronize"


@dataclass(frozen=True)
class ReviewSubmitted:
    pull_request: PullRequestRef
    outcome: ReviewOutcome


@dataclass(frozen=True)
class Ignored:
    pull_request: PullRequestRef
    event: str
    action: str


PullRequestEvent = Union[CodePush, ReviewSubmitted, Ignored]


@dataclass(frozen=True)
class AddLabel:
    name: str

    kind = "add_label"


@dataclass(frozen=True)
class RemoveLabel:
    name: str

    kind = "remove_label"


@dataclass(frozen=True)
class PostComment:
    body: str
    allow_repeats: bool = True

    kind = "post_comment"

    def __repr__(self) -> str:
        first = self.body.splitlines()[0] if self.body else ""
        return f"PostComment({first!r}, allow_repeats={self.allow_repeats})"


TriggerAction = Union[AddLabel, RemoveLabel, PostComment]
