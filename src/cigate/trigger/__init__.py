from cigate.trigger.engine import decide
from cigate.trigger.events import MalformedEventError, parse_event
from cigate.trigger.executor import ActionExecutor, ActionFailedError
from cigate.trigger.reader import read_labels
from cigate.trigger.types import (
    AddLabel,
    CodePush,
    Ignored,
    LabelSet,
    PostComment,
    PullRequestEvent,
    PullRequestRef,
    RemoveLabel,
    ReviewOutcome,
    ReviewSubmitted,
    TriggerAction,
)

__all__ = [
    "ActionExecutor",
    "ActionFailedError",
    "AddLabel",
    "CodePush",
    "Ignored",
    "LabelSet",
    "MalformedEventError",
    "PostComment",
    "PullRequestEvent",
    "PullRequestRef",
    "RemoveLabel",
    "ReviewOutcome",
    "ReviewSubmitted",
    "TriggerAction",
    "decide",
    "parse_event",
    "read_labels",
]
