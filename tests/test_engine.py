import pytest

from cigate.model import TriggerConfig
from cigate.trigger import (
    AddLabel,
    CodePush,
    Ignored,
    PostComment,
    PullRequestRef,
    RemoveLabel,
    ReviewOutcome,
    ReviewSubmitted,
    decide,
)

PR = PullRequestRef(repo_url="https://api.github.com/repos/org/repo", number=7)

FAST = "@slab-ci cpu_fast_test"

FULL = """Pull Request has been approved :tada:
Launching full test suite...
@slab-ci cpu_test
@slab-ci cpu_integer_test
@slab-ci cpu_multi_bit_test
@slab-ci cpu_wasm_test
@slab-ci csprng_randomness_testing"""


@pytest.fixture
def trigger_config():
    return TriggerConfig(
        approved_label="approved",
        bot="@slab-ci",
        fast_target="cpu_fast_test",
        full_targets=[
            "cpu_test",
            "cpu_integer_test",
            "cpu_multi_bit_test",
            "cpu_wasm_test",
            "csprng_randomness_testing",
        ],
    )


def test_push_without_label_posts_fast_trigger(trigger_config):
    actions = decide(CodePush(PR), frozenset(), trigger_config)
    assert actions == [PostComment(FAST, allow_repeats=True)]


def test_push_with_label_removes_it_before_fast_trigger(trigger_config):
    actions = decide(CodePush(PR), frozenset({"approved", "bug"}), trigger_config)
    assert actions == [RemoveLabel("approved"), PostComment(FAST)]


def test_first_approval_adds_label_and_posts_full_trigger(trigger_config):
    event = ReviewSubmitted(PR, ReviewOutcome.approved)
    actions = decide(event, frozenset({"bug"}), trigger_config)
    assert actions == [AddLabel("approved"), PostComment(FULL)]

    commands = [l for l in actions[1].body.splitlines() if l.startswith("@slab-ci")]
    assert len(commands) == 5


def test_repeated_approval_is_noop(trigger_config):
    event = ReviewSubmitted(PR, ReviewOutcome.approved)
    assert decide(event, frozenset({"approved"}), trigger_config) == []


@pytest.mark.parametrize(
    "outcome", [ReviewOutcome.changes_requested, ReviewOutcome.commented]
)
@pytest.mark.parametrize("labels", [frozenset(), frozenset({"approved"})])
def test_other_reviews_are_noop(trigger_config, outcome, labels):
    assert decide(ReviewSubmitted(PR, outcome), labels, trigger_config) == []


@pytest.mark.parametrize("labels", [frozenset(), frozenset({"approved"})])
def test_ignored_events_are_noop(trigger_config, labels):
    event = Ignored(PR, event="pull_request", action="labeled")
    assert decide(event, labels, trigger_config) == []


def test_decide_is_deterministic(trigger_config):
    events = [
        CodePush(PR, action="opened"),
        CodePush(PR, action="reopened"),
        ReviewSubmitted(PR, ReviewOutcome.approved),
        ReviewSubmitted(PR, ReviewOutcome.changes_requested),
        ReviewSubmitted(PR, ReviewOutcome.commented),
        Ignored(PR, event="pull_request_review", action="dismissed"),
    ]
    for event in events:
        for labels in (frozenset(), frozenset({"approved"}), frozenset({"x"})):
            first = decide(event, labels, trigger_config)
            assert decide(event, labels, trigger_config) == first
            assert decide(event, set(labels), trigger_config) == first


def test_custom_label_and_targets():
    config = TriggerConfig(
        approved_label="full-tests-done",
        bot="@ci",
        fast_target="quick",
        full_targets=["slow", "slower"],
    )
    event = ReviewSubmitted(PR, ReviewOutcome.approved)

    # the default marker name means nothing with a custom config
    actions = decide(event, frozenset({"approved"}), config)
    assert actions[0] == AddLabel("full-tests-done")
    assert actions[1].body.splitlines()[2:] == ["@ci slow", "@ci slower"]

    assert decide(CodePush(PR), frozenset({"full-tests-done"}), config) == [
        RemoveLabel("full-tests-done"),
        PostComment("@ci quick"),
    ]


def test_unknown_event_type_rejected(trigger_config):
    with pytest.raises(TypeError):
        decide(object(), frozenset(), trigger_config)
