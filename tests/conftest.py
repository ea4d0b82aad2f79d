from typing import Dict, List, Set

import pytest

from cigate.github.api import TransientPlatformError
from cigate.github.model import Comment, Label

REPO_URL = "https://api.github.com/repos/org/repo"


class FakePlatform:
    """In-memory stand-in for ``cigate.github.api.API`` holding one repo's issues."""

    def __init__(self, labels: Dict[int, Set[str]] | None = None):
        self.labels: Dict[int, Set[str]] = {
            k: set(v) for k, v in (labels or {}).items()
        }
        self.comments: Dict[int, List[str]] = {}
        self.calls: List[str] = []
        self.fail_on: Set[str] = set()
        self.call_count = 0

    def _call(self, name: str) -> None:
        self.call_count += 1
        self.calls.append(name)
        if name in self.fail_on:
            raise TransientPlatformError(f"{name} failed")

    async def get_labels(self, repo_url: str, number: int) -> List[Label]:
        self._call("get_labels")
        return [Label(name=n) for n in sorted(self.labels.get(number, set()))]

    async def add_labels(self, repo_url, number, names):
        self._call("add_labels")
        self.labels.setdefault(number, set()).update(names)
        return [Label(name=n) for n in sorted(self.labels[number])]

    async def remove_label(self, repo_url, number, name) -> bool:
        self._call("remove_label")
        labels = self.labels.setdefault(number, set())
        if name not in labels:
            return False
        labels.remove(name)
        return True

    async def get_comments(self, repo_url, number):
        self._call("get_comments")
        for i, body in enumerate(self.comments.get(number, [])):
            yield Comment(id=i + 1, body=body)

    async def post_comment(self, repo_url, number, body) -> Comment:
        self._call("post_comment")
        comments = self.comments.setdefault(number, [])
        comments.append(body)
        return Comment(id=len(comments), body=body)


def make_payload(
    action: str = "synchronize",
    number: int = 7,
    labels=(),
    review_state: str | None = None,
    private: bool = False,
):
    payload = {
        "action": action,
        "installation": {"id": 99},
        "repository": {
            "id": 500,
            "name": "repo",
            "full_name": "org/repo",
            "url": REPO_URL,
            "html_url": "https://github.com/org/repo",
            "private": private,
        },
        "pull_request": {
            "id": 1000 + number,
            "number": number,
            "state": "open",
            "head": {"ref": "feature", "sha": "a" * 40},
            "labels": [{"name": name} for name in labels],
        },
    }
    if review_state is not None:
        payload["review"] = {"id": 1, "state": review_state, "commit_id": "a" * 40}
    return payload


@pytest.fixture
def platform():
    return FakePlatform()


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def platform_factory():
    return FakePlatform
