import asyncio
from contextlib import contextmanager
from typing import AsyncIterator, Iterable, List

import aiohttp
import gidgethub
from gidgethub import BadRequest
from gidgethub.abc import GitHubAPI
from sanic.log import logger

from cigate.github.model import Comment, Label
from cigate.metric import record_api_call


class TransientPlatformError(Exception):
    """GitHub could not be reached or rejected a request.

    Never retried here: the invoking job (webhook redelivery, workflow re-run)
    owns the retry policy.
    """


@contextmanager
def platform_errors(what: str):
    try:
        yield
    except TransientPlatformError:
        raise
    except (gidgethub.GitHubException, aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TransientPlatformError(f"{what} failed: {e!r}") from e


class API:
    gh: GitHubAPI

    call_count: int

    def __init__(self, gh: GitHubAPI, installation: int | None = None):
        self.gh = gh
        self.installation = installation
        self.call_count = 0

    def _count(self, url: str) -> None:
        self.call_count += 1
        record_api_call(url)

    async def get_labels(self, repo_url: str, number: int) -> List[Label]:
        url = f"{repo_url}/issues/{number}/labels"
        self._count(url)
        logger.debug("Get labels %s", url)
        with platform_errors(f"GET {url}"):
            return [Label.model_validate(item) async for item in self.gh.getiter(url)]

    async def add_labels(
        self, repo_url: str, number: int, names: Iterable[str]
    ) -> List[Label]:
        url = f"{repo_url}/issues/{number}/labels"
        self._count(url)
        names = list(names)
        logger.debug("Adding labels %s to %s", names, url)
        with platform_errors(f"POST {url}"):
            data = await self.gh.post(url, data={"labels": names})
        return [Label.model_validate(item) for item in data or []]

    async def remove_label(self, repo_url: str, number: int, name: str) -> bool:
        """
        Remove ``name`` from the issue. Returns ``False`` when the label was
        not attached, which GitHub reports as a 404.
        """
        url = f"{repo_url}/issues/{number}/labels"
        self._count(url)
        logger.debug("Removing label %s from %s", name, url)
        with platform_errors(f"DELETE {url}/{name}"):
            try:
                await self.gh.delete(url + "/{name}", url_vars={"name": name})
            except BadRequest as e:
                if e.status_code == 404:
                    logger.debug("Label %s was not attached to %s", name, url)
                    return False
                raise e
        return True

    async def get_comments(self, repo_url: str, number: int) -> AsyncIterator[Comment]:
        url = f"{repo_url}/issues/{number}/comments"
        self._count(url)
        logger.debug("Get comments %s", url)
        with platform_errors(f"GET {url}"):
            async for item in self.gh.getiter(url):
                yield Comment.model_validate(item)

    async def post_comment(self, repo_url: str, number: int, body: str) -> Comment:
        url = f"{repo_url}/issues/{number}/comments"
        self._count(url)
        logger.debug("Posting comment to %s", url)
        with platform_errors(f"POST {url}"):
            data = await self.gh.post(url, data={"body": body})
        return Comment.model_validate(data)
