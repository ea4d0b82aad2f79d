import aiocache
from gidgethub import aiohttp as gh_aiohttp
from gidgethub.apps import get_installation_access_token
from sanic.log import logger

from cigate import config as app_config
from cigate.github.api import API, TransientPlatformError, platform_errors
from cigate.metric import record_api_call


@aiocache.cached(
    ttl=app_config.ACCESS_TOKEN_TTL, key_builder=lambda fn, gh, id: str(id)
)
async def get_access_token(gh: gh_aiohttp.GitHubAPI, installation_id: int) -> str:
    logger.debug("Getting NEW installation access token for %d", installation_id)
    record_api_call("installation_token")
    with platform_errors(f"installation token for {installation_id}"):
        access_token_response = await get_installation_access_token(
            gh,
            installation_id=installation_id,
            app_id=app_config.GITHUB_APP_ID,
            private_key=app_config.GITHUB_PRIVATE_KEY,
        )

    token = access_token_response["token"]
    return token


__all__ = ["API", "TransientPlatformError", "get_access_token", "platform_errors"]
