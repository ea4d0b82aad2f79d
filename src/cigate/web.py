import logging

from sanic import Sanic, response, Request
import aiohttp
import gidgethub
from gidgethub import sansio
from gidgethub import aiohttp as gh_aiohttp
from sanic.log import logger
import sanic.log
import cachetools
from prometheus_client import core
from prometheus_client.exposition import generate_latest

from cigate import config
from cigate.github import get_access_token
from cigate.github.api import API, TransientPlatformError
from cigate.handler import create_router
from cigate.logger import get_log_handlers
from cigate.metric import (
    request_counter,
    webhook_counter,
    webhook_skipped_counter,
    error_counter,
)
from cigate.trigger import MalformedEventError
from cigate.trigger.events import SUPPORTED_EVENTS


async def client_for_installation(app, installation_id):
    gh_pre = gh_aiohttp.GitHubAPI(app.ctx.aiohttp_session, __name__)

    token = await get_access_token(gh_pre, installation_id)

    return gh_aiohttp.GitHubAPI(
        app.ctx.aiohttp_session,
        __name__,
        oauth_token=token,
        cache=app.ctx.cache,
    )


async def process_github_event(app, event: sansio.Event) -> int:
    """Run one delivery through the router and map the outcome to a status code."""
    webhook_counter.labels(event=event.event).inc()

    if event.event not in SUPPORTED_EVENTS:
        webhook_skipped_counter.labels(event=event.event, reason="event").inc()
        return 200

    try:
        installation_id = event.data["installation"]["id"]
    except (KeyError, TypeError):
        error_counter.labels(context="malformed_event").inc()
        logger.warning("Dropping %s delivery without installation", event.event)
        return 200
    logger.debug("Installation id: %s", installation_id)

    try:
        api = await app.ctx.api_for_installation(installation_id)
        logger.debug("Dispatching event %s", event.event)
        await app.ctx.github_router.dispatch(event, api)
    except MalformedEventError as e:
        error_counter.labels(context="malformed_event").inc()
        logger.warning("Dropping malformed %s delivery: %s", event.event, e)
        return 200
    except TransientPlatformError:
        error_counter.labels(context="event_dispatch").inc()
        logger.error("Platform error when dispatching event", exc_info=True)
        return 502

    return 200


logging.basicConfig(
    format="%(asctime)s %(name)s %(levelname)s - %(message)s", level=logging.INFO
)


def create_app():

    app = Sanic("cigate")
    app.update_config(config)

    logging.getLogger().setLevel(config.OVERRIDE_LOGGING)

    sanic.log.logger.handlers = []

    for handler in get_log_handlers(sanic.log.logger):
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s - %(message)s")
        )

    app.ctx.cache = cachetools.LRUCache(maxsize=500)
    app.ctx.github_router = create_router()

    async def api_for_installation(installation_id: int) -> API:
        gh = await client_for_installation(app, installation_id)
        return API(gh, installation_id)

    app.ctx.api_for_installation = api_for_installation

    @app.listener("before_server_start")
    async def init(app, loop):
        logger.debug("Creating aiohttp session")
        app.ctx.aiohttp_session = aiohttp.ClientSession()

    @app.listener("after_server_stop")
    async def close(app, loop):
        await app.ctx.aiohttp_session.close()

    @app.on_request
    async def on_request(request: Request):
        if request.path == "/metrics":
            return
        request_counter.labels(path=request.path).inc()

    @app.get("/status")
    async def status(request):
        logger.debug("status check")
        return response.text("ok")

    @app.route("/webhook", methods=["POST"])
    async def github(request):
        logger.debug("Webhook received")

        try:
            event = sansio.Event.from_http(
                request.headers, request.body, secret=app.config.GITHUB_WEBHOOK_SECRET
            )
        except (gidgethub.ValidationFailure, gidgethub.BadRequest) as e:
            error_counter.labels(context="webhook_validation").inc()
            logger.warning("Rejecting webhook: %s", e)
            return response.text("invalid webhook", status=400)

        status = await process_github_event(app, event)
        return response.empty(status)

    @app.get("/metrics")
    async def metrics(request):
        data = generate_latest(core.REGISTRY)
        return response.raw(data)

    return app
