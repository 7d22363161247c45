"""HTTP entry point for the surprise service.

Slack posts slash commands as ``application/x-www-form-urlencoded``.  The
endpoint reads the raw form so that an empty field can be told apart from a
missing one, delegates to :class:`apps.surprise.SurpriseDispatcher` and maps
the dispatcher's exceptions onto status codes.

A token mismatch answers ``409 Conflict``, not 401/403; existing clients
expect that code.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from apps.surprise import SurpriseDispatcher
from apps.surprise.errors import MalformedRequest, ProviderError, Unauthorized
from lib.contracts.slack_message import SlackResponse
from lib.telemetry.logger import configure_logging

HEALTH_REPLY = "Service works!"
PROVIDER_FAILURE_REPLY = "Provider unavailable"


def create_app(dispatcher: Optional[SurpriseDispatcher] = None) -> FastAPI:
    """Build the FastAPI application around ``dispatcher``."""

    dispatcher = dispatcher or SurpriseDispatcher()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        dispatcher.close()

    app = FastAPI(title="surprise", lifespan=lifespan)
    app.state.dispatcher = dispatcher

    @app.exception_handler(MalformedRequest)
    async def malformed(request: Request, exc: MalformedRequest):
        return Response(status_code=400)

    @app.exception_handler(Unauthorized)
    async def unauthorized(request: Request, exc: Unauthorized):
        return Response(status_code=409)

    @app.exception_handler(ProviderError)
    async def provider_failed(request: Request, exc: ProviderError):
        return PlainTextResponse(PROVIDER_FAILURE_REPLY, status_code=502)

    @app.get("/", response_class=PlainTextResponse)
    def healthcheck():
        """Liveness probe."""

        return HEALTH_REPLY

    @app.post("/api")
    async def command(request: Request):
        """Answer a ``/surprise`` slash command."""

        form = await request.form()
        # providers block on network I/O
        reply = await run_in_threadpool(
            dispatcher.dispatch,
            form.get("token"),
            form.get("command"),
            form.get("text"),
        )
        if isinstance(reply, SlackResponse):
            return JSONResponse(reply.to_payload())
        return PlainTextResponse(reply)

    return app


configure_logging()
app = create_app()
