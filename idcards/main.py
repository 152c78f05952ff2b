from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .config import settings
from .errors import InvalidTransition
from .routers import admin, auth, main, public
from .routers.public import public_context, render_registration
from .services.api_client import IdCardApiClient
from .state import ClientStateStore
from .templating import render_template

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")

log = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("Using ID-card API at %s", settings.API_URL)
    yield
    await app.state.api.aclose()


def create_app(api: Optional[IdCardApiClient] = None) -> FastAPI:
    configure_logging()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.api = api or IdCardApiClient(settings.API_URL, timeout=settings.API_TIMEOUT)
    app.state.clients = ClientStateStore(ttl=settings.CLIENT_STATE_TTL)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        same_site=settings.SESSION_COOKIE_SAMESITE,
        https_only=settings.SESSION_COOKIE_SECURE,
    )

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.include_router(main.router)
    app.include_router(public.router)
    app.include_router(auth.router)
    app.include_router(admin.router)

    @app.exception_handler(InvalidTransition)
    async def stale_registration_action(request: Request, exc: InvalidTransition):
        # e.g. a double-clicked confirm; show the form as it stands now
        log.warning("Ignored registration action %s: %s", request.url.path, exc)
        client = request.app.state.clients.for_session(request.session)
        if request.url.path == request.app.url_path_for("register.preview"):
            # live preview posts swap only the #preview region
            return render_template(request, "public/_preview.html", public_context(request, client))
        return render_registration(request, client)

    return app


app = create_app()
