# essaycircle/api/app.py
# -*- coding: utf-8 -*-
"""
Application FastAPI.

    app = create_app()                      # Settings.from_env()
    app = create_app(settings, services)    # tests : services injectés
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from essaycircle.api.routers import auth, essays, friendships, inspirations, messages, peer_reviews, profiles, users
from essaycircle.api.sessions import build_session_store
from essaycircle.config import Settings
from essaycircle.container import Services, build_services
from essaycircle.errors import AppError
from essaycircle.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s", request.method, request.url.path, exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(p) for p in err["loc"] if p != "body"), "message": err["msg"]}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"message": "Invalid data", "errors": errors})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Erreur inattendue sur %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Something went wrong"})


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None,
               session_store=None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    services = services or build_services(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        services.close()

    app = FastAPI(title="EssayCircle", lifespan=lifespan)
    app.state.settings = settings
    app.state.services = services
    app.state.sessions = session_store or build_session_store(settings)

    _register_error_handlers(app)

    for module in (auth, essays, profiles, users, friendships, messages, peer_reviews, inspirations):
        app.include_router(module.router)
    return app
