from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING, TypedDict

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from logovote.config import config
from logovote.infrastructure.context import AppContext

from . import exceptions, router

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from contextlib import AbstractAsyncContextManager

    from logovote.infrastructure.context import UseCases

sentry_sdk.init(
    config.sentry.dsn,
    environment=config.sentry.environment,
    release=f"logovote@{config.app_version}",
)


class State(TypedDict):
    usecases: UseCases


class Lifespan:
    """Opens storages and loads friendly names before the app starts serving."""

    __slots__ = ["ctx"]

    def __init__(self):
        self.ctx = AppContext(config)

    @contextlib.asynccontextmanager
    async def __call__(self, app: FastAPI) -> AsyncIterator[State]:
        async with self.ctx as ctx:
            yield {"usecases": ctx.usecases}


def create_app(
    *,
    lifespan: AbstractAsyncContextManager[State] | None = None,
) -> FastAPI:
    """Create a new app."""
    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        debug=config.app_debug,
        lifespan=lifespan or Lifespan(),  # type: ignore[arg-type]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allowed_origins,
        allow_methods=config.cors.allowed_methods,
        allow_headers=config.cors.allowed_headers,
    )
    app.add_exception_handler(
        exceptions.APIError, exceptions.api_error_exception_handler,
    )
    app.include_router(router)

    # lifespan creates the directory, so it can't be checked on mount
    uploads = StaticFiles(directory=config.storage.fs_location, check_dir=False)
    app.mount("/uploads", uploads, name="uploads")

    return app


app = create_app()
