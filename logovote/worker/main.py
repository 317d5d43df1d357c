from __future__ import annotations

from contextlib import AsyncExitStack
from datetime import UTC
from typing import TYPE_CHECKING, TypedDict

from arq import cron
from arq.connections import RedisSettings

from logovote.config import config
from logovote.infrastructure.context import AppContext
from logovote.worker.jobs import namespaces

if TYPE_CHECKING:
    from logovote.infrastructure.context import UseCases

    class ARQContext(TypedDict):
        usecases: UseCases
        _stack: AsyncExitStack


async def startup(ctx: ARQContext):
    # the API process sees worker changes only through a shared cache
    if config.cache.backend_dsn == "mem://":
        raise RuntimeError(
            "Worker requires a redis cache backend, set CACHE__BACKEND_DSN"
        )

    app_ctx = AppContext(config)
    ctx["_stack"] = AsyncExitStack()
    await ctx["_stack"].enter_async_context(app_ctx)
    ctx["usecases"] = app_ctx.usecases


async def shutdown(ctx: ARQContext):
    await ctx["_stack"].aclose()


async def ping(ctx):
    return "pong"


class WorkerSettings:
    functions = [
        ping,
        namespaces.prune_namespaces,
    ]
    cron_jobs = [
        cron(namespaces.prune_namespaces, hour={0}, minute={0}),
    ]
    timezone = UTC
    on_startup = startup
    on_shutdown = shutdown
    redis_settings = RedisSettings.from_dsn(config.worker.broker_dsn)
