from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

import httpx
from fastapi import FastAPI

from .middleware import IntrospectionMiddleware
from ..common.filter_factory import IntrospectionFilter, create_introspection_filter
from ...config.settings import FilterConfig, load_config
from ...domain.ports import Clock


def _close_on_shutdown(app: FastAPI, introspection_filter: IntrospectionFilter) -> None:
    """Run the app's own lifespan, then close the filter's HTTP client."""
    app_lifespan = app.router.lifespan_context

    @asynccontextmanager
    async def lifespan(app_: Any) -> AsyncIterator[Any]:
        try:
            async with app_lifespan(app_) as state:
                yield state
        finally:
            await introspection_filter.close()

    app.router.lifespan_context = lifespan


def install_introspection_filter(
    app: FastAPI,
    config: FilterConfig | bytes | str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    clock: Optional[Clock] = None,
) -> IntrospectionFilter:
    """
    High-level helper for FastAPI (or plain Starlette) apps:

    - Parses the configuration if given as raw JSON (fatal on error)
    - Builds the IntrospectionFilter with the default adapters
    - Registers IntrospectionMiddleware in front of every route and
      websocket
    - Closes the HTTP client it created when the app shuts down
      (a caller-supplied `client` is left open)
    """
    if not isinstance(config, FilterConfig):
        config = load_config(config)

    introspection_filter = create_introspection_filter(config, client=client, clock=clock)
    app.add_middleware(IntrospectionMiddleware, introspection_filter=introspection_filter)
    _close_on_shutdown(app, introspection_filter)
    return introspection_filter


__all__ = ["IntrospectionMiddleware", "install_introspection_filter"]


"""

from fastapi import FastAPI
from pkg_introspection.config.env import config_from_env
from pkg_introspection.integrations.fastapi import install_introspection_filter

app = FastAPI()
install_introspection_filter(app, config_from_env())


"""
