from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Mapping, Optional

import httpx

from ...adapters.headers.token_extractor import HeaderTokenExtractor
from ...adapters.introspection.httpx_transport import HttpxIntrospectionTransport
from ...application.use_cases.introspect import IntrospectTokenUseCase
from ...application.use_cases.outcome import map_outcome
from ...application.use_cases.validate import ValidateRequestUseCase
from ...config.settings import FilterConfig, load_config
from ...domain.entities import FilterDecision
from ...domain.ports import Clock, IntrospectionTransport, TokenExtractor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IntrospectionFilter:
    """
    Framework-agnostic request filter.

    Integrations (Starlette/FastAPI middleware, etc.) hand it the inbound
    headers and act on the returned FilterDecision.
    """

    validate_use_case: ValidateRequestUseCase
    transport: Optional[HttpxIntrospectionTransport] = None

    async def evaluate(self, headers: Mapping[str, str]) -> FilterDecision:
        """Headers -> FilterDecision, logging the rejection reason once."""
        outcome = await self.validate_use_case.execute(headers)
        decision = map_outcome(outcome)
        if decision.log is not None:
            logger.log(decision.log.level, "%s", decision.log.message)
        return decision

    async def close(self) -> None:
        if self.transport is not None:
            await self.transport.close()


def create_introspection_filter(
    config: FilterConfig,
    *,
    client: Optional[httpx.AsyncClient] = None,
    transport: Optional[IntrospectionTransport] = None,
    token_extractor: Optional[TokenExtractor] = None,
    clock: Optional[Clock] = None,
) -> IntrospectionFilter:
    """
    Wire the default adapters (header extractor, httpx transport) around
    the use cases. Any adapter can be swapped for another implementation
    of its port.
    """
    owned: Optional[HttpxIntrospectionTransport] = None
    if transport is None:
        owned = HttpxIntrospectionTransport(
            client=client,
            timeout_seconds=config.timeout_seconds,
        )
        transport = owned

    validate_use_case = ValidateRequestUseCase(
        token_extractor=token_extractor or HeaderTokenExtractor.from_config(config.token_extractor),
        introspect_use_case=IntrospectTokenUseCase(transport=transport, config=config),
        clock=clock or time.time,
    )

    return IntrospectionFilter(validate_use_case=validate_use_case, transport=owned)


def create_filter_from_bytes(raw: bytes | str, **kwargs) -> IntrospectionFilter:
    """
    Startup entrypoint: parse the configuration document, then build the
    filter. A ConfigurationError here is fatal and is not caught.
    """
    config = load_config(raw)
    logger.debug("Introspection filter configured for %s%s", config.upstream, config.path)
    return create_introspection_filter(config, **kwargs)
