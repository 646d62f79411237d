from __future__ import annotations

from typing import Any, Mapping, Protocol

from .value_objects import IntrospectionHttpResponse, IntrospectionRequest


class TokenExtractor(Protocol):
    """
    Port for pulling a candidate token out of inbound request headers.

    Implementations live in the adapters layer (e.g. header extractor).
    """

    def resolve(self, headers: Mapping[str, str]) -> Any:
        """
        Return the token string.

        Returning None (or any non-string value) or raising means "no
        token"; the caller does not distinguish between them.
        """
        ...


class IntrospectionTransport(Protocol):
    """
    Port for sending the introspection call over HTTP.
    """

    async def send(self, request: IntrospectionRequest) -> IntrospectionHttpResponse:
        """
        Send the request and return its status code and raw body.

        Raises:
          - TransportError when no HTTP response was obtained
            (connection refused, DNS, timeout, ...)
        """
        ...


class Clock(Protocol):
    """Current wall-clock time as seconds since the UNIX epoch."""

    def __call__(self) -> float:
        ...
