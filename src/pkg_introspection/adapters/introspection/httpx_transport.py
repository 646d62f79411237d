from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ...domain.constants import HeaderName
from ...domain.exceptions import TransportError
from ...domain.ports import IntrospectionTransport
from ...domain.value_objects import IntrospectionHttpResponse, IntrospectionRequest


class HttpxIntrospectionTransport(IntrospectionTransport):
    """
    Adapter implementing IntrospectionTransport port on httpx.AsyncClient.

    Infrastructure layer:
    - Knows how to reach the upstream and set the virtual host.
    - Knows which httpx failures mean "no response was obtained".

    The client is shared by all requests; it is closed by `close()` only
    when this transport created it.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._owns_client = client is None
        if client is None:
            kwargs: Dict[str, Any] = {}
            if timeout_seconds is not None:
                kwargs["timeout"] = timeout_seconds
            client = httpx.AsyncClient(**kwargs)
        self._client = client

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    async def send(self, request: IntrospectionRequest) -> IntrospectionHttpResponse:
        """
        Raises:
            TransportError
        """
        headers = list(request.headers)
        if request.host:
            headers.append((HeaderName.HOST.value, request.host))

        try:
            resp = await self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        return IntrospectionHttpResponse(status_code=resp.status_code, body=resp.content)
