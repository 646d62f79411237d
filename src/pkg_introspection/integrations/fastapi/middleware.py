from __future__ import annotations

from typing import assert_never

from starlette import status
from starlette.datastructures import Headers
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send
from starlette.websockets import WebSocket

from ..common.filter_factory import IntrospectionFilter
from ...domain.entities import Continue, EarlyResponse

GATED_SCOPES = ("http", "websocket")


class IntrospectionMiddleware:
    """
    Gate every HTTP request and websocket handshake through the
    introspection filter.

    Allowed requests reach the app unmodified; rejected ones get an empty
    401 (with a Bearer challenge) or 500. A rejected handshake receives the
    same response when the server supports websocket denial responses, and
    is closed before accept otherwise.
    """

    def __init__(self, app: ASGIApp, introspection_filter: IntrospectionFilter) -> None:
        self.app = app
        self._filter = introspection_filter

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in GATED_SCOPES:
            await self.app(scope, receive, send)
            return

        decision = await self._filter.evaluate(Headers(scope=scope))

        match decision.action:
            case Continue():
                await self.app(scope, receive, send)
            case EarlyResponse(status_code=status_code, headers=headers):
                response = Response(status_code=status_code, headers=dict(headers))
                if scope["type"] == "websocket":
                    await self._deny_websocket(response, scope, receive, send)
                else:
                    await response(scope, receive, send)
            case _:
                assert_never(decision.action)

    async def _deny_websocket(self, response: Response, scope: Scope, receive: Receive, send: Send) -> None:
        websocket = WebSocket(scope, receive=receive, send=send)
        if "websocket.http.response" in (scope.get("extensions") or {}):
            await websocket.send_denial_response(response)
        else:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
