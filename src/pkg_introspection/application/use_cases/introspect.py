from __future__ import annotations

import json
from dataclasses import dataclass
from urllib.parse import urlencode

from ...config.settings import FilterConfig
from ...domain.constants import FORM_CONTENT_TYPE, HTTP_200_OK, HeaderName
from ...domain.errors import ClientError, InactiveToken, NonParsableIntrospectionBody, Unexpected
from ...domain.exceptions import FilterFailure, TransportError
from ...domain.ports import IntrospectionTransport
from ...domain.value_objects import IntrospectionRequest, IntrospectionResponse


def build_introspection_request(token: str, config: FilterConfig) -> IntrospectionRequest:
    """
    Build the form-encoded POST for the introspection endpoint.

    The configured `authorization` value authenticates *this* service to
    the endpoint and is sent verbatim.

    Raises:
        FilterFailure(Unexpected) when the token cannot be form-encoded.
    """
    try:
        body = urlencode([("token", token)]).encode("ascii")
    except (UnicodeError, TypeError) as exc:
        raise FilterFailure(Unexpected()) from exc

    headers = (
        (HeaderName.CONTENT_TYPE.value, FORM_CONTENT_TYPE),
        (HeaderName.AUTHORIZATION.value, config.authorization),
    )
    return IntrospectionRequest(
        upstream=config.upstream,
        host=config.host,
        path=config.path,
        headers=headers,
        body=body,
    )


class _JsonObject(dict):
    """Decoded JSON object that remembers keys seen more than once."""

    def __init__(self, pairs) -> None:
        super().__init__()
        self.duplicates = set()
        for key, value in pairs:
            if key in self:
                self.duplicates.add(key)
            self[key] = value


def decode_introspection_body(body: bytes) -> IntrospectionResponse:
    """
    The body must be UTF-8 JSON; a field read by the filter may appear
    only once.

    Raises:
        FilterFailure(NonParsableIntrospectionBody) on invalid JSON, a
        document without a boolean `active`, or one nested too deeply to
        decode.
    """
    try:
        data = json.loads(body.decode("utf-8"), object_pairs_hook=_JsonObject)
        if isinstance(data, _JsonObject):
            repeated = sorted(data.duplicates & set(IntrospectionResponse.FIELDS))
            if repeated:
                raise ValueError(f"duplicate field `{repeated[0]}`")
        return IntrospectionResponse.from_mapping(data)
    except (ValueError, RecursionError) as exc:
        raise FilterFailure(NonParsableIntrospectionBody(str(exc))) from exc


@dataclass(slots=True)
class IntrospectTokenUseCase:
    """
    Application use case:
    - Build the introspection call for a token
    - Send it through the IntrospectionTransport port
    - Decode a 200 answer into an IntrospectionResponse

    Any status other than 200 is read as "token not usable" and the body
    is not looked at.
    """

    transport: IntrospectionTransport
    config: FilterConfig

    async def execute(self, token: str) -> IntrospectionResponse:
        """
        Raises:
            FilterFailure carrying Unexpected, ClientError, InactiveToken
            or NonParsableIntrospectionBody
        """
        request = build_introspection_request(token, self.config)

        try:
            response = await self.transport.send(request)
        except TransportError as exc:
            raise FilterFailure(ClientError(str(exc))) from exc
        except Exception as exc:  # noqa: BLE001
            # Transports outside this package may raise their own errors
            raise FilterFailure(ClientError(f"{type(exc).__name__}: {exc}")) from exc

        if response.status_code != HTTP_200_OK:
            raise FilterFailure(InactiveToken())

        return decode_introspection_body(response.body)
