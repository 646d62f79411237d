from __future__ import annotations

import logging
from typing import assert_never

from ...domain.constants import (
    BEARER_CHALLENGE,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HeaderName,
)
from ...domain.entities import (
    Allowed,
    Continue,
    EarlyResponse,
    FilterDecision,
    LogEntry,
    Rejected,
    ValidationOutcome,
)
from ...domain.errors import (
    ClientError,
    ExpiredToken,
    FilterError,
    InactiveToken,
    NonParsableIntrospectionBody,
    NoToken,
    NotYetActive,
    Unexpected,
)

UNAUTHORIZED = EarlyResponse(
    status_code=HTTP_401_UNAUTHORIZED,
    headers=((HeaderName.WWW_AUTHENTICATE.value, BEARER_CHALLENGE),),
)
SERVER_ERROR = EarlyResponse(status_code=HTTP_500_INTERNAL_SERVER_ERROR)


def _unauthorized(message: str) -> FilterDecision:
    return FilterDecision(UNAUTHORIZED, LogEntry(logging.DEBUG, message))


def _server_error(message: str) -> FilterDecision:
    return FilterDecision(SERVER_ERROR, LogEntry(logging.WARNING, message))


def map_error(error: FilterError) -> FilterDecision:
    """Client-side rejections are 401 at DEBUG, everything else 500 at WARNING."""
    match error:
        case Unexpected():
            return _server_error("Unexpected error occurred while processing the request.")
        case NoToken():
            return _unauthorized("No authorization token was provided.")
        case InactiveToken():
            return _unauthorized("Token is marked as inactive by the introspection endpoint.")
        case ExpiredToken():
            return _unauthorized("Expiration time on the token has been exceeded.")
        case NotYetActive():
            return _unauthorized(
                "Token is not yet valid, since time set in the nbf claim has not been reached."
            )
        case ClientError(detail=detail):
            return _server_error(
                f"Error sending the request to the introspection endpoint. {detail}."
            )
        case NonParsableIntrospectionBody(detail=detail):
            return _server_error(
                f"Error parsing the response from the introspection endpoint. {detail}."
            )
        case _:
            assert_never(error)


def map_outcome(outcome: ValidationOutcome) -> FilterDecision:
    match outcome:
        case Allowed():
            return FilterDecision(Continue())
        case Rejected(reason=reason):
            return map_error(reason)
        case _:
            assert_never(outcome)
