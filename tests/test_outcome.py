import logging

import pytest

from pkg_introspection.application.use_cases.outcome import map_error, map_outcome
from pkg_introspection.domain.entities import Allowed, Continue, EarlyResponse, FilterDecision, Rejected
from pkg_introspection.domain.errors import (
    ClientError,
    ExpiredToken,
    InactiveToken,
    NonParsableIntrospectionBody,
    NoToken,
    NotYetActive,
    Unexpected,
)

CHALLENGE = (("WWW-Authenticate", 'Bearer realm="oauth2"'),)


def test_allowed_continues_without_log():
    assert map_outcome(Allowed()) == FilterDecision(Continue())


@pytest.mark.parametrize(
    "error, message",
    [
        (NoToken(), "No authorization token was provided."),
        (InactiveToken(), "Token is marked as inactive by the introspection endpoint."),
        (ExpiredToken(), "Expiration time on the token has been exceeded."),
        (
            NotYetActive(),
            "Token is not yet valid, since time set in the nbf claim has not been reached.",
        ),
    ],
)
def test_client_side_rejections_are_401_at_debug(error, message):
    decision = map_outcome(Rejected(error))

    assert decision.action == EarlyResponse(401, CHALLENGE)
    assert decision.log.level == logging.DEBUG
    assert decision.log.message == message


@pytest.mark.parametrize(
    "error, message",
    [
        (Unexpected(), "Unexpected error occurred while processing the request."),
        (
            ClientError("ConnectError: refused"),
            "Error sending the request to the introspection endpoint. ConnectError: refused.",
        ),
        (
            NonParsableIntrospectionBody("missing field `active`"),
            "Error parsing the response from the introspection endpoint. missing field `active`.",
        ),
    ],
)
def test_environmental_failures_are_500_at_warning(error, message):
    decision = map_error(error)

    assert decision.action == EarlyResponse(500)
    assert decision.action.headers == ()
    assert decision.log.level == logging.WARNING
    assert decision.log.message == message


def test_every_401_carries_the_same_challenge():
    actions = {
        map_error(error).action
        for error in (NoToken(), InactiveToken(), ExpiredToken(), NotYetActive())
    }
    assert actions == {EarlyResponse(401, CHALLENGE)}
