"""
Closed set of reasons a request can be rejected by the filter.

Every variant is a small frozen value. Callers branch on them with
``match`` and finish with ``assert_never`` so a new variant cannot be
added without every consumer handling it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Unexpected:
    """Internal or environmental fault (token encoding, system clock)."""


@dataclass(frozen=True, slots=True)
class NoToken:
    """The request carried no extractable token."""


@dataclass(frozen=True, slots=True)
class InactiveToken:
    """
    The introspection endpoint reported the token as inactive, or
    answered with anything other than 200.
    """


@dataclass(frozen=True, slots=True)
class ExpiredToken:
    """The `exp` claim lies in the past."""


@dataclass(frozen=True, slots=True)
class NotYetActive:
    """The `nbf` claim lies in the future."""


@dataclass(frozen=True, slots=True)
class ClientError:
    """The introspection call could not be completed."""
    detail: str


@dataclass(frozen=True, slots=True)
class NonParsableIntrospectionBody:
    """A 200 response whose body is not a valid introspection document."""
    detail: str


FilterError = (
    Unexpected
    | NoToken
    | InactiveToken
    | ExpiredToken
    | NotYetActive
    | ClientError
    | NonParsableIntrospectionBody
)
