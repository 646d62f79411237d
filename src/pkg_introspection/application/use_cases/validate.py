from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Mapping

from .introspect import IntrospectTokenUseCase
from ...domain.entities import Allowed, Rejected, ValidationOutcome
from ...domain.errors import ExpiredToken, InactiveToken, NoToken, NotYetActive, Unexpected
from ...domain.exceptions import FilterFailure
from ...domain.ports import Clock, TokenExtractor


@dataclass(slots=True)
class ValidateRequestUseCase:
    """
    Application use case deciding whether a request may continue.

    Steps, stopping at the first failure:
      1) resolve the token from the request headers
      2) introspect it
      3) read the clock once, reject inactive tokens
      4) reject when now > exp
      5) reject when now < nbf

    Holds no per-request state; one instance serves concurrent requests.
    """

    token_extractor: TokenExtractor
    introspect_use_case: IntrospectTokenUseCase
    clock: Clock = time.time

    async def execute(self, headers: Mapping[str, str]) -> ValidationOutcome:
        try:
            await self._validate(headers)
        except FilterFailure as failure:
            return Rejected(failure.error)
        return Allowed()

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _validate(self, headers: Mapping[str, str]) -> None:
        token = self._resolve_token(headers)
        response = await self.introspect_use_case.execute(token)
        now = self._now()

        if not response.active:
            raise FilterFailure(InactiveToken())

        # A token expiring exactly now is still valid
        if response.exp is not None and now > response.exp:
            raise FilterFailure(ExpiredToken())

        # A token starting exactly now is already valid
        if response.nbf is not None and now < response.nbf:
            raise FilterFailure(NotYetActive())

    def _resolve_token(self, headers: Mapping[str, str]) -> str:
        try:
            value = self.token_extractor.resolve(headers)
        except Exception as exc:  # noqa: BLE001
            raise FilterFailure(NoToken()) from exc

        if not isinstance(value, str):
            raise FilterFailure(NoToken())
        return value

    def _now(self) -> int:
        try:
            seconds = self.clock()
        except Exception as exc:  # noqa: BLE001
            raise FilterFailure(Unexpected()) from exc

        if seconds < 0:
            # system clock is set before the epoch
            raise FilterFailure(Unexpected())
        return int(seconds)
