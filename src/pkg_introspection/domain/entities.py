from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import FilterError


# --- Validation outcome ----------------------------------------------------


@dataclass(frozen=True, slots=True)
class Allowed:
    """The request may continue to the upstream unmodified."""


@dataclass(frozen=True, slots=True)
class Rejected:
    """The request must be answered early; `reason` says why."""
    reason: FilterError


ValidationOutcome = Allowed | Rejected


# --- What the host should do ----------------------------------------------


@dataclass(frozen=True, slots=True)
class Continue:
    pass


@dataclass(frozen=True, slots=True)
class EarlyResponse:
    """Terminal response with an empty body."""
    status_code: int
    headers: Tuple[Tuple[str, str], ...] = ()


FilterAction = Continue | EarlyResponse


@dataclass(frozen=True, slots=True)
class LogEntry:
    level: int
    message: str


@dataclass(frozen=True, slots=True)
class FilterDecision:
    """
    Aggregate handed back to the host: one action plus at most one log
    line.
    """
    action: FilterAction
    log: Optional[LogEntry] = None

    # --- Read-only shortcuts -------------------------------------------

    @property
    def allowed(self) -> bool:
        return isinstance(self.action, Continue)

    @property
    def status_code(self) -> Optional[int]:
        if isinstance(self.action, EarlyResponse):
            return self.action.status_code
        return None
