from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import FilterError


class ConfigurationError(Exception):
    """Raised when the filter configuration cannot be loaded."""
    pass


class TransportError(Exception):
    """Raised by transports when the introspection call cannot be completed."""
    pass


class FilterFailure(Exception):
    """
    Short-circuits the validation pipeline.

    Carries exactly one FilterError; the validation use case turns it into
    a Rejected outcome, so it never escapes to the host.
    """

    def __init__(self, error: FilterError) -> None:
        super().__init__(error)
        self.error = error
