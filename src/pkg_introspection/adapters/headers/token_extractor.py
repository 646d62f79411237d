from typing import Mapping, Optional

from ...config.settings import TokenExtractorConfig
from ...domain.constants import DEFAULT_TOKEN_HEADER, DEFAULT_TOKEN_PREFIX
from ...domain.ports import TokenExtractor


class HeaderTokenExtractor(TokenExtractor):
    """
    Adapter implementing TokenExtractor port by reading a single header.

    With the defaults this reads `Authorization: Bearer <token>`.
    """

    def __init__(
        self,
        header: str = DEFAULT_TOKEN_HEADER,
        prefix: str = DEFAULT_TOKEN_PREFIX,
    ) -> None:
        self._header = header.lower()
        self._prefix = prefix

    @classmethod
    def from_config(cls, config: TokenExtractorConfig) -> "HeaderTokenExtractor":
        return cls(header=config.header, prefix=config.prefix)

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def resolve(self, headers: Mapping[str, str]) -> Optional[str]:
        """
        Return the token, or None when the header is missing, does not
        start with the prefix, or holds nothing after it.
        """
        value = self._lookup(headers)
        if value is None:
            return None

        if self._prefix:
            if value[: len(self._prefix)].lower() != self._prefix.lower():
                return None
            value = value[len(self._prefix):]

        token = value.strip()
        return token or None

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _lookup(self, headers: Mapping[str, str]) -> Optional[str]:
        # Header names are case-insensitive; plain dicts are not
        for name, value in headers.items():
            if name.lower() == self._header:
                return value
        return None
