from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from ..domain.constants import DEFAULT_TOKEN_HEADER, DEFAULT_TOKEN_PREFIX
from ..domain.exceptions import ConfigurationError

REQUIRED_FIELDS = ("upstream", "host", "path", "authorization")


@dataclass(frozen=True, slots=True)
class TokenExtractorConfig:
    """
    Where the token lives in the inbound request.

    `prefix` is stripped from the header value (case-insensitive); an empty
    prefix takes the whole header value as the token.
    """
    header: str = DEFAULT_TOKEN_HEADER
    prefix: str = DEFAULT_TOKEN_PREFIX

    @classmethod
    def from_value(cls, raw: Any) -> TokenExtractorConfig:
        """
        Accepts an object `{"header": ..., "prefix": ...}`, a plain header
        name, or None for the defaults.
        """
        if raw is None:
            return cls()
        if isinstance(raw, str):
            if not raw.strip():
                raise ConfigurationError("token_extractor header name must not be empty")
            return cls(header=raw.strip())
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"token_extractor must be an object or a header name, got {type(raw).__name__}"
            )

        header = raw.get("header", DEFAULT_TOKEN_HEADER)
        prefix = raw.get("prefix", DEFAULT_TOKEN_PREFIX)
        if not isinstance(header, str) or not header.strip():
            raise ConfigurationError("token_extractor.header must be a non-empty string")
        if prefix is None:
            prefix = ""
        if not isinstance(prefix, str):
            raise ConfigurationError("token_extractor.prefix must be a string")
        return cls(header=header.strip(), prefix=prefix)


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """
    Immutable filter configuration, loaded once and shared by every
    request evaluation.

    Host code decides where the bytes come from (env, config file, etc.).
    """
    upstream: str
    host: str
    path: str
    authorization: str
    token_extractor: TokenExtractorConfig = field(default_factory=TokenExtractorConfig)

    # Transport-level only; None keeps the HTTP client's default
    timeout_seconds: Optional[float] = None


def _timeout(raw: Any) -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or raw <= 0:
        raise ConfigurationError(f"timeout_seconds must be a positive number, got {raw!r}")
    return float(raw)


def load_config(raw: bytes | str) -> FilterConfig:
    """
    Parse the JSON configuration document.

    Raises:
        ConfigurationError on malformed JSON, missing or mistyped fields.
    """
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Configuration is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a JSON object")

    missing = [name for name in REQUIRED_FIELDS if not isinstance(data.get(name), str)]
    if missing:
        raise ConfigurationError(f"Missing filter settings: {', '.join(missing)}")

    if not data["upstream"].strip():
        raise ConfigurationError("upstream must not be empty")

    return FilterConfig(
        upstream=data["upstream"].strip(),
        host=data["host"],
        path=data["path"],
        authorization=data["authorization"],
        token_extractor=TokenExtractorConfig.from_value(data.get("token_extractor")),
        timeout_seconds=_timeout(data.get("timeout_seconds")),
    )
