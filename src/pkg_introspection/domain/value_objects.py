# src/pkg_introspection/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Tuple

from .constants import HeaderName

MAX_TIMESTAMP = 2**64 - 1


# --- Outbound introspection call -----------------------------------------


@dataclass(frozen=True, slots=True)
class IntrospectionRequest:
    """
    A fully built call to the introspection endpoint.

    `upstream` selects the network destination, `host` is sent as the
    Host header and `path` is appended to the upstream.
    """
    upstream: str
    host: str
    path: str
    headers: Tuple[Tuple[str, str], ...]
    body: bytes
    method: str = "POST"

    @property
    def url(self) -> str:
        base = self.upstream.rstrip("/")
        if not self.path:
            return base
        if self.path.startswith("/"):
            return base + self.path
        return f"{base}/{self.path}"

    def header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    @property
    def authorization(self) -> Optional[str]:
        return self.header(HeaderName.AUTHORIZATION.value)


@dataclass(frozen=True, slots=True)
class IntrospectionHttpResponse:
    """Raw answer from the transport: status code and undecoded body."""
    status_code: int
    body: bytes = b""


# --- Decoded introspection document --------------------------------------


def _optional_timestamp(data: Mapping[str, Any], name: str) -> Optional[int]:
    """
    Read an optional seconds-since-epoch claim.

    JSON `null` counts as absent. Anything other than a non-negative
    integer that fits in 64 bits is rejected.
    """
    value = data.get(name)
    if value is None:
        return None
    # bool is an int subclass, but `true` is not a timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid type for `{name}`: expected an unsigned integer, got {value!r}")
    if value < 0 or value > MAX_TIMESTAMP:
        raise ValueError(f"invalid value for `{name}`: expected an unsigned integer, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class IntrospectionResponse:
    """
    The parts of an RFC 7662 introspection response the filter acts on.

    Missing `exp` / `nbf` means "no constraint of that kind".
    """
    FIELDS: ClassVar[Tuple[str, ...]] = ("active", "exp", "nbf")

    active: bool
    exp: Optional[int] = None
    nbf: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Any) -> IntrospectionResponse:
        """
        Build from a decoded JSON document.

        Raises:
            ValueError when the document is not an object, `active` is
            missing or not a boolean, or a timestamp is malformed.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")

        if "active" not in data:
            raise ValueError("missing field `active`")
        active = data["active"]
        if not isinstance(active, bool):
            raise ValueError(f"invalid type for `active`: expected a boolean, got {active!r}")

        return cls(
            active=active,
            exp=_optional_timestamp(data, "exp"),
            nbf=_optional_timestamp(data, "nbf"),
        )
