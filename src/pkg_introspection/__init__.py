"""
pkg_introspection

OAuth2 token introspection gatekeeper: asks an RFC 7662 endpoint whether
the bearer token of each inbound request is valid, then lets the request
continue or answers it early with 401 / 500. Framework-agnostic core with
a Starlette / FastAPI middleware integration.
"""

__version__ = "0.1.0"

from .domain.entities import (
    Allowed,
    Rejected,
    ValidationOutcome,
    Continue,
    EarlyResponse,
    FilterDecision,
    LogEntry,
)
from .domain.errors import (
    FilterError,
    Unexpected,
    NoToken,
    InactiveToken,
    ExpiredToken,
    NotYetActive,
    ClientError,
    NonParsableIntrospectionBody,
)
from .domain.exceptions import ConfigurationError, TransportError
from .domain.value_objects import (
    IntrospectionRequest,
    IntrospectionHttpResponse,
    IntrospectionResponse,
)
from .domain.ports import TokenExtractor, IntrospectionTransport, Clock
from .config.settings import FilterConfig, TokenExtractorConfig, load_config
from .config.env import config_from_env

from .application.use_cases.introspect import (
    IntrospectTokenUseCase,
    build_introspection_request,
    decode_introspection_body,
)
from .application.use_cases.validate import ValidateRequestUseCase
from .application.use_cases.outcome import map_outcome, map_error

from .adapters.headers.token_extractor import HeaderTokenExtractor
from .adapters.introspection.httpx_transport import HttpxIntrospectionTransport

from .integrations.common.filter_factory import (
    IntrospectionFilter,
    create_introspection_filter,
    create_filter_from_bytes,
)

__all__ = [
    "__version__",
    # outcomes
    "Allowed",
    "Rejected",
    "ValidationOutcome",
    "Continue",
    "EarlyResponse",
    "FilterDecision",
    "LogEntry",
    # rejection reasons
    "FilterError",
    "Unexpected",
    "NoToken",
    "InactiveToken",
    "ExpiredToken",
    "NotYetActive",
    "ClientError",
    "NonParsableIntrospectionBody",
    # exceptions
    "ConfigurationError",
    "TransportError",
    # values & ports
    "IntrospectionRequest",
    "IntrospectionHttpResponse",
    "IntrospectionResponse",
    "TokenExtractor",
    "IntrospectionTransport",
    "Clock",
    # configuration
    "FilterConfig",
    "TokenExtractorConfig",
    "load_config",
    "config_from_env",
    # use cases
    "IntrospectTokenUseCase",
    "ValidateRequestUseCase",
    "build_introspection_request",
    "decode_introspection_body",
    "map_outcome",
    "map_error",
    # adapters
    "HeaderTokenExtractor",
    "HttpxIntrospectionTransport",
    # facade
    "IntrospectionFilter",
    "create_introspection_filter",
    "create_filter_from_bytes",
]
