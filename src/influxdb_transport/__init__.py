"""influxdb_transport package."""

from .config import TransportConfig, config_from_env, load_env, resolve_config
from .exceptions import (
    ConfigurationError,
    InfluxDBError,
    MalformedURIError,
    RequestError,
    RequestFailedError,
    UnrecognizedBackendError,
    UnsupportedOperationError,
)
from .factory import InfluxDBFactory
from .models import (
    ConnectionDescriptor,
    EndpointVersion,
    HTTPResult,
    Options,
    Proxy,
    ProxyAuthentication,
    TransportErrorCode,
    TransportFailure,
)
from .transports import HTTPTransport, TokenAuth, Transport

__all__ = [
    "InfluxDBFactory",
    "TransportConfig",
    "config_from_env",
    "load_env",
    "resolve_config",
    "ConfigurationError",
    "InfluxDBError",
    "MalformedURIError",
    "RequestError",
    "RequestFailedError",
    "UnrecognizedBackendError",
    "UnsupportedOperationError",
    "ConnectionDescriptor",
    "EndpointVersion",
    "HTTPResult",
    "Options",
    "Proxy",
    "ProxyAuthentication",
    "TransportErrorCode",
    "TransportFailure",
    "HTTPTransport",
    "TokenAuth",
    "Transport",
]
