"""Data models for influxdb_transport."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Union

from .exceptions import ConfigurationError

DEFAULT_TIMEOUT = 10.0


class EndpointVersion(Enum):
    """InfluxDB API generation a transport talks to."""

    V1 = 1
    V2 = 2

    @classmethod
    def parse(cls, value: Union["EndpointVersion", int, str]) -> "EndpointVersion":
        """Accept an EndpointVersion, 1/2 or "1"/"v1"/"V2" style strings."""
        if isinstance(value, cls):
            return value
        raw = None
        if isinstance(value, int) and not isinstance(value, bool):
            raw = value
        elif isinstance(value, str):
            text = value.strip().lower()
            if text.startswith("v"):
                text = text[1:]
            if text.isdecimal():
                raw = int(text)
        try:
            return cls(raw)
        except ValueError:
            raise ConfigurationError(f"Unsupported endpoint version: {value!r}") from None

    def __str__(self) -> str:
        return f"v{self.value}"


class TransportErrorCode(IntEnum):
    """Numeric codes carried by RequestError."""

    CONNECTION_FAILURE = 1
    EMPTY_RESPONSE = 2
    HOST_RESOLUTION_FAILURE = 3
    INVALID_URL_FORMAT = 5
    NETWORK_RECEIVE_ERROR = 6
    NETWORK_SEND_FAILURE = 7
    OPERATION_TIMEDOUT = 8
    PROXY_RESOLUTION_FAILURE = 9
    SSL_CONNECT_ERROR = 10
    TOO_MANY_REDIRECTS = 11
    UNKNOWN_ERROR = 1000


@dataclass(frozen=True)
class ConnectionDescriptor:
    """Endpoint and addressing parameters parsed from a connection URL.

    ``None`` means the parameter was not in the URL at all, ``""`` means it
    was given without a value.
    """

    endpoint_url: str
    database: Optional[str] = None
    retention_policy: Optional[str] = None
    bucket: Optional[str] = None
    organization: Optional[str] = None


@dataclass(frozen=True)
class ProxyAuthentication:
    user: str
    password: str


@dataclass(frozen=True)
class Proxy:
    """Forward proxy used for both http and https traffic."""

    url: str
    authentication: Optional[ProxyAuthentication] = None


@dataclass(frozen=True)
class Options:
    """Settings layered onto a transport by InfluxDBFactory.get_with_options."""

    endpoint_version: Optional[EndpointVersion] = None
    proxy: Optional[Proxy] = None
    api_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class TransportFailure:
    """Transport-level error reported instead of an HTTP response."""

    code: int
    message: str = ""


@dataclass(frozen=True)
class HTTPResult:
    """Outcome of a single HTTP call."""

    status_code: int = 0
    reason: str = ""
    text: str = ""
    error: Optional[TransportFailure] = None
