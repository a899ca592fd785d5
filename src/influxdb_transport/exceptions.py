"""Exceptions for influxdb_transport."""

class InfluxDBError(Exception):
    """Base exception for influxdb_transport."""


class ConfigurationError(InfluxDBError):
    """Connection URL or transport settings are invalid for the endpoint version."""


class MalformedURIError(InfluxDBError):
    """The connection URL has no scheme."""


class UnrecognizedBackendError(InfluxDBError):
    """No transport is registered for the URL scheme."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"Unrecognized backend {scheme}")
        self.scheme = scheme


class RequestError(InfluxDBError):
    """The request never produced an HTTP response (DNS, connect, TLS, timeout, ...)."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(f"Request error: ({int(code)}) {message or ''}")
        self.code = int(code)
        self.message = message or ""


class RequestFailedError(InfluxDBError):
    """The server answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(f"Request failed: ({status_code}) {reason or ''}")
        self.status_code = status_code
        self.reason = reason or ""


class UnsupportedOperationError(InfluxDBError):
    """Raised when an operation is not supported by the transport/version."""
