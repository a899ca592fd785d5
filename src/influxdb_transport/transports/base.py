"""Abstract transport for influxdb_transport."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional
import logging

from ..exceptions import UnsupportedOperationError
from ..models import ConnectionDescriptor, EndpointVersion, Proxy


class Transport(ABC):
    """Issues query, write and administrative calls for one connection URL.

    Addressing is fixed at construction. Credentials and proxy may be set
    once before the first request. A transport is not safe to share between
    threads while requests are in flight.
    """

    def __init__(self, version: EndpointVersion, descriptor: ConnectionDescriptor) -> None:
        self.version = version
        self.descriptor = descriptor
        self.headers: Dict[str, str] = {}
        self.proxy: Optional[Proxy] = None
        self.logger = logging.getLogger(f"{__name__}.{version}")

    # -------------------- Resource management --------------------

    def close(self) -> None:
        """Release underlying connections."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    # -------------------- Data operations --------------------

    @abstractmethod
    def send(self, lineprotocol: str) -> None:
        """Write line-protocol text."""

    def query(self, query: str) -> str:
        raise UnsupportedOperationError("Queries are not supported by this transport")

    def execute(self, cmd: str) -> str:
        raise UnsupportedOperationError("Execution is not supported by this transport")

    # -------------------- Administration --------------------

    def create_database(self) -> None:
        raise UnsupportedOperationError("Creation of database is not supported by this transport")

    # -------------------- Credentials and proxy --------------------

    def set_basic_authentication(self, user: str, password: str) -> None:
        raise UnsupportedOperationError("Basic authentication is not supported by this transport")

    def set_api_token(self, token: str) -> None:
        raise UnsupportedOperationError("API token authentication is not supported by this transport")

    def set_proxy(self, proxy: Proxy) -> None:
        raise UnsupportedOperationError("Proxy is not supported by this transport")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.version}, {self.descriptor.endpoint_url})"
