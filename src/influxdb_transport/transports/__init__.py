"""Transport implementations."""

from .base import Transport
from .http import HTTPTransport, TokenAuth

__all__ = ["Transport", "HTTPTransport", "TokenAuth"]
