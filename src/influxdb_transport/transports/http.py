"""HTTP transport for InfluxDB v1 and v2 endpoints."""

from __future__ import annotations

import http.client
import socket
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote, urlsplit, urlunsplit

import requests
from requests.auth import AuthBase, HTTPBasicAuth

from ..exceptions import (
    ConfigurationError,
    RequestError,
    RequestFailedError,
    UnsupportedOperationError,
)
from ..models import (
    DEFAULT_TIMEOUT,
    EndpointVersion,
    HTTPResult,
    Proxy,
    TransportErrorCode,
    TransportFailure,
)
from ..parameters import build_parameters, build_query_parameters, encode_parameters
from ..url import parse_descriptor, redact, validate_descriptor
from .base import Transport

# Subclasses before their bases: ProxyError and SSLError are ConnectionErrors,
# ConnectTimeout is both a ConnectionError and a Timeout.
_ERROR_CODES: Tuple[Tuple[type, TransportErrorCode], ...] = (
    (requests.exceptions.ProxyError, TransportErrorCode.PROXY_RESOLUTION_FAILURE),
    (requests.exceptions.SSLError, TransportErrorCode.SSL_CONNECT_ERROR),
    (requests.exceptions.Timeout, TransportErrorCode.OPERATION_TIMEDOUT),
    (requests.exceptions.ConnectionError, TransportErrorCode.CONNECTION_FAILURE),
    (requests.exceptions.TooManyRedirects, TransportErrorCode.TOO_MANY_REDIRECTS),
    (
        (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ),
        TransportErrorCode.INVALID_URL_FORMAT,
    ),
    (
        (requests.exceptions.ChunkedEncodingError, requests.exceptions.ContentDecodingError),
        TransportErrorCode.NETWORK_RECEIVE_ERROR,
    ),
)


# Checked along the cause chain of a ConnectionError; the first match wins.
# RemoteDisconnected is a ConnectionResetError, so it is listed first.
_CONNECTION_CAUSES: Tuple[Tuple[type, TransportErrorCode], ...] = (
    (socket.gaierror, TransportErrorCode.HOST_RESOLUTION_FAILURE),
    (http.client.RemoteDisconnected, TransportErrorCode.EMPTY_RESPONSE),
    (BrokenPipeError, TransportErrorCode.NETWORK_SEND_FAILURE),
)


class TokenAuth(AuthBase):
    """Sets ``Authorization: Token <token>`` on every prepared request."""

    def __init__(self, token: str) -> None:
        self.token = token

    def __call__(self, request):
        request.headers["Authorization"] = f"Token {self.token}"
        return request

    def __eq__(self, other) -> bool:
        return isinstance(other, TokenAuth) and other.token == self.token


@dataclass(frozen=True)
class HTTPRequest:
    """One fully composed call; built fresh for every operation."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


class HTTPTransport(Transport):
    """Talks to the ``/query`` and ``/write`` endpoints of an InfluxDB server.

    ``url`` carries the addressing parameters: ``db`` and optional ``rp`` for
    v1, ``org`` and ``bucket`` for v2. A URL that does not fit ``version``
    raises ConfigurationError here, before any request is made. So does a URL
    with user-info; use set_basic_authentication or InfluxDBFactory, which
    turns it into basic auth.
    """

    def __init__(
        self,
        url: str,
        version: Union[EndpointVersion, int, str] = EndpointVersion.V1,
        timeout: float = DEFAULT_TIMEOUT,
        connect_timeout: float = DEFAULT_TIMEOUT,
        session: Optional[object] = None,
    ) -> None:
        version = EndpointVersion.parse(version)
        if redact(url) != url:
            raise ConfigurationError("Credentials in the URL are not accepted; use set_basic_authentication")
        descriptor = parse_descriptor(url)
        validate_descriptor(descriptor, version)
        super().__init__(version=version, descriptor=descriptor)
        self.timeout = timeout
        self.connect_timeout = connect_timeout
        self._session = session if session is not None else requests.Session()
        self._auth: Optional[AuthBase] = None
        self._proxies: Dict[str, str] = {}

    # -------------------- Operations --------------------

    def query(self, query: str) -> str:
        return self._read(query)

    def execute(self, cmd: str) -> str:
        return self._read(cmd)

    def send(self, lineprotocol: str) -> None:
        headers = {"Content-Type": "application/json"}
        headers.update(self.headers)
        request = HTTPRequest(
            method="POST",
            url=self._url("/write", build_parameters(self.descriptor, self.version)),
            headers=headers,
            body=lineprotocol.encode("utf-8"),
        )
        self._dispatch(request)

    def create_database(self) -> None:
        if self.version is not EndpointVersion.V1:
            raise UnsupportedOperationError("Database only supported for endpoint v1")
        statement = f"CREATE DATABASE {self.descriptor.database}"
        request = HTTPRequest(
            method="POST",
            url=self._url("/query", [("q", statement)]),
            headers=dict(self.headers),
        )
        self._dispatch(request)

    def _read(self, text: str) -> str:
        parameters = build_query_parameters(self.descriptor, self.version, text)
        request = HTTPRequest(method="GET", url=self._url("/query", parameters), headers=dict(self.headers))
        return self._dispatch(request).text

    # -------------------- Credentials and proxy --------------------

    def set_basic_authentication(self, user: str, password: str) -> None:
        if isinstance(self._auth, TokenAuth):
            raise ConfigurationError("API token already set; basic authentication cannot be combined with it")
        self._auth = HTTPBasicAuth(user, password)

    def set_api_token(self, token: str) -> None:
        if isinstance(self._auth, HTTPBasicAuth):
            raise ConfigurationError("Basic authentication already set; API token cannot be combined with it")
        self._auth = TokenAuth(token)

    def set_proxy(self, proxy: Proxy) -> None:
        proxy_url = _proxy_url(proxy)
        self._proxies = {"http": proxy_url, "https": proxy_url}
        self.proxy = proxy

    def close(self) -> None:
        if hasattr(self._session, "close"):
            self._session.close()

    # -------------------- Dispatch --------------------

    def _url(self, path: str, parameters: Sequence[Tuple[str, str]]) -> str:
        return f"{self.descriptor.endpoint_url}{path}?{encode_parameters(parameters)}"

    def _dispatch(self, request: HTTPRequest) -> HTTPResult:
        self.logger.debug("%s %s", request.method, redact(request.url))
        result = self._perform(request)
        if result.error is not None or not is_success(result.status_code):
            self.logger.warning(
                "%s %s failed: status=%s error=%s",
                request.method,
                redact(request.url),
                result.status_code,
                result.error,
            )
        check_response(result)
        return result

    def _perform(self, request: HTTPRequest) -> HTTPResult:
        kwargs = {
            "headers": dict(request.headers),
            "timeout": (self.connect_timeout, self.timeout),
        }
        if request.body is not None:
            kwargs["data"] = request.body
        if self._auth is not None:
            kwargs["auth"] = self._auth
        if self._proxies:
            kwargs["proxies"] = dict(self._proxies)
        try:
            response = self._session.request(request.method, request.url, **kwargs)
        except requests.RequestException as exc:
            return HTTPResult(error=to_failure(exc))
        return to_result(response)

    def __repr__(self) -> str:
        if isinstance(self._auth, HTTPBasicAuth):
            auth = "basic_auth"
        elif isinstance(self._auth, TokenAuth):
            auth = "api_token"
        else:
            auth = "anonymous"
        return f"HTTPTransport({self.version}, {redact(self.descriptor.endpoint_url)}, {auth})"


# -------------------- Response translation --------------------

def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def to_result(response: requests.Response) -> HTTPResult:
    return HTTPResult(
        status_code=response.status_code,
        reason=response.reason or "",
        text=response.text,
    )


def to_failure(exc: requests.RequestException) -> TransportFailure:
    """Map a requests exception onto a TransportErrorCode; the message may be empty."""
    for exc_types, code in _ERROR_CODES:
        if isinstance(exc, exc_types):
            if code is TransportErrorCode.CONNECTION_FAILURE:
                code = _connection_code(exc)
            return TransportFailure(code=code, message=str(exc))
    return TransportFailure(code=TransportErrorCode.UNKNOWN_ERROR, message=str(exc))


def _connection_code(exc: BaseException) -> TransportErrorCode:
    for cause in _causes(exc):
        for exc_type, code in _CONNECTION_CAUSES:
            if isinstance(cause, exc_type):
                return code
    return TransportErrorCode.CONNECTION_FAILURE


def _causes(exc: BaseException):
    """Yield ``exc`` and the exceptions wrapped in it, breadth first.

    requests and urllib3 wrap the socket error in ``args``, ``reason`` and
    ``__cause__`` depending on where the failure happened.
    """
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop(0)
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        linked = list(current.args) + [
            getattr(current, "reason", None),
            current.__cause__,
            current.__context__,
        ]
        pending.extend(item for item in linked if isinstance(item, BaseException))


def check_response(result: HTTPResult) -> None:
    """Raise RequestError or RequestFailedError unless ``result`` is a 2xx response."""
    if result.error is not None:
        raise RequestError(result.error.code, result.error.message)
    if not is_success(result.status_code):
        raise RequestFailedError(result.status_code, result.reason)


def _proxy_url(proxy: Proxy) -> str:
    url = proxy.url if "://" in proxy.url else f"http://{proxy.url}"
    if proxy.authentication is None:
        return url
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2]
    user = quote(proxy.authentication.user, safe="")
    password = quote(proxy.authentication.password, safe="")
    return urlunsplit((parts.scheme, f"{user}:{password}@{host}", parts.path, parts.query, parts.fragment))
