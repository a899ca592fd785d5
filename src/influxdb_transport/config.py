"""Configuration loading for influxdb_transport."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
import os

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .models import DEFAULT_TIMEOUT, EndpointVersion, Options, Proxy, ProxyAuthentication


def load_env() -> None:
    """Load environment variables from a .env file if present."""
    load_dotenv()


def _get_float(value: Optional[str], default: float = DEFAULT_TIMEOUT) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"Invalid timeout value: {value!r}") from None


@dataclass(frozen=True)
class TransportConfig:
    url: str
    endpoint_version: EndpointVersion = EndpointVersion.V1
    api_token: Optional[str] = None
    proxy_url: Optional[str] = None
    proxy_user: Optional[str] = None
    proxy_password: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = DEFAULT_TIMEOUT

    def to_options(self) -> Options:
        proxy = None
        if self.proxy_url:
            auth = None
            if self.proxy_user:
                auth = ProxyAuthentication(user=self.proxy_user, password=self.proxy_password or "")
            proxy = Proxy(url=self.proxy_url, authentication=auth)
        return Options(
            endpoint_version=self.endpoint_version,
            proxy=proxy,
            api_token=self.api_token or None,
            timeout=self.timeout,
            connect_timeout=self.connect_timeout,
        )


def config_from_env() -> TransportConfig:
    load_env()
    url = os.getenv("INFLUXDB_URL", "")
    if not url:
        raise ConfigurationError("INFLUXDB_URL is required")
    return TransportConfig(
        url=url,
        endpoint_version=EndpointVersion.parse(os.getenv("INFLUXDB_ENDPOINT_VERSION", "v1")),
        api_token=os.getenv("INFLUXDB_TOKEN"),
        proxy_url=os.getenv("INFLUXDB_PROXY"),
        proxy_user=os.getenv("INFLUXDB_PROXY_USER"),
        proxy_password=os.getenv("INFLUXDB_PROXY_PASSWORD"),
        timeout=_get_float(os.getenv("INFLUXDB_TIMEOUT")),
        connect_timeout=_get_float(os.getenv("INFLUXDB_CONNECT_TIMEOUT")),
    )


def _dict_get(d: Mapping[str, Any], key: str, fallback: Any = None) -> Any:
    if key in d:
        return d[key]
    return fallback


def resolve_config(config: TransportConfig | Mapping[str, Any]) -> TransportConfig:
    if isinstance(config, TransportConfig):
        return config
    url = _dict_get(config, "url")
    if not url:
        raise ConfigurationError("url is required")
    return TransportConfig(
        url=url,
        endpoint_version=EndpointVersion.parse(
            _dict_get(config, "endpoint_version", _dict_get(config, "version", EndpointVersion.V1))
        ),
        api_token=_dict_get(config, "api_token", _dict_get(config, "token")),
        proxy_url=_dict_get(config, "proxy_url", _dict_get(config, "proxy")),
        proxy_user=_dict_get(config, "proxy_user"),
        proxy_password=_dict_get(config, "proxy_password"),
        timeout=float(_dict_get(config, "timeout", DEFAULT_TIMEOUT)),
        connect_timeout=float(_dict_get(config, "connect_timeout", DEFAULT_TIMEOUT)),
    )
