"""Query parameters per endpoint version."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

from .exceptions import ConfigurationError, UnsupportedOperationError
from .models import ConnectionDescriptor, EndpointVersion

Parameters = List[Tuple[str, str]]


def build_parameters(descriptor: ConnectionDescriptor, version: EndpointVersion) -> Parameters:
    """Return the addressing parameters for ``version`` in wire order.

    v1: ``db`` and, if set, ``rp``.
    v2: ``org`` and ``bucket``; database and retention policy are never sent.
    """
    if version is EndpointVersion.V1:
        parameters = [("db", _required(descriptor.database, "database", version))]
        if descriptor.retention_policy is not None:
            parameters.append(("rp", descriptor.retention_policy))
        return parameters

    if version is EndpointVersion.V2:
        return [
            ("org", _required(descriptor.organization, "organization", version)),
            ("bucket", _required(descriptor.bucket, "bucket", version)),
        ]

    raise UnsupportedOperationError("Not implemented for current endpoint version")


def build_query_parameters(
    descriptor: ConnectionDescriptor, version: EndpointVersion, text: str
) -> Parameters:
    parameters = build_parameters(descriptor, version)
    parameters.append(("q", text))
    return parameters


def encode_parameters(parameters: Sequence[Tuple[str, str]]) -> str:
    """Percent-encode ``parameters`` in order; spaces become ``%20`` and ``*`` stays literal."""
    return urlencode(list(parameters), quote_via=quote, safe="*")


def _required(value: Optional[str], name: str, version: EndpointVersion) -> str:
    if value is None:
        raise ConfigurationError(f"No {name} configured for endpoint {version}")
    return value
