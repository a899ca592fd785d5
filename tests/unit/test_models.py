from __future__ import annotations

import pytest

from influxdb_transport.exceptions import ConfigurationError
from influxdb_transport.models import EndpointVersion, TransportErrorCode


def test_endpoint_version_parse_variants() -> None:
    assert EndpointVersion.parse(EndpointVersion.V2) is EndpointVersion.V2
    assert EndpointVersion.parse(1) is EndpointVersion.V1
    assert EndpointVersion.parse("2") is EndpointVersion.V2
    assert EndpointVersion.parse("v1") is EndpointVersion.V1
    assert EndpointVersion.parse(" V2 ") is EndpointVersion.V2


def test_endpoint_version_parse_rejects_unknown() -> None:
    with pytest.raises(ConfigurationError, match="Unsupported endpoint version"):
        EndpointVersion.parse("v3")
    with pytest.raises(ConfigurationError):
        EndpointVersion.parse(None)


def test_endpoint_version_str() -> None:
    assert str(EndpointVersion.V1) == "v1"
    assert str(EndpointVersion.V2) == "v2"


def test_transport_error_codes_are_ints() -> None:
    assert TransportErrorCode.NETWORK_SEND_FAILURE == 7
    assert int(TransportErrorCode.UNKNOWN_ERROR) == 1000


@pytest.mark.parametrize("value", [2.9, 1.0, True, False, "v1.5", "", b"1"])
def test_endpoint_version_parse_rejects_non_integer_values(value) -> None:
    with pytest.raises(ConfigurationError, match="Unsupported endpoint version"):
        EndpointVersion.parse(value)
