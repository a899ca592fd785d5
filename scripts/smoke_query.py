"""Local read-only smoke test for influxdb-transport.

Usage:
    py scripts/smoke_query.py
    py scripts/smoke_query.py --url "http://localhost:8086/?db=mydb" --version 1
    py scripts/smoke_query.py --version 2 --query "SHOW MEASUREMENTS"

Without --url the connection settings come from INFLUXDB_URL,
INFLUXDB_ENDPOINT_VERSION, INFLUXDB_TOKEN and INFLUXDB_PROXY (see .env).
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import sys
from typing import Optional

from influxdb_transport import (
    EndpointVersion,
    InfluxDBError,
    InfluxDBFactory,
    TransportConfig,
    config_from_env,
)

DEFAULT_STATEMENTS = {
    EndpointVersion.V1: "SHOW DATABASES",
    EndpointVersion.V2: "SHOW MEASUREMENTS",
}


def _config(url: Optional[str], version: Optional[str]) -> TransportConfig:
    if url:
        cfg = TransportConfig(url=url)
    else:
        cfg = config_from_env()
    if version:
        cfg = replace(cfg, endpoint_version=EndpointVersion.parse(version))
    return cfg


def run(cfg: TransportConfig, statement: Optional[str] = None) -> int:
    statement = statement or DEFAULT_STATEMENTS[cfg.endpoint_version]
    with InfluxDBFactory.from_config(cfg) as transport:
        print(f"transport: {transport!r}")
        print(f"query: {statement}")
        body = transport.query(statement)
    print(body)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a read-only query through influxdb-transport")
    parser.add_argument("--url", type=str, help="Connection URL, overrides INFLUXDB_URL")
    parser.add_argument("--version", type=str, choices=["1", "2", "v1", "v2"], help="Endpoint version")
    parser.add_argument("--query", type=str, help="Statement to run (default depends on version)")
    args = parser.parse_args(argv)
    try:
        return run(_config(args.url, args.version), args.query)
    except InfluxDBError as exc:
        print(f"Smoke test failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
