"""Shared fixtures: mocked gateway / compute-unit transports and real duckdb files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import duckdb
import httpx
import pytest

from ario_mcp.ao_client import AOClient
from ario_mcp.config import AOConfig, GatewayConfig, ParquetConfig, TransactionConfig
from ario_mcp.gateway_client import GatewayClient
from ario_mcp.parquet_client import ParquetClient

from tests._helpers import CU_URL, GATEWAY_URL, RecordingTransport


@pytest.fixture
def gateway_factory() -> Callable[..., tuple[GatewayClient, RecordingTransport]]:
    def build(handler: Callable[[httpx.Request], httpx.Response]):
        transport = RecordingTransport(handler)
        return GatewayClient(GatewayConfig(url=GATEWAY_URL, timeout=5.0), transport=transport), transport

    return build


@pytest.fixture
def ao_factory() -> Callable[..., tuple[AOClient, RecordingTransport]]:
    def build(reply: Callable[[httpx.Request], Any] | dict[str, Any]):
        def handler(request: httpx.Request) -> httpx.Response:
            body = reply(request) if callable(reply) else reply
            return httpx.Response(200, json=body)

        transport = RecordingTransport(handler)
        return AOClient(AOConfig(cu_url=CU_URL, timeout=5.0), transport=transport), transport

    return build


@pytest.fixture
def size_checked() -> TransactionConfig:
    return TransactionConfig()


@pytest.fixture
def parquet_dir(tmp_path: Path) -> Path:
    """Ten tag rows written to a real parquet file by duckdb."""
    directory = tmp_path / "tags"
    directory.mkdir()
    target = directory / "part-0.parquet"
    con = duckdb.connect()
    try:
        con.execute(
            "COPY (SELECT range::BIGINT AS height, "
            "'App-Name' AS tag_name, "
            "'app-' || range::VARCHAR AS tag_value "
            f"FROM range(10)) TO '{target}' (FORMAT PARQUET)"
        )
    finally:
        con.close()
    return directory


@pytest.fixture
def parquet_client(parquet_dir: Path) -> ParquetClient:
    return ParquetClient(ParquetConfig(directory=str(parquet_dir)))
