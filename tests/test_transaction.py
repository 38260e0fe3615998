"""fetch-raw-transaction behaviour against a mocked gateway."""

from __future__ import annotations

import httpx
import pytest

from ario_mcp.adapters.transaction import fetch_raw_transaction
from ario_mcp.config import FETCH_MODE_RANGE, TransactionConfig
from ario_mcp.models import ResultKind

from tests._helpers import GATEWAY_URL, TX_ID


def raw_handler(content: bytes, content_type: str, declared: int | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "HEAD":
            size = len(content) if declared is None else declared
            return httpx.Response(
                200, headers={"Content-Length": str(size), "Content-Type": content_type}
            )
        return httpx.Response(200, content=content, headers={"Content-Type": content_type})

    return handler


@pytest.mark.asyncio
@pytest.mark.parametrize("tx_id", [None, "", "not-a-transaction", TX_ID + "x"])
async def test_invalid_ids_never_reach_the_gateway(gateway_factory, size_checked, tx_id) -> None:
    gateway, transport = gateway_factory(raw_handler(b"", "text/plain"))

    result = await fetch_raw_transaction(gateway, size_checked, txId=tx_id)

    assert result.kind is ResultKind.ERROR
    assert result.text in ("Error: Missing transaction ID", "Error: Invalid transaction ID format")
    assert transport.requests == []


@pytest.mark.asyncio
async def test_oversized_data_is_refused_after_head(gateway_factory, size_checked) -> None:
    gateway, transport = gateway_factory(raw_handler(b"", "text/plain", declared=10000))

    result = await fetch_raw_transaction(gateway, size_checked, txId=TX_ID)

    assert result.text == "Error: Transaction data is too large (10000 bytes, limit is 8KB)"
    assert [request.method for request in transport.requests] == ["HEAD"]
    assert str(transport.requests[0].url) == f"{GATEWAY_URL}/raw/{TX_ID}"


@pytest.mark.asyncio
async def test_text_content_is_returned_verbatim(gateway_factory, size_checked) -> None:
    gateway, transport = gateway_factory(raw_handler(b"hello world", "text/plain"))

    result = await fetch_raw_transaction(gateway, size_checked, txId=TX_ID)

    assert result.ok
    assert result.text == "Transaction data (11 bytes, text/plain): hello world"
    assert [request.method for request in transport.requests] == ["HEAD", "GET"]


@pytest.mark.asyncio
async def test_binary_content_is_base64_encoded(gateway_factory, size_checked) -> None:
    gateway, _ = gateway_factory(raw_handler(b"\x00\x01\x02", "application/octet-stream"))

    result = await fetch_raw_transaction(gateway, size_checked, txId=TX_ID)

    assert result.text == (
        "Transaction data (3 bytes, application/octet-stream): "
        "[Binary data encoded as base64]: AAEC"
    )


@pytest.mark.asyncio
async def test_json_content_counts_as_text(gateway_factory, size_checked) -> None:
    gateway, _ = gateway_factory(raw_handler(b'{"a": 1}', "application/json; charset=utf-8"))

    result = await fetch_raw_transaction(gateway, size_checked, txId=TX_ID)

    assert result.text.endswith(': {"a": 1}')


@pytest.mark.asyncio
async def test_gateway_status_is_reported(gateway_factory, size_checked) -> None:
    gateway, _ = gateway_factory(lambda request: httpx.Response(404))

    result = await fetch_raw_transaction(gateway, size_checked, txId=TX_ID)

    assert result.kind is ResultKind.ERROR
    assert result.text == "Error fetching transaction: 404 Not Found"


@pytest.mark.asyncio
async def test_range_mode_reads_only_the_prefix(gateway_factory) -> None:
    settings = TransactionConfig(fetch_mode=FETCH_MODE_RANGE, range_bytes=5)
    gateway, transport = gateway_factory(
        lambda request: httpx.Response(206, content=b"hello", headers={"Content-Type": "text/plain"})
    )

    result = await fetch_raw_transaction(gateway, settings, txId=TX_ID)

    assert result.text == "First 5 bytes of transaction data: hello"
    assert len(transport.requests) == 1
    assert transport.requests[0].method == "GET"
    assert transport.requests[0].headers["Range"] == "bytes=0-4"
