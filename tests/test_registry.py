"""Gateway registry and ArNS record listing through compute-unit dry-runs."""

from __future__ import annotations

import json

import httpx
import pytest

from ario_mcp.adapters.registry import get_arns_records, list_gateways
from ario_mcp.config import DEFAULT_ARIO_PROCESS_IDS
from ario_mcp.models import ResultKind

from tests._helpers import CU_URL, ao_error, ao_message, dry_run_tags

GATEWAYS_PAGE = {
    "items": [{"gatewayAddress": f"gw-{i}", "status": "joined"} for i in range(7)],
    "hasMore": True,
    "nextCursor": "gw-6",
    "limit": 7,
}

RECORDS_PAGE = {
    "items": [{"name": "ardrive", "type": "permabuy", "processId": "p" * 43}],
    "hasMore": False,
    "nextCursor": None,
    "sortBy": "name",
    "sortOrder": "asc",
}


@pytest.mark.asyncio
async def test_testnet_listing_is_capped_at_limit(ao_factory) -> None:
    ao, transport = ao_factory(ao_message(GATEWAYS_PAGE))

    result = await list_gateways(ao, network="testnet", limit=5)

    items = json.loads(result.text)
    assert isinstance(items, list)
    assert len(items) <= 5
    request = transport.requests[0]
    assert str(request.url).startswith(f"{CU_URL}/dry-run")
    assert request.url.params["process-id"] == DEFAULT_ARIO_PROCESS_IDS["testnet"]
    tags = dry_run_tags(request)
    assert tags["Action"] == "Paginated-Gateways"
    assert tags["Limit"] == "5"
    assert tags["Data-Protocol"] == "ao"


@pytest.mark.asyncio
async def test_listing_defaults_to_mainnet_and_100(ao_factory) -> None:
    ao, transport = ao_factory(ao_message(GATEWAYS_PAGE))

    await list_gateways(ao)

    request = transport.requests[0]
    assert request.url.params["process-id"] == DEFAULT_ARIO_PROCESS_IDS["mainnet"]
    assert dry_run_tags(request)["Limit"] == "100"


@pytest.mark.asyncio
async def test_unknown_network_is_rejected_before_any_call(ao_factory) -> None:
    ao, transport = ao_factory(ao_message(GATEWAYS_PAGE))

    result = await list_gateways(ao, network="moon")

    assert result.kind is ResultKind.ERROR
    assert result.text == "Error: Invalid network. Must be one of: mainnet, testnet, devnet"
    assert transport.requests == []


@pytest.mark.asyncio
async def test_arns_records_page_with_sorting(ao_factory) -> None:
    ao, transport = ao_factory(ao_message(RECORDS_PAGE))

    result = await get_arns_records(ao, cursor="ardrive", limit=10, sortBy="name", sortOrder="asc")

    assert json.loads(result.text) == RECORDS_PAGE
    tags = dry_run_tags(transport.requests[0])
    assert tags["Action"] == "Paginated-Records"
    assert tags["Cursor"] == "ardrive"
    assert tags["Limit"] == "10"
    assert tags["Sort-By"] == "name"
    assert tags["Sort-Order"] == "asc"


@pytest.mark.asyncio
async def test_arns_records_omits_unset_tags(ao_factory) -> None:
    ao, transport = ao_factory(ao_message(RECORDS_PAGE))

    await get_arns_records(ao)

    tags = dry_run_tags(transport.requests[0])
    assert "Cursor" not in tags
    assert "Sort-By" not in tags


@pytest.mark.asyncio
async def test_arns_records_invalid_sort(ao_factory) -> None:
    ao, transport = ao_factory(ao_message(RECORDS_PAGE))

    result = await get_arns_records(ao, sortOrder="sideways")

    assert result.text == "Error: Invalid sortOrder parameter. Must be one of: asc, desc"
    assert transport.requests == []


@pytest.mark.asyncio
async def test_arns_records_process_error_uses_operation_prefix(ao_factory) -> None:
    ao, _ = ao_factory(ao_error("Invalid-Cursor", "Cursor not found"))

    result = await get_arns_records(ao, cursor="nope")

    assert result.text == "Error retrieving ArNS records: Invalid-Cursor: Cursor not found"


@pytest.mark.asyncio
async def test_compute_unit_failure(ao_factory) -> None:
    def handler(request: httpx.Request) -> dict:
        return {"Messages": []}

    ao, _ = ao_factory(handler)

    result = await list_gateways(ao, network="devnet")

    process_id = DEFAULT_ARIO_PROCESS_IDS["devnet"]
    assert result.text == f"Error: Process {process_id} does not support provided action."
