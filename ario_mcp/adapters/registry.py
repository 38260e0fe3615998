"""ARIO registry operations (gateways, ArNS records) for MCP adapters"""

from typing import Optional

from .utils import format_mcp_response
from ..ao_client import AOClient
from ..models.requests import (
    ArnsRecordsRequest,
    GatewayListRequest,
    Network,
    validate_request,
)
from ..models.results import OperationResult
from ..utils.decorators import with_error_handling
from ..utils.logger import get_logger

logger = get_logger(__name__)


def _value(member) -> Optional[str]:
    return member.value if member is not None else None


@with_error_handling("Error")
async def list_gateways(ao: AOClient, network: Optional[str] = None,
                        limit: Optional[int] = None) -> OperationResult:
    """Gateways registered on a network; only the page's items are returned"""
    request = validate_request(GatewayListRequest, network=network, limit=limit)
    logger.info(f"[Registry] Listing up to {request.limit} gateways on {request.network.value}")

    page = await ao.ario(request.network.value).get_gateways(limit=request.limit)
    items = (page or {}).get("items", [])[:request.limit]
    return format_mcp_response(items)


@with_error_handling("Error retrieving ArNS records")
async def get_arns_records(ao: AOClient, cursor: Optional[str] = None,
                           limit: Optional[int] = None, sortBy: Optional[str] = None,
                           sortOrder: Optional[str] = None,
                           network: Optional[str] = Network.MAINNET.value) -> OperationResult:
    """One page of ArNS records, returned with its pagination fields"""
    request = validate_request(ArnsRecordsRequest, network=network, cursor=cursor,
                               limit=limit, sortBy=sortBy, sortOrder=sortOrder)

    page = await ao.ario(request.network.value).get_arns_records(
        cursor=request.cursor,
        limit=request.limit,
        sort_by=_value(request.sortBy),
        sort_order=_value(request.sortOrder),
    )
    return format_mcp_response(page)
