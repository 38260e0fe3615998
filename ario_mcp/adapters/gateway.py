"""Gateway info operations for MCP adapters"""

from typing import Optional

from .utils import format_mcp_response
from ..gateway_client import GatewayClient, clean_hostname
from ..models.requests import HostnameRequest, validate_request
from ..models.results import OperationResult
from ..utils.decorators import with_error_handling
from ..utils.logger import get_logger

logger = get_logger(__name__)


@with_error_handling("Error")
async def get_gateway_info(gateway: GatewayClient) -> OperationResult:
    """Info document of the configured gateway"""
    info = await gateway.get_info()
    return format_mcp_response(info)


@with_error_handling("Error")
async def get_gateway_info_by_hostname(gateway: GatewayClient,
                                       hostname: Optional[str] = None) -> OperationResult:
    """Info document fetched directly from another gateway over https"""
    request = validate_request(HostnameRequest, hostname=hostname)
    logger.info(f"[Gateway] Fetching info from {clean_hostname(request.hostname)}")
    info = await gateway.get_info(request.hostname)
    return format_mcp_response(info)
