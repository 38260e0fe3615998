"""Raw transaction data operations for MCP adapters"""

import base64
from typing import Optional

from .utils import format_mcp_response
from ..config import TransactionConfig, FETCH_MODE_RANGE
from ..gateway_client import GatewayClient
from ..models.requests import TransactionRequest, validate_request
from ..models.results import OperationResult
from ..protocol.errors import ContentTooLarge
from ..utils.decorators import with_error_handling
from ..utils.logger import get_logger

logger = get_logger(__name__)

TEXT_CONTENT_TYPES = (
    "text/",
    "application/json",
    "application/xml",
    "application/javascript",
)


def is_text_content(content_type: str) -> bool:
    return any(marker in content_type for marker in TEXT_CONTENT_TYPES)


def declared_length(value: str) -> int:
    """Content-Length header as an int; missing or garbled headers count as 0"""
    try:
        return int(value or "0")
    except ValueError:
        return 0


@with_error_handling("Error")
async def fetch_raw_transaction(gateway: GatewayClient, settings: TransactionConfig,
                                txId: Optional[str] = None) -> OperationResult:
    """
    Fetch raw transaction data from the gateway.

    size-checked mode: HEAD first, refuse anything declared larger than
    settings.max_inline_bytes, then GET and decode as text or base64.
    range mode: single GET for the first settings.range_bytes bytes.
    """
    request = validate_request(TransactionRequest, txId=txId)

    if settings.fetch_mode == FETCH_MODE_RANGE:
        response = await gateway.get_raw(request.txId, byte_range=settings.range_bytes)
        return format_mcp_response(
            f"First {settings.range_bytes} bytes of transaction data: {response.text}"
        )

    head = await gateway.head_raw(request.txId)
    content_length = declared_length(head.headers.get("Content-Length"))
    if content_length > settings.max_inline_bytes:
        raise ContentTooLarge(content_length, settings.max_inline_bytes)

    response = await gateway.get_raw(request.txId)
    content_type = response.headers.get("Content-Type", "")

    if is_text_content(content_type):
        data = response.content.decode("utf-8", errors="replace")
    else:
        encoded = base64.b64encode(response.content).decode("ascii")
        data = f"[Binary data encoded as base64]: {encoded}"

    logger.info(f"[Transaction] {request.txId}: {content_length} bytes, {content_type or 'unknown type'}")
    return format_mcp_response(
        f"Transaction data ({content_length} bytes, {content_type}): {data}"
    )
