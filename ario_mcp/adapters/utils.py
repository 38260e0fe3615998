"""Shared utilities for MCP adapters"""

import json
from typing import Any, Dict, Optional, Tuple
from urllib.parse import parse_qsl, unquote

from ..models.results import OperationResult
from ..models.requests import DEFAULT_LIMIT
from ..utils.logger import get_logger

logger = get_logger(__name__)


def safe_json_dumps(data: Any, indent: int = 2) -> str:
    """JSON text for client payloads; values json can't encode fall back to str()"""
    return json.dumps(data, indent=indent, default=str)


def format_mcp_response(payload: Any) -> OperationResult:
    """Success result; payloads are pretty-printed JSON unless they are already text"""
    text = payload if isinstance(payload, str) else safe_json_dumps(payload)
    logger.debug(f"[MCP Response] {len(text)} chars")
    return OperationResult.success(text)


def format_not_found(message: str) -> OperationResult:
    """Informational result for lookups that legitimately found nothing"""
    logger.info(f"[MCP Not Found] {message}")
    return OperationResult.not_found(message)


def split_resource_param(value: Optional[str]) -> Tuple[str, Dict[str, str]]:
    """Split a URI template value into its decoded value and query parameters

    Template parameters match everything up to the next '/', so a query
    string on the last segment (gateways://mainnet?limit=5) arrives folded
    into the value.
    """
    if not value:
        return "", {}
    raw, _, query = value.partition("?")
    return unquote(raw), dict(parse_qsl(query, keep_blank_values=False))


def parse_limit(raw: Optional[str], default: int = DEFAULT_LIMIT) -> int:
    """Limit taken from a URI query string; anything not a positive integer uses the default"""
    if raw is None:
        return default
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric limit {raw!r}")
        return default
    return limit if limit > 0 else default
