"""Parquet (duckdb) query operations for MCP adapters"""

from typing import Optional

from .utils import format_mcp_response
from ..models.requests import ParquetQueryRequest, validate_request
from ..models.results import OperationResult
from ..parquet_client import ParquetClient
from ..utils.decorators import with_error_handling
from ..utils.logger import get_logger

logger = get_logger(__name__)


@with_error_handling("Error executing Parquet query")
async def query_parquet(parquet: ParquetClient, query: Optional[str] = None,
                        limit: Optional[int] = None) -> OperationResult:
    """Run SQL against the tags view; LIMIT is appended when the query has none"""
    request = validate_request(ParquetQueryRequest, query=query, limit=limit)
    result = await parquet.query(request.query, request.limit)
    logger.info(f"[Parquet] {result['rowCount']} rows")
    return format_mcp_response(result)


@with_error_handling("Error getting Parquet schema")
async def get_parquet_schema(parquet: ParquetClient) -> OperationResult:
    return format_mcp_response(await parquet.schema())
