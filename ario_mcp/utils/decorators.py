"""Decorators shared by the MCP adapters"""

import functools
from typing import Callable

from .logger import get_logger
from ..models.results import OperationResult
from ..protocol.errors import ErrorHandler, GatewayMCPError

logger = get_logger(__name__)


def with_error_handling(default_prefix: str = "Error"):
    """
    Decorator to standardize error handling across adapters.

    Text comes from ErrorHandler.to_text: validation, HTTP status and size
    errors keep their own message, AO process errors and unexpected
    exceptions become "<default_prefix>: <message>". The adapter returns an
    error OperationResult instead of raising.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> OperationResult:
            try:
                return await func(*args, **kwargs)
            except GatewayMCPError as e:
                logger.warning(f"{func.__name__} failed: {ErrorHandler.describe(e)}")
                return OperationResult.error(ErrorHandler.to_text(e, default_prefix))
            except Exception as e:
                logger.error(f"Error in {func.__name__}: {e}", exc_info=True)
                return OperationResult.error(ErrorHandler.to_text(e, default_prefix))
        return wrapper
    return decorator
