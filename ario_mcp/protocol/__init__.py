"""
Protocol Package - error taxonomy shared by clients and adapters
"""

from .errors import (
    GatewayMCPError,
    InvalidParams,
    UpstreamHTTPError,
    ContentTooLarge,
    AOProcessError,
    ErrorHandler,
    ErrorCode,
    format_byte_limit
)

__all__ = [
    'GatewayMCPError',
    'InvalidParams',
    'UpstreamHTTPError',
    'ContentTooLarge',
    'AOProcessError',
    'ErrorHandler',
    'ErrorCode',
    'format_byte_limit'
]
