"""Data models for the AR.IO Gateway MCP Server"""

from .results import OperationResult, ResultKind
from .requests import (
    AntAction,
    ArnsSortBy,
    Network,
    SortOrder,
    validate_request
)

__all__ = [
    'OperationResult',
    'ResultKind',
    'AntAction',
    'ArnsSortBy',
    'Network',
    'SortOrder',
    'validate_request'
]
