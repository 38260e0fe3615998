"""
Gateway error taxonomy

Every expected failure is raised as a GatewayMCPError subclass and rendered
as plain text inside a normal tool/resource response. Nothing here is sent
back as a JSON-RPC error object.
"""

from typing import Optional, Any, Dict
from enum import IntEnum


class ErrorCode(IntEnum):
    """JSON-RPC 2.0 derived codes, kept in error data for logging"""

    INVALID_PARAMS = -32602        # Invalid method parameter(s)
    INTERNAL_ERROR = -32603        # Internal error

    # Implementation-defined errors (-32000 to -32099)
    UPSTREAM_HTTP_ERROR = -32010   # Gateway answered with a non-2xx status
    AO_PROCESS_ERROR = -32011      # AO process refused or failed a read

    # MCP-specific errors (-32800 to -32899)
    CONTENT_TOO_LARGE = -32801     # The content is too large


class GatewayMCPError(Exception):
    """Base class for all expected gateway/registry failures"""

    # When set, ErrorHandler.to_text renders "<prefix>: <message>"
    use_prefix = False

    def __init__(
        self,
        code: int,
        message: str,
        data: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize error

        Args:
            code: Error code from ErrorCode enum
            message: Text shown to the client as-is
            data: Optional additional error data
        """
        self.code = code
        self.message = message
        self.data = data or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a loggable dict"""
        error_dict = {
            "code": int(self.code),
            "message": self.message
        }
        if self.data:
            error_dict["data"] = self.data
        return error_dict


class InvalidParams(GatewayMCPError):
    """Input failed validation; no upstream call was made"""

    def __init__(self, message: str = "Invalid parameters", data: Optional[Dict] = None):
        super().__init__(ErrorCode.INVALID_PARAMS, message, data)


class UpstreamHTTPError(GatewayMCPError):
    """Gateway responded with a non-success status"""

    def __init__(self, status: int, reason: str, action: str, host: Optional[str] = None):
        target = f" from {host}" if host else ""
        super().__init__(
            ErrorCode.UPSTREAM_HTTP_ERROR,
            f"Error {action}{target}: {status} {reason}".rstrip(),
            {"status": status, "reason": reason, "host": host}
        )
        self.status = status
        self.reason = reason


class ContentTooLarge(GatewayMCPError):
    """Declared content length exceeds the inline fetch limit"""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            ErrorCode.CONTENT_TOO_LARGE,
            f"Error: Transaction data is too large ({size} bytes, limit is {format_byte_limit(max_size)})",
            {"size": size, "max_size": max_size}
        )
        self.size = size
        self.max_size = max_size


class AOProcessError(GatewayMCPError):
    """AO process answered a read with an error or with no message"""

    use_prefix = True

    def __init__(self, process_id: str, action: str, message: str):
        super().__init__(
            ErrorCode.AO_PROCESS_ERROR,
            message,
            {"process_id": process_id, "action": action}
        )
        self.process_id = process_id
        self.action = action


def format_byte_limit(size: int) -> str:
    """8192 -> '8KB'; sizes that are not whole KiB stay in bytes"""
    if size >= 1024 and size % 1024 == 0:
        return f"{size // 1024}KB"
    return f"{size} bytes"


class ErrorHandler:
    """Utility class for rendering errors as response text"""

    @staticmethod
    def to_text(e: BaseException, prefix: str = "Error") -> str:
        """
        Convert any exception into the text payload returned to the client

        Args:
            e: Exception to render
            prefix: Lead-in used for unexpected exceptions

        Returns:
            Error text
        """
        if isinstance(e, GatewayMCPError) and not e.use_prefix:
            return e.message
        return f"{prefix}: {e}"

    @staticmethod
    def describe(e: BaseException) -> Dict[str, Any]:
        """Structured description for logs"""
        if isinstance(e, GatewayMCPError):
            return e.to_dict()
        return {
            "code": int(ErrorCode.INTERNAL_ERROR),
            "message": str(e),
            "data": {"exception_type": type(e).__name__}
        }
