"""Error text rendering."""

from __future__ import annotations

import pytest

from ario_mcp.protocol import (
    AOProcessError,
    ContentTooLarge,
    ErrorCode,
    ErrorHandler,
    InvalidParams,
    UpstreamHTTPError,
    format_byte_limit,
)


@pytest.mark.parametrize(
    ("size", "expected"),
    [(8192, "8KB"), (1024, "1KB"), (1000, "1000 bytes"), (512, "512 bytes")],
)
def test_format_byte_limit(size: int, expected: str) -> None:
    assert format_byte_limit(size) == expected


def test_content_too_large_message() -> None:
    error = ContentTooLarge(10000, 8192)

    assert error.message == "Error: Transaction data is too large (10000 bytes, limit is 8KB)"
    assert error.code == ErrorCode.CONTENT_TOO_LARGE


def test_upstream_error_with_and_without_host() -> None:
    local = UpstreamHTTPError(404, "Not Found", "fetching transaction")
    remote = UpstreamHTTPError(503, "Service Unavailable", "fetching gateway info", "permagate.io")

    assert local.message == "Error fetching transaction: 404 Not Found"
    assert remote.message == "Error fetching gateway info from permagate.io: 503 Service Unavailable"


def test_to_text_keeps_own_message_for_validation_errors() -> None:
    error = InvalidParams("Error: Missing transaction ID")

    assert ErrorHandler.to_text(error, "Error fetching ANT info") == "Error: Missing transaction ID"


def test_to_text_prefixes_process_and_unexpected_errors() -> None:
    process_error = AOProcessError("pid", "Info", "Process pid does not support provided action.")

    assert (
        ErrorHandler.to_text(process_error, "Error fetching ANT info")
        == "Error fetching ANT info: Process pid does not support provided action."
    )
    assert ErrorHandler.to_text(ValueError("boom"), "Error executing Parquet query") == (
        "Error executing Parquet query: boom"
    )


def test_describe_unexpected_exception() -> None:
    described = ErrorHandler.describe(KeyError("x"))

    assert described["code"] == int(ErrorCode.INTERNAL_ERROR)
    assert described["data"] == {"exception_type": "KeyError"}
