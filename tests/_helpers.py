"""Mock transports and canned compute-unit replies shared by the tests."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx

GATEWAY_URL = "https://gateway.test"
CU_URL = "https://cu.test"

TX_ID = "xf958qhCNGfDme1FtoiD6DtMfDENDbtxZpjOM_1tsMM"
ANT_PROCESS_ID = "aGzM_yjralacHIUo8_nQXMbh9l1cy0aksiL_x9M359fz"  # 44 chars


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it answered."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def ao_message(data: Any = None, tags: list[dict[str, str]] | None = None) -> dict[str, Any]:
    """Compute-unit dry-run reply carrying one message."""
    encoded = data if isinstance(data, str) or data is None else json.dumps(data)
    return {"Messages": [{"Data": encoded, "Tags": tags or []}]}


def ao_error(value: str, detail: str | None = None) -> dict[str, Any]:
    """Dry-run reply whose message carries an Error tag."""
    return ao_message(detail, [{"name": "Error", "value": value}])


def dry_run_tags(request: httpx.Request) -> dict[str, str]:
    """Tag name -> value of a recorded dry-run request."""
    body = json.loads(request.content)
    return {tag["name"]: tag["value"] for tag in body["Tags"]}
