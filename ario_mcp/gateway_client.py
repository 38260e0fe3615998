"""
AR.IO Gateway HTTP client

Thin async wrapper over the gateway endpoints used by the MCP tools:
raw transaction data, gateway info and GraphQL. Every call opens its own
httpx client; nothing is shared between calls.
"""

import re
from typing import Any, Dict, Optional

import httpx

from .config import GatewayConfig
from .protocol.errors import UpstreamHTTPError
from .utils.logger import get_logger

logger = get_logger(__name__)

_PROTOCOL_PREFIX = re.compile(r"^https?://")


def clean_hostname(hostname: str) -> str:
    """Remove a leading http:// or https:// from a hostname"""
    return _PROTOCOL_PREFIX.sub("", hostname.strip())


class GatewayClient:
    """Client for a single AR.IO gateway origin"""

    def __init__(self, config: GatewayConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            config: Gateway origin and timeout
            transport: Optional httpx transport (tests inject httpx.MockTransport)
        """
        self.base_url = config.url.rstrip("/")
        self.headers = config.default_headers
        self.timeout = httpx.Timeout(config.timeout)
        self.transport = transport

        logger.info(f"GatewayClient initialized with base_url: {self.base_url}")

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport,
                                 follow_redirects=True)

    async def _request(self, method: str, url: str, action: str,
                       host: Optional[str] = None, **kwargs) -> httpx.Response:
        """Issue one request; non-2xx responses raise UpstreamHTTPError"""
        logger.info(f"[REQUEST] {method} {url}")
        async with self._client() as client:
            response = await client.request(method, url, **kwargs)

        logger.debug(f"{method} {url} -> {response.status_code}")
        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} for {url}")
            raise UpstreamHTTPError(response.status_code, response.reason_phrase, action, host)
        return response

    def raw_url(self, tx_id: str) -> str:
        return f"{self.base_url}/raw/{tx_id}"

    async def head_raw(self, tx_id: str) -> httpx.Response:
        """HEAD {origin}/raw/{txId}"""
        return await self._request("HEAD", self.raw_url(tx_id), "fetching transaction")

    async def get_raw(self, tx_id: str, byte_range: Optional[int] = None) -> httpx.Response:
        """GET {origin}/raw/{txId}, optionally only the first byte_range bytes"""
        headers = {"Range": f"bytes=0-{byte_range - 1}"} if byte_range else None
        return await self._request("GET", self.raw_url(tx_id), "fetching transaction",
                                   headers=headers)

    async def get_info(self, hostname: Optional[str] = None) -> Dict[str, Any]:
        """Gateway info of the configured origin, or of another gateway by hostname"""
        if hostname:
            host = clean_hostname(hostname)
            url = f"https://{host}/ar-io/info"
        else:
            host = None
            url = f"{self.base_url}/ar-io/info"

        response = await self._request("GET", url, "fetching gateway info", host)
        return response.json()

    async def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None,
                      operation_name: Optional[str] = None) -> Dict[str, Any]:
        """POST a GraphQL query to {origin}/graphql"""
        payload = {
            "query": query,
            "variables": variables,
            "operationName": operation_name,
        }
        # Unset optional members are omitted from the body
        payload = {key: value for key, value in payload.items() if value is not None}
        response = await self._request("POST", f"{self.base_url}/graphql",
                                       "executing GraphQL query",
                                       json=payload, headers=self.headers)
        return response.json()
