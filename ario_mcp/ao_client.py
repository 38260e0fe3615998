"""
AO registry / token client

Read-only access to the ARIO registry process (gateways, ArNS records) and
to ANT processes. Reads are AO "dry-runs" answered by a compute unit (CU):
the message is evaluated against current process state but never committed.

The CU does all of the work; this module only builds tags and decodes the
first reply message.
"""

import json
from typing import Any, Dict, List, Optional

import httpx

from .config import AOConfig
from .protocol.errors import AOProcessError, InvalidParams
from .utils.logger import get_logger

logger = get_logger(__name__)

# Placeholders the CU accepts for unsigned dry-run messages
DRY_RUN_PLACEHOLDER = "1234"

BASE_TAGS = [
    {"name": "Data-Protocol", "value": "ao"},
    {"name": "Type", "value": "Message"},
    {"name": "Variant", "value": "ao.TN.1"},
]


def build_tags(action: str, **extra: Any) -> List[Dict[str, str]]:
    """Action tag plus every extra tag that has a value"""
    tags = [{"name": "Action", "value": action}]
    for name, value in extra.items():
        if value is None:
            continue
        tags.append({"name": name.replace("_", "-"), "value": str(value)})
    return tags


def decode_data(data: Any) -> Any:
    """Message Data is usually JSON text; anything else is returned as-is"""
    if data is None or data == "":
        return None
    if not isinstance(data, str):
        return data
    try:
        return json.loads(data)
    except json.JSONDecodeError:
        return data


class AOClient:
    """Dry-run reader against one AO compute unit"""

    def __init__(self, config: AOConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.cu_url = config.cu_url.rstrip("/")
        self.process_ids = dict(config.process_ids)
        self.ant_registry_id = config.ant_registry_id
        self.timeout = httpx.Timeout(config.timeout)
        self.transport = transport

        logger.info(f"AOClient initialized with cu_url: {self.cu_url}")

    async def dry_run(self, process_id: str, tags: List[Dict[str, str]]) -> Any:
        """Evaluate a read against a process and return the decoded reply data"""
        action = next((tag["value"] for tag in tags if tag["name"] == "Action"), "unknown")
        body = {
            "Id": DRY_RUN_PLACEHOLDER,
            "Target": process_id,
            "Owner": DRY_RUN_PLACEHOLDER,
            "Anchor": "0",
            "Data": DRY_RUN_PLACEHOLDER,
            "Tags": tags + BASE_TAGS,
        }

        logger.info(f"[DRY-RUN] {action} -> {process_id}")
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                f"{self.cu_url}/dry-run",
                params={"process-id": process_id},
                json=body,
                headers={"Content-Type": "application/json"},
            )

        if not response.is_success:
            raise AOProcessError(
                process_id, action,
                f"Dry-run failed for process {process_id}: {response.status_code} {response.reason_phrase}"
            )

        result = response.json()
        if result.get("Error"):
            raise AOProcessError(process_id, action, str(result["Error"]))

        messages = result.get("Messages") or []
        if not messages:
            raise AOProcessError(
                process_id, action, f"Process {process_id} does not support provided action."
            )

        message = messages[0]
        error_tag = next(
            (tag for tag in message.get("Tags") or [] if tag.get("name") == "Error"), None
        )
        if error_tag is not None:
            detail = message.get("Data")
            text = f"{error_tag.get('value')}: {detail}" if detail else str(error_tag.get("value"))
            raise AOProcessError(process_id, action, text)

        return decode_data(message.get("Data"))

    def ario(self, network: str) -> "ARIOReader":
        """Registry handle for one network; built per call"""
        process_id = self.process_ids.get(network)
        if not process_id:
            raise InvalidParams(
                f"Error: Invalid network. Must be one of: {', '.join(self.process_ids)}"
            )
        return ARIOReader(self, process_id)

    def ant(self, process_id: str) -> "ANTReader":
        """Token handle for one ANT process; built per call"""
        return ANTReader(self, process_id)

    async def get_ant_versions(self) -> Any:
        return await self.dry_run(self.ant_registry_id, build_tags("Get-Versions"))

    async def get_latest_ant_version(self) -> Any:
        return await self.dry_run(self.ant_registry_id, build_tags("Get-Latest-Version"))


class ARIOReader:
    """Reads against the ARIO registry process"""

    def __init__(self, client: AOClient, process_id: str):
        self.client = client
        self.process_id = process_id

    async def _paginated(self, action: str, limit: Optional[int], cursor: Optional[str],
                         sort_by: Optional[str], sort_order: Optional[str]) -> Dict[str, Any]:
        tags = build_tags(action, Cursor=cursor, Limit=limit,
                          Sort_By=sort_by, Sort_Order=sort_order)
        return await self.client.dry_run(self.process_id, tags)

    async def get_gateways(self, limit: Optional[int] = None, cursor: Optional[str] = None,
                           sort_by: Optional[str] = None,
                           sort_order: Optional[str] = None) -> Dict[str, Any]:
        """One page of the gateway registry ({items, nextCursor, hasMore, ...})"""
        return await self._paginated("Paginated-Gateways", limit, cursor, sort_by, sort_order)

    async def get_arns_records(self, cursor: Optional[str] = None, limit: Optional[int] = None,
                               sort_by: Optional[str] = None,
                               sort_order: Optional[str] = None) -> Dict[str, Any]:
        """One page of ArNS name records"""
        return await self._paginated("Paginated-Records", limit, cursor, sort_by, sort_order)


class ANTReader:
    """Reads against a single ANT process"""

    def __init__(self, client: AOClient, process_id: str):
        self.client = client
        self.process_id = process_id

    async def _read(self, action: str, **tags: Any) -> Any:
        return await self.client.dry_run(self.process_id, build_tags(action, **tags))

    async def get_info(self) -> Dict[str, Any]:
        return await self._read("Info")

    async def get_state(self) -> Dict[str, Any]:
        return await self._read("State")

    async def get_records(self) -> Dict[str, Any]:
        return await self._read("Records")

    async def get_record(self, undername: str) -> Optional[Dict[str, Any]]:
        """Record for one undername, or None when the ANT has no such record"""
        try:
            return await self._read("Record", Sub_Domain=undername)
        except AOProcessError as e:
            if "does not exist" in e.message.lower():
                logger.info(f"No record {undername!r} on ANT {self.process_id}")
                return None
            raise

    async def get_controllers(self) -> List[str]:
        return await self._read("Controllers")

    async def get_balances(self) -> Dict[str, int]:
        return await self._read("Balances")

    # Owner, name, ticker and logo are fields of the Info reply
    async def _info_field(self, name: str) -> Any:
        info = await self.get_info()
        return (info or {}).get(name)

    async def get_owner(self) -> Optional[str]:
        return await self._info_field("Owner")

    async def get_name(self) -> Optional[str]:
        return await self._info_field("Name")

    async def get_ticker(self) -> Optional[str]:
        return await self._info_field("Ticker")

    async def get_logo(self) -> Optional[str]:
        return await self._info_field("Logo")
