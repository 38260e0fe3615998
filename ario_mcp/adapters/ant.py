"""ANT (Arweave Name Token) operations for MCP adapters"""

from typing import Any, Awaitable, Callable, Dict, Optional

from .utils import format_mcp_response, format_not_found
from ..ao_client import AOClient, ANTReader
from ..models.requests import (
    AntAction,
    AntRecordRequest,
    AntRequest,
    AntResourceRequest,
    validate_request,
)
from ..models.results import OperationResult
from ..protocol.errors import InvalidParams
from ..utils.decorators import with_error_handling
from ..utils.logger import get_logger

logger = get_logger(__name__)

# One arm per ant://{processId}/{action} read; RECORD needs an undername and
# is handled by read_ant_record
ANT_READS: Dict[AntAction, Callable[[ANTReader], Awaitable[Any]]] = {
    AntAction.INFO: ANTReader.get_info,
    AntAction.STATE: ANTReader.get_state,
    AntAction.RECORDS: ANTReader.get_records,
    AntAction.OWNER: ANTReader.get_owner,
    AntAction.CONTROLLERS: ANTReader.get_controllers,
    AntAction.NAME: ANTReader.get_name,
    AntAction.TICKER: ANTReader.get_ticker,
    AntAction.BALANCES: ANTReader.get_balances,
    AntAction.LOGO: ANTReader.get_logo,
}


def no_record_message(undername: str) -> str:
    return f'No record found for undername "{undername}"'


async def read_ant_record(ant: ANTReader, undername: str) -> OperationResult:
    record = await ant.get_record(undername)
    if not record:
        return format_not_found(no_record_message(undername))
    return format_mcp_response(record)


@with_error_handling("Error fetching ANT info")
async def get_ant_info(ao: AOClient, processId: Optional[str] = None) -> OperationResult:
    request = validate_request(AntRequest, processId=processId)
    return format_mcp_response(await ao.ant(request.processId).get_info())


@with_error_handling("Error fetching ANT state")
async def get_ant_state(ao: AOClient, processId: Optional[str] = None) -> OperationResult:
    """Full ANT state including records, controllers and balances"""
    request = validate_request(AntRequest, processId=processId)
    return format_mcp_response(await ao.ant(request.processId).get_state())


@with_error_handling("Error fetching ANT records")
async def get_ant_records(ao: AOClient, processId: Optional[str] = None) -> OperationResult:
    request = validate_request(AntRequest, processId=processId)
    return format_mcp_response(await ao.ant(request.processId).get_records())


@with_error_handling("Error fetching ANT record")
async def get_ant_record(ao: AOClient, processId: Optional[str] = None,
                         undername: Optional[str] = None) -> OperationResult:
    """Single record by undername; a missing record is a not-found result, not an error"""
    request = validate_request(AntRecordRequest, processId=processId, undername=undername)
    return await read_ant_record(ao.ant(request.processId), request.undername)


@with_error_handling("Error fetching ANT versions")
async def get_ant_versions(ao: AOClient) -> OperationResult:
    return format_mcp_response(await ao.get_ant_versions())


@with_error_handling("Error fetching latest ANT version")
async def get_latest_ant_version(ao: AOClient) -> OperationResult:
    return format_mcp_response(await ao.get_latest_ant_version())


@with_error_handling("Error")
async def read_ant(ao: AOClient, processId: Optional[str] = None,
                   action: Optional[str] = None,
                   undername: Optional[str] = None) -> OperationResult:
    """Dispatch for ant://{processId}/{action}"""
    request = validate_request(AntResourceRequest, processId=processId, action=action,
                               undername=undername)
    ant = ao.ant(request.processId)
    logger.info(f"[ANT] {request.action.value} on {request.processId}")

    if request.action is AntAction.RECORD:
        if not request.undername:
            raise InvalidParams("Error: Missing undername parameter for record action")
        return await read_ant_record(ant, request.undername)

    return format_mcp_response(await ANT_READS[request.action](ant))
