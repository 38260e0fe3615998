"""Validated inputs for tools and resources

Validation is done with pydantic. Failures are turned into InvalidParams by
validate_request so they reach the client as text, never as a protocol fault.
"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from ..protocol.errors import InvalidParams

TX_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{43}$")
MIN_PROCESS_ID_LENGTH = 43
DEFAULT_LIMIT = 100


class Network(str, Enum):
    """ARIO networks"""
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"


class ArnsSortBy(str, Enum):
    """Sortable ArNS record fields"""
    NAME = "name"
    TYPE = "type"
    PROCESS_ID = "processId"
    START_TIMESTAMP = "startTimestamp"
    UNDERNAME_LIMIT = "undernameLimit"
    PURCHASE_PRICE = "purchasePrice"
    END_TIMESTAMP = "endTimestamp"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class AntAction(str, Enum):
    """Reads available through ant://{processId}/{action}"""
    INFO = "info"
    STATE = "state"
    RECORDS = "records"
    RECORD = "record"
    OWNER = "owner"
    CONTROLLERS = "controllers"
    NAME = "name"
    TICKER = "ticker"
    BALANCES = "balances"
    LOGO = "logo"


def choices(enum_cls: Type[Enum]) -> str:
    """Comma separated list of the values of an enum"""
    return ", ".join(member.value for member in enum_cls)


def _one_of(value: Any, enum_cls: Type[Enum], label: str) -> Any:
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise PydanticCustomError(
            "invalid_choice",
            "Invalid {label}. Must be one of: {options}",
            {"label": label, "options": choices(enum_cls)},
        )


def _positive_limit(value: Optional[int]) -> Optional[int]:
    if value is not None and value <= 0:
        raise PydanticCustomError("positive_limit", "Limit must be a positive number")
    return value


def _required(value: Optional[str], message: str) -> str:
    if value is None or not str(value).strip():
        raise PydanticCustomError("required", message)
    return value


class RequestModel(BaseModel):
    """Validators also run for omitted fields so missing input is reported"""
    model_config = ConfigDict(validate_default=True)


class TransactionRequest(RequestModel):
    txId: Optional[str] = None

    @field_validator("txId")
    @classmethod
    def check_tx_id(cls, value: Optional[str]) -> str:
        value = _required(value, "Missing transaction ID")
        if not TX_ID_PATTERN.match(value):
            raise PydanticCustomError("tx_id_format", "Invalid transaction ID format")
        return value


class HostnameRequest(RequestModel):
    hostname: Optional[str] = None

    @field_validator("hostname")
    @classmethod
    def check_hostname(cls, value: Optional[str]) -> str:
        return _required(value, "Hostname is required")


class GraphQLRequest(RequestModel):
    query: Optional[str] = None
    variables: Optional[Dict[str, Any]] = None
    operationName: Optional[str] = None

    @field_validator("query")
    @classmethod
    def check_query(cls, value: Optional[str]) -> str:
        return _required(value, "GraphQL query is required")


class GatewayListRequest(RequestModel):
    network: Network = Network.MAINNET
    limit: int = DEFAULT_LIMIT

    @field_validator("network", mode="before")
    @classmethod
    def check_network(cls, value: Any) -> Any:
        return Network.MAINNET if value in (None, "") else _one_of(value, Network, "network")

    @field_validator("limit", mode="before")
    @classmethod
    def default_limit(cls, value: Any) -> Any:
        return DEFAULT_LIMIT if value is None else value

    @field_validator("limit")
    @classmethod
    def check_limit(cls, value: int) -> int:
        return _positive_limit(value)


class ArnsRecordsRequest(GatewayListRequest):
    cursor: Optional[str] = None
    sortBy: Optional[ArnsSortBy] = None
    sortOrder: Optional[SortOrder] = None

    @field_validator("sortBy", mode="before")
    @classmethod
    def check_sort_by(cls, value: Any) -> Any:
        return None if value == "" else _one_of(value, ArnsSortBy, "sortBy parameter")

    @field_validator("sortOrder", mode="before")
    @classmethod
    def check_sort_order(cls, value: Any) -> Any:
        return None if value == "" else _one_of(value, SortOrder, "sortOrder parameter")


class AntRequest(RequestModel):
    processId: Optional[str] = None

    @field_validator("processId")
    @classmethod
    def check_process_id(cls, value: Optional[str]) -> str:
        value = _required(value, "Missing ANT process ID")
        if len(value) < MIN_PROCESS_ID_LENGTH:
            raise PydanticCustomError(
                "process_id_format", "Process ID must be an Arweave transaction ID"
            )
        return value


class AntRecordRequest(AntRequest):
    undername: Optional[str] = None

    @field_validator("undername")
    @classmethod
    def check_undername(cls, value: Optional[str]) -> str:
        return _required(value, "Undername is required")


class AntResourceRequest(AntRequest):
    action: AntAction = AntAction.INFO
    undername: Optional[str] = None

    @field_validator("action", mode="before")
    @classmethod
    def check_action(cls, value: Any) -> Any:
        if value in (None, ""):
            return AntAction.INFO
        if isinstance(value, AntAction):
            return value
        try:
            return AntAction(value)
        except ValueError:
            raise PydanticCustomError(
                "invalid_action",
                'Invalid action "{action}". Valid actions are: {options}',
                {"action": value, "options": choices(AntAction)},
            )


class ParquetQueryRequest(RequestModel):
    query: Optional[str] = None
    limit: Optional[int] = None  # None: the configured default

    @field_validator("query")
    @classmethod
    def check_query(cls, value: Optional[str]) -> str:
        return _required(value, "SQL query is required")

    @field_validator("limit")
    @classmethod
    def check_limit(cls, value: Optional[int]) -> Optional[int]:
        return _positive_limit(value)


RequestT = TypeVar("RequestT", bound=BaseModel)


def validation_messages(exc: ValidationError) -> List[str]:
    return [error["msg"] for error in exc.errors()]


def validate_request(model: Type[RequestT], **data: Any) -> RequestT:
    """Build a request model or raise InvalidParams with readable text"""
    try:
        return model(**data)
    except ValidationError as e:
        messages = validation_messages(e)
        raise InvalidParams(f"Error: {'; '.join(messages)}", {"errors": messages}) from e
