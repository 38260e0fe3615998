#!/usr/bin/env python3
"""
AR.IO Gateway MCP Server - Official FastMCP Implementation

Exposes an AR.IO gateway, the ARIO registry, ANT processes and a local
Parquet tag index to MCP clients over stdio.

Tools:
- fetch-raw-transaction, get-gateway-info, get-gateway-info-by-hostname
- execute-graphql
- list-gateways, get-arns-records
- get-ant-info, get-ant-state, get-ant-records, get-ant-record
- get-ant-versions, get-latest-ant-version
- query-parquet, get-parquet-schema

Resources:
- transaction://{txId}
- graphql://{query}?variables=&operationName=
- gateways://{network}?limit=
- gateway://{hostname}
- arns://{network}?cursor=&limit=&sortBy=&sortOrder=
- ant://{processId}/{action}?undername=
- ant://versions, ant://latest-version
- parquet://{query}?limit=

Every failure is returned as response text; nothing is raised to the client.
"""

import logging
import os
import signal
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Official MCP SDK imports
from mcp.server.fastmcp import FastMCP

from .adapters.utils import parse_limit, split_resource_param
from .adapters.transaction import fetch_raw_transaction as transaction_adapter
from .adapters.gateway import (
    get_gateway_info as gateway_info_adapter,
    get_gateway_info_by_hostname as gateway_hostname_adapter
)
from .adapters.graphql import execute_graphql as graphql_adapter
from .adapters.registry import (
    list_gateways as gateways_adapter,
    get_arns_records as arns_adapter
)
from .adapters.ant import (
    get_ant_info as ant_info_adapter,
    get_ant_state as ant_state_adapter,
    get_ant_records as ant_records_adapter,
    get_ant_record as ant_record_adapter,
    get_ant_versions as ant_versions_adapter,
    get_latest_ant_version as ant_latest_adapter,
    read_ant as ant_resource_adapter
)
from .adapters.parquet import (
    query_parquet as parquet_query_adapter,
    get_parquet_schema as parquet_schema_adapter
)
from .ao_client import AOClient
from .config import Config, TransactionConfig, config
from .gateway_client import GatewayClient
from .parquet_client import ParquetClient
from .utils import setup_mcp_logging, get_logger
from .utils.logger import get_mcp_operations_logger

SERVER_NAME = "AR.IO Gateway"
SERVER_VERSION = "1.0.0"

logger = get_logger(__name__)
mcp_ops_logger = get_mcp_operations_logger()


# ============================================================================
# SERVICES
# ============================================================================

@dataclass
class Services:
    """Clients shared by every tool and resource handler"""
    gateway: GatewayClient
    transaction: TransactionConfig
    ao: AOClient
    parquet: ParquetClient

    @classmethod
    def from_config(cls, cfg: Config) -> "Services":
        return cls(
            gateway=GatewayClient(cfg.gateway),
            transaction=cfg.transaction,
            ao=AOClient(cfg.ao),
            parquet=ParquetClient(cfg.parquet),
        )


_services: Optional[Services] = None


def get_services() -> Services:
    """Build the clients on first use from the global configuration"""
    global _services
    if _services is None:
        _services = Services.from_config(config)
    return _services


async def handle_tool_execution(tool_name: str, adapter_func, *args: Any, **kwargs: Any) -> str:
    """Run one adapter, log the call and return the text handed to the client"""
    start_time = time.time()
    mcp_ops_logger.log_tool_request(tool_name, {"tool": tool_name, "parameters": kwargs})
    logger.info(f"[{tool_name}] Executing")

    try:
        result = await adapter_func(*args, **kwargs)
    except Exception as e:
        execution_time_ms = (time.time() - start_time) * 1000
        mcp_ops_logger.log_tool_error(tool_name, e, execution_time_ms)
        logger.error(f"[{tool_name}] Unexpected failure: {e}", exc_info=True)
        return f"Error: {e}"

    execution_time_ms = (time.time() - start_time) * 1000
    mcp_ops_logger.log_tool_response(tool_name, result.text, execution_time_ms, result.status)
    return result.text


# Initialize FastMCP server with official SDK
mcp = FastMCP(SERVER_NAME)


# ============================================================================
# TOOLS
# ============================================================================

@mcp.tool(name="fetch-raw-transaction",
          description="Fetch raw transaction data from the AR.IO gateway")
async def fetch_raw_transaction(txId: str) -> str:
    services = get_services()
    return await handle_tool_execution("fetch-raw-transaction", transaction_adapter,
                                       services.gateway, services.transaction, txId=txId)


@mcp.tool(name="get-gateway-info",
          description="Get information about the configured AR.IO gateway")
async def get_gateway_info() -> str:
    return await handle_tool_execution("get-gateway-info", gateway_info_adapter,
                                       get_services().gateway)


@mcp.tool(name="get-gateway-info-by-hostname",
          description="Get information about an AR.IO gateway by its hostname")
async def get_gateway_info_by_hostname(hostname: str) -> str:
    return await handle_tool_execution("get-gateway-info-by-hostname", gateway_hostname_adapter,
                                       get_services().gateway, hostname=hostname)


@mcp.tool(name="execute-graphql",
          description="Execute a GraphQL query against the AR.IO gateway")
async def execute_graphql(
    query: str,
    variables: Optional[Dict[str, Any]] = None,
    operationName: Optional[str] = None
) -> str:
    return await handle_tool_execution("execute-graphql", graphql_adapter, get_services().gateway,
                                       query=query, variables=variables,
                                       operationName=operationName)


@mcp.tool(name="list-gateways",
          description="List gateways registered on an ARIO network (mainnet, testnet or devnet)")
async def list_gateways(network: Optional[str] = None, limit: Optional[int] = None) -> str:
    return await handle_tool_execution("list-gateways", gateways_adapter, get_services().ao,
                                       network=network, limit=limit)


@mcp.tool(name="get-arns-records",
          description="Get a page of ArNS records from the ARIO registry. sortBy: name, type, "
                      "processId, startTimestamp, undernameLimit, purchasePrice, endTimestamp. "
                      "sortOrder: asc or desc")
async def get_arns_records(
    cursor: Optional[str] = None,
    limit: Optional[int] = None,
    sortBy: Optional[str] = None,
    sortOrder: Optional[str] = None
) -> str:
    return await handle_tool_execution("get-arns-records", arns_adapter, get_services().ao,
                                       cursor=cursor, limit=limit, sortBy=sortBy,
                                       sortOrder=sortOrder)


@mcp.tool(name="get-ant-info", description="Get information about an ANT")
async def get_ant_info(processId: str) -> str:
    return await handle_tool_execution("get-ant-info", ant_info_adapter, get_services().ao,
                                       processId=processId)


@mcp.tool(name="get-ant-state", description="Get the full state of an ANT")
async def get_ant_state(processId: str) -> str:
    return await handle_tool_execution("get-ant-state", ant_state_adapter, get_services().ao,
                                       processId=processId)


@mcp.tool(name="get-ant-records", description="Get all records of an ANT")
async def get_ant_records(processId: str) -> str:
    return await handle_tool_execution("get-ant-records", ant_records_adapter, get_services().ao,
                                       processId=processId)


@mcp.tool(name="get-ant-record", description="Get a single ANT record by undername")
async def get_ant_record(processId: str, undername: str) -> str:
    return await handle_tool_execution("get-ant-record", ant_record_adapter, get_services().ao,
                                       processId=processId, undername=undername)


@mcp.tool(name="get-ant-versions", description="Get all published ANT versions")
async def get_ant_versions() -> str:
    return await handle_tool_execution("get-ant-versions", ant_versions_adapter, get_services().ao)


@mcp.tool(name="get-latest-ant-version", description="Get the latest published ANT version")
async def get_latest_ant_version() -> str:
    return await handle_tool_execution("get-latest-ant-version", ant_latest_adapter,
                                       get_services().ao)


@mcp.tool(name="query-parquet",
          description="Run a SQL query against the local Parquet tag index (view name: tags)")
async def query_parquet(query: str, limit: Optional[int] = None) -> str:
    return await handle_tool_execution("query-parquet", parquet_query_adapter,
                                       get_services().parquet, query=query, limit=limit)


@mcp.tool(name="get-parquet-schema",
          description="Describe the Parquet tag index: columns, sample rows and row count")
async def get_parquet_schema() -> str:
    return await handle_tool_execution("get-parquet-schema", parquet_schema_adapter,
                                       get_services().parquet)


# ============================================================================
# RESOURCES
# ============================================================================

@mcp.resource("transaction://{txId}", name="transaction",
              description="Raw transaction data by transaction ID")
async def transaction_resource(txId: str) -> str:
    services = get_services()
    tx_id, _ = split_resource_param(txId)
    return await handle_tool_execution("transaction://", transaction_adapter,
                                       services.gateway, services.transaction, txId=tx_id)


@mcp.resource("graphql://{query}", name="graphql",
              description="GraphQL query result; accepts ?variables= (JSON) and ?operationName=")
async def graphql_resource(query: str) -> str:
    text, params = split_resource_param(query)
    return await handle_tool_execution("graphql://", graphql_adapter, get_services().gateway,
                                       query=text, variables=params.get("variables"),
                                       operationName=params.get("operationName"))


@mcp.resource("gateways://{network}", name="gateways",
              description="Gateways registered on a network; accepts ?limit=")
async def gateways_resource(network: str) -> str:
    name, params = split_resource_param(network)
    return await handle_tool_execution("gateways://", gateways_adapter, get_services().ao,
                                       network=name, limit=parse_limit(params.get("limit")))


@mcp.resource("gateway://{hostname}", name="gateway",
              description="Gateway info fetched from a hostname")
async def gateway_resource(hostname: str) -> str:
    host, _ = split_resource_param(hostname)
    return await handle_tool_execution("gateway://", gateway_hostname_adapter,
                                       get_services().gateway, hostname=host)


@mcp.resource("arns://{network}", name="arns-records",
              description="ArNS records; accepts ?cursor=&limit=&sortBy=&sortOrder=")
async def arns_resource(network: str) -> str:
    name, params = split_resource_param(network)
    return await handle_tool_execution("arns://", arns_adapter, get_services().ao,
                                       network=name,
                                       cursor=params.get("cursor"),
                                       limit=parse_limit(params.get("limit")),
                                       sortBy=params.get("sortBy"),
                                       sortOrder=params.get("sortOrder"))


@mcp.resource("ant://versions", name="ant-versions", description="All published ANT versions")
async def ant_versions_resource() -> str:
    return await handle_tool_execution("ant://versions", ant_versions_adapter, get_services().ao)


@mcp.resource("ant://latest-version", name="ant-latest-version",
              description="The latest published ANT version")
async def ant_latest_version_resource() -> str:
    return await handle_tool_execution("ant://latest-version", ant_latest_adapter,
                                       get_services().ao)


@mcp.resource("ant://{processId}/{action}", name="ant",
              description="ANT reads: info, state, records, record (?undername=), owner, "
                          "controllers, name, ticker, balances, logo")
async def ant_resource(processId: str, action: str) -> str:
    process_id, _ = split_resource_param(processId)
    action_name, params = split_resource_param(action)
    return await handle_tool_execution("ant://", ant_resource_adapter, get_services().ao,
                                       processId=process_id, action=action_name,
                                       undername=params.get("undername"))


@mcp.resource("parquet://{query}", name="parquet",
              description="SQL over the Parquet tag index; accepts ?limit=")
async def parquet_resource(query: str) -> str:
    parquet = get_services().parquet
    text, params = split_resource_param(query)
    limit = parse_limit(params.get("limit"), default=parquet.cfg.default_limit)
    return await handle_tool_execution("parquet://", parquet_query_adapter, parquet,
                                       query=text, limit=limit)


# ============================================================================
# ENTRY POINT
# ============================================================================

def _terminate(signum, frame):
    logger.info(f"Process terminated by {signal.Signals(signum).name}")
    logging.shutdown()
    os._exit(0)


def install_signal_handlers():
    """SIGINT/SIGTERM exit immediately with status 0; in-flight calls are dropped"""
    signal.signal(signal.SIGINT, _terminate)
    signal.signal(signal.SIGTERM, _terminate)


def main():
    """Main entry point with logging, config validation and signal handling"""
    setup_mcp_logging(level=config.logging.level, log_file=config.logging.file)

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        sys.exit(1)

    logger.info("=" * 60)
    logger.info(f"{SERVER_NAME} MCP Server - Official FastMCP Implementation")
    logger.info("=" * 60)
    logger.info(f"Server Version: {SERVER_VERSION}")
    logger.info(f"Gateway: {config.gateway.url}")
    logger.info(f"AO Compute Unit: {config.ao.cu_url}")
    logger.info(f"Transaction Fetch Mode: {config.transaction.fetch_mode}")
    logger.info(f"Parquet Directory: {config.parquet.directory}")
    logger.info("=" * 60)
    logger.debug(f"Configuration: {config.to_dict()}")

    install_signal_handlers()

    try:
        logger.info("STDIO transport ready for MCP client connection")
        # Run the FastMCP server (handles its own event loop)
        mcp.run()
    except Exception as e:
        logger.error(f"Error connecting server: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
