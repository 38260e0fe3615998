"""GraphQL passthrough for MCP adapters"""

import json
from typing import Any, Dict, Optional, Union

from .utils import format_mcp_response
from ..gateway_client import GatewayClient
from ..models.requests import GraphQLRequest, validate_request
from ..models.results import OperationResult
from ..protocol.errors import InvalidParams
from ..utils.decorators import with_error_handling


def parse_variables(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """Decode the JSON `variables` query parameter of graphql:// URIs"""
    if not raw:
        return None
    try:
        variables = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidParams("Error: Invalid JSON in variables parameter") from e
    if not isinstance(variables, dict):
        raise InvalidParams("Error: Invalid JSON in variables parameter")
    return variables


@with_error_handling("Error")
async def execute_graphql(gateway: GatewayClient, query: Optional[str] = None,
                          variables: Optional[Union[Dict[str, Any], str]] = None,
                          operationName: Optional[str] = None) -> OperationResult:
    """Send one GraphQL query to the gateway and return its JSON reply

    variables may be a mapping (tools) or JSON text (graphql:// query strings).
    """
    if isinstance(variables, str):
        variables = parse_variables(variables)
    request = validate_request(GraphQLRequest, query=query, variables=variables,
                               operationName=operationName)
    result = await gateway.graphql(request.query, request.variables, request.operationName)
    return format_mcp_response(result)
