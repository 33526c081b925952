"""Line-delimited JSON-RPC 2.0 server over stdin/stdout.

Each input line is one request; each response is written as one line.
Requests without an id are notifications and get no response. A failing
call is answered with an error and never stops the loop.

Methods:
    initialize  server name, version and capabilities
    ping        empty result
    tools/list  name, description and input schema of every operation
    tools/call  {"name": ..., "arguments": {...}} -> tool result
"""

import json
import sys
from typing import Any, TextIO

from . import __version__
from .bridge_logging import LogCategory, get_category_logger
from .operations import TOOLS, TokenBridge, ToolArgumentError, call_tool

logger = get_category_logger(LogCategory.SERVER)

SERVER_NAME = "token-bridge"
PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class RPCError(Exception):
    """A JSON-RPC error to send back to the client."""

    def __init__(self, code: int, message: str, data: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


def _error_response(request_id: Any, error: RPCError) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "error": error.to_dict()}


class JSONRPCServer:
    """Dispatches JSON-RPC requests to the token-bridge tools.

    Args:
        bridge: Operations instance; TokenBridge() when omitted.
    """

    def __init__(self, bridge: TokenBridge | None = None):
        self.bridge = bridge or TokenBridge()

    def handle_line(self, line: str) -> dict[str, Any] | None:
        """Handle one request line.

        Returns:
            Response object, or None for notifications and blank lines.
        """
        if not line.strip():
            return None

        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            return _error_response(None, RPCError(PARSE_ERROR, f"Parse error: {e}"))

        return self.handle_request(request)

    def handle_request(self, request: Any) -> dict[str, Any] | None:
        """Handle one decoded request object."""
        if not isinstance(request, dict) or request.get("jsonrpc") != "2.0":
            return _error_response(None, RPCError(INVALID_REQUEST, "Invalid Request"))

        request_id = request.get("id")
        is_notification = "id" not in request
        method = request.get("method")
        if not isinstance(method, str):
            return _error_response(request_id, RPCError(INVALID_REQUEST, "Invalid Request"))

        params = request.get("params") or {}
        logger.debug(f"Request {method}", extra={"request_id": request_id, "operation": method})

        try:
            result = self.dispatch(method, params)
        except RPCError as e:
            logger.error(f"{method} failed: {e.message}", extra={"request_id": request_id})
            return None if is_notification else _error_response(request_id, e)
        except Exception as e:
            logger.exception(f"Unexpected error in {method}", extra={"request_id": request_id})
            error = RPCError(INTERNAL_ERROR, f"Internal error: {e}")
            return None if is_notification else _error_response(request_id, error)

        if is_notification:
            return None
        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def dispatch(self, method: str, params: Any) -> Any:
        """Run a method and return its result.

        Raises:
            RPCError: For unknown methods or invalid params.
        """
        if method == "initialize":
            return {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": {"tools": {}},
            }
        if method == "ping":
            return {}
        if method.startswith("notifications/"):
            return {}
        if method == "tools/list":
            return {"tools": [tool.to_dict() for tool in TOOLS.values()]}
        if method == "tools/call":
            return self._call_tool(params)
        raise RPCError(METHOD_NOT_FOUND, f"Method not found: {method}")

    def _call_tool(self, params: Any) -> dict[str, Any]:
        if not isinstance(params, dict) or not isinstance(params.get("name"), str):
            raise RPCError(INVALID_PARAMS, "tools/call requires a tool name")

        name = params["name"]
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise RPCError(INVALID_PARAMS, "tools/call arguments must be an object")

        try:
            result = call_tool(self.bridge, name, arguments)
        except KeyError:
            raise RPCError(INVALID_PARAMS, f"Unknown tool: {name}") from None
        except ToolArgumentError as e:
            raise RPCError(INVALID_PARAMS, e.message, {"problems": e.problems}) from e

        if result.is_error:
            logger.error(f"Tool {name} returned an error", extra={"operation": name})
        return result.to_dict()

    def serve(self, input_stream: TextIO, output_stream: TextIO) -> None:
        """Read requests until EOF, writing one response line per request."""
        for line in input_stream:
            response = self.handle_line(line)
            if response is None:
                continue
            output_stream.write(json.dumps(response) + "\n")
            output_stream.flush()


def run_server(
    input_stream: TextIO = sys.stdin,
    output_stream: TextIO = sys.stdout,
    bridge: TokenBridge | None = None,
) -> int:
    """Run the JSON-RPC loop on the given streams.

    Returns:
        Exit code (0 on EOF).
    """
    logger.info(f"{SERVER_NAME} {__version__} serving JSON-RPC on stdio")
    JSONRPCServer(bridge).serve(input_stream, output_stream)
    return 0
