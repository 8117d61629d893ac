"""JSON-RPC dispatch for the MCP-style tool protocol."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, TextIO

from checkfor.constants import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    JSONRPC_VERSION,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
    TOOL_NAME,
)
from checkfor.errors import DirectoryListingError, McpError
from checkfor.payload import build_search_request
from checkfor.scanner import scan_all
from tools.mcp_tools import ToolSchemaError, load_tool_definitions, to_mcp_tools

logger = logging.getLogger(__name__)


class RpcError(Exception):
    """A JSON-RPC error to be returned to the caller."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def result_message(request_id: Any, result: Any) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_message(request_id: Any, code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def _initialize(params: Any) -> dict[str, Any]:
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
        "capabilities": {"tools": {"list": True, "call": True}},
    }


def _ping(params: Any) -> dict[str, Any]:
    return {}


def _tools_list(params: Any) -> dict[str, Any]:
    try:
        tools = load_tool_definitions()
    except ToolSchemaError as exc:
        logger.error("tool definitions could not be loaded: %s", exc)
        raise RpcError(INTERNAL_ERROR, "Tool definitions could not be loaded") from exc
    return {"tools": to_mcp_tools(tools)}


def _tools_call(params: Any) -> dict[str, Any]:
    if not isinstance(params, dict):
        raise RpcError(INVALID_PARAMS, "Invalid params")
    name = params.get("name")
    arguments = params.get("arguments")
    if arguments is None:
        arguments = {}
    if not isinstance(name, str) or not isinstance(arguments, dict):
        raise RpcError(INVALID_PARAMS, "Invalid params")
    if name != TOOL_NAME:
        raise RpcError(INVALID_PARAMS, "Unknown tool")

    try:
        request = build_search_request(arguments)
    except McpError as exc:
        raise RpcError(INVALID_PARAMS, exc.error.message) from exc

    try:
        result = scan_all(request)
    except DirectoryListingError as exc:
        raise RpcError(INTERNAL_ERROR, f"Search failed: {exc}") from exc
    except Exception as exc:
        logger.exception("search for %r failed", request.search)
        raise RpcError(INTERNAL_ERROR, f"Search failed: {exc}") from exc

    return {"content": [{"type": "text", "text": dumps(result.to_dict())}]}


METHODS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "initialize": _initialize,
    "ping": _ping,
    "tools/list": _tools_list,
    "tools/call": _tools_call,
}


def handle_request(message: Any) -> dict[str, Any] | None:
    """Dispatch one decoded JSON-RPC message.

    Returns the response object, or None for notifications (no ``id``).
    """
    if not isinstance(message, dict):
        return error_message(None, PARSE_ERROR, "Parse error")

    is_notification = "id" not in message
    request_id = message.get("id")
    method = message.get("method")
    logger.debug("dispatching %r (id=%r)", method, request_id)

    handler = METHODS.get(method) if isinstance(method, str) else None
    if handler is None:
        if is_notification:
            return None
        return error_message(request_id, METHOD_NOT_FOUND, "Method not found")

    try:
        result = handler(message.get("params"))
    except RpcError as exc:
        if is_notification:
            logger.warning("notification %r failed: %s", method, exc.message)
            return None
        return error_message(request_id, exc.code, exc.message)

    if is_notification:
        return None
    return result_message(request_id, result)


def handle_line(line: str) -> dict[str, Any] | None:
    """Decode and dispatch one input line; blank lines are ignored."""
    if not line.strip():
        return None
    try:
        message = json.loads(line)
    except (json.JSONDecodeError, RecursionError):
        return error_message(None, PARSE_ERROR, "Parse error")
    return handle_request(message)


def serve_stdio(stdin: TextIO, stdout: TextIO) -> None:
    """Read requests line by line and answer each before reading the next."""
    for line in stdin:
        response = handle_line(line)
        if response is None:
            continue
        stdout.write(dumps(response) + "\n")
        stdout.flush()
