"""HTTP endpoints for the search tool, its schema and the JSON-RPC bridge."""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from checkfor.constants import PARSE_ERROR
from checkfor.errors import McpError, success_response
from checkfor.mcp_router import mcp_router
from checkfor.payload import build_search_request
from checkfor.protocol import error_message, handle_request
from checkfor.scanner import scan_all
from tools.mcp_tools import ToolSchemaError, load_tool_definitions


@mcp_router.get("/tools")
def list_tool_schemas() -> dict[str, Any]:
    """Return the checkfor tool definition in function-calling format."""
    try:
        tools = load_tool_definitions()
    except ToolSchemaError as exc:
        raise McpError(
            "TOOL_SCHEMA_ERROR",
            "Tool definitions could not be loaded.",
            {"error": str(exc)},
        ) from exc
    return success_response({"tools": tools})


@mcp_router.post("/tool:checkfor")
def checkfor(payload: dict[str, Any]) -> dict[str, Any]:
    """Search the requested directories and return the nested result."""
    request = build_search_request(payload)
    result = scan_all(request)
    return success_response(result.to_dict())


@mcp_router.post("/mcp")
async def jsonrpc(request: Request) -> Response:
    """Accept one JSON-RPC message per POST, answered like the stdio loop."""
    body = await request.body()
    try:
        message = json.loads(body)
    except (ValueError, RecursionError):
        return JSONResponse(error_message(None, PARSE_ERROR, "Parse error"))

    response = await run_in_threadpool(handle_request, message)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(response)
