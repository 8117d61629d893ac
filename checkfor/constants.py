"""Shared constants for the search engine and its front-ends."""

from __future__ import annotations

SERVER_NAME = "checkfor"
SERVER_VERSION = "1.0.0"
TOOL_NAME = "checkfor"
PROTOCOL_VERSION = "2024-11-05"
JSONRPC_VERSION = "2.0"

DEFAULT_DIRS = (".",)

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

SERVICE_TOKEN_HEADER = "X-Checkfor-Service-Token"
AUTH_EXEMPT_PATHS = {"/health"}

UPDATE_CACHE_FILENAME = "update-check.json"
UPDATE_CACHE_TTL_SECONDS = 24 * 60 * 60
