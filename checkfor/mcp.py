"""HTTP handler registration."""

# ruff: noqa: F401

from __future__ import annotations

from fastapi import FastAPI

from checkfor.mcp_router import mcp_router

# Importing the endpoint module registers its routes with the shared router.
from checkfor import mcp_search

# Re-export endpoints for tests and direct imports.
from checkfor.mcp_search import checkfor, list_tool_schemas


def register_mcp_handlers(app: FastAPI) -> None:
    """Attach tool routes to the FastAPI application."""
    app.include_router(mcp_router)
