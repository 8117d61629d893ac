"""Shared router for HTTP tool endpoints."""

from __future__ import annotations

from fastapi import APIRouter

mcp_router = APIRouter()
