# Copyright (c) 2025
# SPDX-License-Identifier: MIT

"""
MCP Router - v1.

Endpoints include:
- /sse - Server-Sent Events stream, one session per connection
- /message - JSON-RPC submit endpoint for an open session
"""

from fastapi import APIRouter

from slides_server.app.mcp.api.v1.mcp import router as mcp_router
from slides_server.core.conf import settings

v1 = APIRouter(prefix=settings.FASTAPI_MCP_PATH, tags=['MCP'])

v1.include_router(mcp_router)

__all__ = ['v1']
