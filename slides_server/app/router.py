from fastapi import APIRouter

from slides_server.app.mcp.api.router import v1 as mcp_v1
from slides_server.app.slides.api.router import v1 as slides_v1

router = APIRouter()

router.include_router(slides_v1)
router.include_router(mcp_v1)
