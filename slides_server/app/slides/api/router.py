# Copyright (c) 2025
# SPDX-License-Identifier: MIT

"""
Slides API Router - v1.

Endpoints include:
- /presentations/* - Presentation CRUD
- /themes/* - Theme CRUD, default themes are read only
- /layout-rules/* - Layout rule CRUD and slide matching
- /media/* - Media upload and listing
- /uploads/{filename} - Uploaded file serving
- /ai-config/* - AI provider credentials and model listing
- /ai/* - Slide assistant operations
"""

from fastapi import APIRouter

from slides_server.app.slides.api.v1.ai import router as ai_router
from slides_server.app.slides.api.v1.ai_config import router as ai_config_router
from slides_server.app.slides.api.v1.layout_rules import router as layout_rules_router
from slides_server.app.slides.api.v1.media import router as media_router
from slides_server.app.slides.api.v1.media import uploads_router
from slides_server.app.slides.api.v1.presentations import router as presentations_router
from slides_server.app.slides.api.v1.themes import router as themes_router
from slides_server.core.conf import settings

v1 = APIRouter(prefix=settings.FASTAPI_API_PATH)

v1.include_router(presentations_router, prefix='/presentations', tags=['Presentations'])
v1.include_router(themes_router, prefix='/themes', tags=['Themes'])
v1.include_router(layout_rules_router, prefix='/layout-rules', tags=['Layout Rules'])
v1.include_router(media_router, prefix='/media', tags=['Media'])
v1.include_router(uploads_router, prefix='/uploads', tags=['Media'])
v1.include_router(ai_config_router, prefix='/ai-config', tags=['AI Config'])
v1.include_router(ai_router, prefix='/ai', tags=['AI'])

__all__ = ['v1']
