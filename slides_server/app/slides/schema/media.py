from datetime import datetime

from slides_server.common.schema import SchemaBase


class GetMediaDetail(SchemaBase):
    """Media details"""

    id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    url: str
    user_id: str
    created_at: datetime
