from datetime import datetime

import sqlalchemy as sa

from sqlalchemy.orm import Mapped, mapped_column

from slides_server.common.model import Base, TimeZone, id_key
from slides_server.utils.timezone import timezone


class Media(Base):
    """Uploaded image, video or audio file"""

    __tablename__ = 'media'

    id: Mapped[id_key]
    filename: Mapped[str] = mapped_column(sa.String(256), comment='Generated storage filename')
    original_name: Mapped[str] = mapped_column(sa.String(512), comment='Client side filename')
    mime_type: Mapped[str] = mapped_column(sa.String(128), comment='MIME type')
    size: Mapped[int] = mapped_column(sa.BigInteger, comment='Size in bytes')
    url: Mapped[str] = mapped_column(sa.String(512), comment='Public url')
    user_id: Mapped[str] = mapped_column(sa.String(64), default='local', index=True, comment='Owner')
    created_at: Mapped[datetime] = mapped_column(TimeZone, default=timezone.now, comment='Created at')
