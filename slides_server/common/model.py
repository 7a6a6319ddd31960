import uuid

from datetime import datetime
from datetime import timezone as dt_timezone
from typing import Annotated

import sqlalchemy as sa

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from slides_server.utils.timezone import timezone


def uuid4_str() -> str:
    """String uuid4 used for every primary key"""
    return str(uuid.uuid4())


class TimeZone(sa.TypeDecorator[datetime]):
    """Timezone aware datetime stored as UTC, SQLite drops tzinfo on the way back"""

    impl = sa.DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: sa.Dialect) -> datetime | None:
        if value is None:
            return None
        return timezone.aware(value).astimezone(dt_timezone.utc)

    def process_result_value(self, value: datetime | None, dialect: sa.Dialect) -> datetime | None:
        if value is None:
            return None
        return timezone.aware(value)


# Generic string uuid primary key
id_key = Annotated[
    str,
    mapped_column(sa.String(36), primary_key=True, default=uuid4_str, sort_order=-999, comment='Primary key id'),
]


class DateTimeMixin:
    """Created / updated timestamps"""

    created_at: Mapped[datetime] = mapped_column(TimeZone, default=timezone.now, sort_order=999, comment='Created at')
    updated_at: Mapped[datetime] = mapped_column(
        TimeZone, default=timezone.now, onupdate=timezone.now, sort_order=999, comment='Updated at'
    )


class Base(DeclarativeBase):
    """Declarative base for every table"""
