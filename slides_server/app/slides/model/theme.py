import sqlalchemy as sa

from sqlalchemy.orm import Mapped, mapped_column

from slides_server.common.model import Base, DateTimeMixin, id_key


class Theme(Base, DateTimeMixin):
    """Slide stylesheet selectable by name"""

    __tablename__ = 'themes'

    id: Mapped[id_key]
    name: Mapped[str] = mapped_column(sa.String(128), unique=True, comment='Unique theme name')
    display_name: Mapped[str] = mapped_column(sa.String(256), comment='Display name')
    css_content: Mapped[str] = mapped_column(sa.Text, comment='Raw stylesheet')
    is_default: Mapped[bool] = mapped_column(default=False, comment='Seeded built-in theme')
    center_content: Mapped[bool] = mapped_column(default=True, comment='Vertically center slide content')
    user_id: Mapped[str | None] = mapped_column(sa.String(64), default=None, comment='Owner, null for built-ins')
