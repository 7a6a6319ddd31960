import sqlalchemy as sa

from sqlalchemy.orm import Mapped, mapped_column

from slides_server.common.model import Base, DateTimeMixin, id_key


class Presentation(Base, DateTimeMixin):
    """Markdown slide deck, slides are separated by a line holding only ``---``"""

    __tablename__ = 'presentations'

    id: Mapped[id_key]
    title: Mapped[str] = mapped_column(sa.String(512), comment='Title')
    content: Mapped[str] = mapped_column(sa.Text, default='', comment='Markdown content')
    theme: Mapped[str] = mapped_column(sa.String(128), default='default', comment='Theme name')
    user_id: Mapped[str] = mapped_column(sa.String(64), default='local', index=True, comment='Owner')
