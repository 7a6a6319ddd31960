import sqlalchemy as sa

from sqlalchemy.orm import Mapped, mapped_column

from slides_server.common.model import Base, DateTimeMixin, id_key


class LayoutRule(Base, DateTimeMixin):
    """Condition, transform and stylesheet triple used to auto-arrange slides

    ``conditions`` and ``transform`` hold serialized JSON and are decoded at the
    storage boundary by the layout rule schemas.
    """

    __tablename__ = 'layout_rules'

    id: Mapped[id_key]
    name: Mapped[str] = mapped_column(sa.String(128), unique=True, comment='Unique rule name')
    display_name: Mapped[str] = mapped_column(sa.String(256), comment='Display name')
    description: Mapped[str | None] = mapped_column(sa.Text, default=None, comment='Description')
    priority: Mapped[int] = mapped_column(default=100, index=True, comment='Lower is checked first')
    enabled: Mapped[bool] = mapped_column(default=True, comment='Participates in matching')
    is_default: Mapped[bool] = mapped_column(default=False, comment='Seeded built-in rule')
    user_id: Mapped[str | None] = mapped_column(sa.String(64), default=None, comment='Owner, null for built-ins')
    conditions: Mapped[str] = mapped_column(sa.Text, comment='Conditions JSON')
    transform: Mapped[str] = mapped_column(sa.Text, comment='Transform JSON')
    css_content: Mapped[str] = mapped_column(sa.Text, default='', comment='Raw stylesheet')
