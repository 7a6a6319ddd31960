import sqlalchemy as sa

from sqlalchemy.orm import Mapped, mapped_column

from slides_server.common.model import Base, DateTimeMixin, id_key


class AiProviderConfig(Base, DateTimeMixin):
    """Per provider credentials for the local user, the API key is stored encrypted"""

    __tablename__ = 'ai_provider_configs'

    id: Mapped[id_key]
    provider_name: Mapped[str] = mapped_column(sa.String(64), comment='anthropic, openai or gemini')
    api_key_encrypted: Mapped[str] = mapped_column(sa.Text, comment='AES-GCM encrypted API key')
    model: Mapped[str | None] = mapped_column(sa.String(256), default=None, comment='Model override')
    base_url: Mapped[str | None] = mapped_column(sa.String(512), default=None, comment='Alternate API base url')
    user_id: Mapped[str] = mapped_column(sa.String(64), default='local', comment='Owner')

    __table_args__ = (sa.UniqueConstraint('user_id', 'provider_name', name='uq_user_provider'),)
