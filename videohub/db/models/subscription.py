from sqlalchemy import Column, ForeignKey, UniqueConstraint, UUID

from videohub.db.base import BaseModel


class Subscription(BaseModel):
    """Пары (канал, подписчик). Ядро только читает эту таблицу"""

    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("channel_id", "subscriber_id", name="uq_subscription"),
    )

    channel_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    subscriber_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
