import enum

from sqlalchemy import Column, Enum, ForeignKey, Index, UniqueConstraint, UUID
from sqlalchemy.orm import relationship

from videohub.db.base import BaseModel


class LikeTarget(str, enum.Enum):
    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


class Like(BaseModel):
    """Лайк: тегированная ссылка (target_kind, target_id) вместо трех nullable колонок"""

    __tablename__ = "likes"
    __table_args__ = (
        UniqueConstraint("liked_by", "target_kind", "target_id", name="uq_likes_actor_target"),
        Index("ix_likes_target", "target_kind", "target_id"),
    )

    liked_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    target_kind = Column(
        Enum(LikeTarget, name="like_target", values_callable=lambda kinds: [k.value for k in kinds]),
        nullable=False,
    )
    target_id = Column(UUID(as_uuid=True), nullable=False)

    # Relationships
    user = relationship("User")
