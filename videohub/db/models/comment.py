from sqlalchemy import Column, Text, ForeignKey, UUID
from sqlalchemy.orm import relationship

from videohub.db.base import BaseModel


class Comment(BaseModel):
    __tablename__ = "comments"

    video_id = Column(UUID(as_uuid=True), ForeignKey("videos.id"), nullable=False, index=True)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    video = relationship("Video", back_populates="comments")
    owner = relationship("User")
