from sqlalchemy import Column, String, Text, Integer, Float, Boolean, ForeignKey, UUID
from sqlalchemy.orm import relationship

from videohub.db.base import BaseModel


class Video(BaseModel):
    __tablename__ = "videos"

    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    video_url = Column(String(1024), nullable=False)
    thumbnail_url = Column(String(1024), nullable=False)
    duration = Column(Float, nullable=False, default=0.0)
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)

    # Relationships
    owner = relationship("User", back_populates="videos")
    comments = relationship("Comment", back_populates="video")
