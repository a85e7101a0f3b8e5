from sqlalchemy import Column, Text, ForeignKey, UUID
from sqlalchemy.orm import relationship

from videohub.db.base import BaseModel


class Tweet(BaseModel):
    __tablename__ = "tweets"

    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="tweets")
