from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from videohub.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    username = Column(String(100), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False, default="")
    avatar_url = Column(String(1024), nullable=False, default="")

    # Relationships
    videos = relationship("Video", back_populates="owner")
    tweets = relationship("Tweet", back_populates="owner")
    playlists = relationship("Playlist", back_populates="owner")
