from sqlalchemy import Column, String, Text, Integer, ForeignKey, UniqueConstraint, UUID
from sqlalchemy.orm import relationship

from videohub.db.base import BaseModel


class Playlist(BaseModel):
    __tablename__ = "playlists"

    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")

    # Relationships
    owner = relationship("User", back_populates="playlists")
    entries = relationship(
        "PlaylistVideo",
        back_populates="playlist",
        cascade="all, delete-orphan",
        order_by="PlaylistVideo.position",
    )


class PlaylistVideo(BaseModel):
    """Элемент плейлиста; position хранит порядок добавления"""

    __tablename__ = "playlist_videos"
    __table_args__ = (
        UniqueConstraint("playlist_id", "video_id", name="uq_playlist_video"),
    )

    playlist_id = Column(UUID(as_uuid=True), ForeignKey("playlists.id", ondelete="CASCADE"), nullable=False)
    video_id = Column(UUID(as_uuid=True), ForeignKey("videos.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    # Relationships
    playlist = relationship("Playlist", back_populates="entries")
    video = relationship("Video")
