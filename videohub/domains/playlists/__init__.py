from videohub.domains.playlists.schemas import (
    PlaylistBase, PlaylistCreate, PlaylistUpdate, PlaylistVideoItem, PlaylistSummary, PlaylistView
)

__all__ = [
    "PlaylistBase", "PlaylistCreate", "PlaylistUpdate", "PlaylistVideoItem",
    "PlaylistSummary", "PlaylistView"
]
