from videohub.domains.comments.schemas import CommentBase, CommentCreate, CommentUpdate, CommentView

__all__ = ["CommentBase", "CommentCreate", "CommentUpdate", "CommentView"]
