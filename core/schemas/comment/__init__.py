"""Comment schemas."""

from core.schemas.comment.comment_detail import CommentDetail
from core.schemas.comment.comment_request import (
    CommentCreateRequest,
    CommentUpdateRequest,
)

__all__ = ["CommentCreateRequest", "CommentDetail", "CommentUpdateRequest"]
