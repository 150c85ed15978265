from __future__ import annotations

from common.mongo.types import BaseDocument, from_object_id

from ...models.bookmark import Bookmark


class BookmarkDocument(BaseDocument):
    """MongoDB bookmarks 컬렉션 도큐먼트 모델."""

    bookmarked_by: str
    bookmarked_tuit: str

    @classmethod
    def from_domain(cls, bookmark: Bookmark) -> "BookmarkDocument":
        data = {
            "bookmarked_by": bookmark.bookmarked_by,
            "bookmarked_tuit": bookmark.bookmarked_tuit,
            "created_at": bookmark.created_at,
            "updated_at": bookmark.created_at,
        }
        return cls.model_validate(data)

    def to_domain(self) -> Bookmark:
        return Bookmark(
            id=from_object_id(self.id),
            bookmarked_by=self.bookmarked_by,
            bookmarked_tuit=self.bookmarked_tuit,
            created_at=self.created_at,
        )
