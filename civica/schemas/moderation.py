"""Pydantic schemas for the moderation queue."""
from datetime import datetime
from enum import Enum
from urllib.parse import urlencode
from uuid import UUID

from pydantic import BaseModel

from civica.schemas.comment import ActionLink
from civica.schemas.user import UserPublic


class QueueFilter(str, Enum):
    PENDING_REVIEW = "pending_review"
    REVIEWED = "reviewed"
    ALL = "all"

    @classmethod
    def parse(cls, value: str | None) -> "QueueFilter":
        """Unknown or missing values fall back to pending_review."""
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING_REVIEW


FILTER_LABELS = {
    QueueFilter.ALL: "All",
    QueueFilter.PENDING_REVIEW: "Pending",
    QueueFilter.REVIEWED: "Reviewed",
}


class QueueViewState(BaseModel):
    """Filter and page a moderator is looking at. Only the HTTP layer turns it into query params."""

    filter: QueueFilter = QueueFilter.PENDING_REVIEW
    page: int = 1

    model_config = {"frozen": True}

    @classmethod
    def from_query(cls, filter: str | None = None, page: int | str | None = None) -> "QueueViewState":
        try:
            page_number = int(page) if page is not None else 1
        except (TypeError, ValueError):
            page_number = 1
        return cls(filter=QueueFilter.parse(filter), page=max(page_number, 1))

    def to_query(self) -> dict[str, str]:
        return {"filter": self.filter.value, "page": str(self.page)}

    def href(self, path: str) -> str:
        return f"{path}?{urlencode(self.to_query())}"

    def with_filter(self, queue_filter: QueueFilter) -> "QueueViewState":
        return QueueViewState(filter=queue_filter, page=1)

    def with_page(self, page: int) -> "QueueViewState":
        return QueueViewState(filter=self.filter, page=page)


class MenuLink(BaseModel):
    label: str
    filter: QueueFilter
    href: str


class CommentableRef(BaseModel):
    type: str = "debate"
    id: UUID
    title: str
    href: str


class QueueRow(BaseModel):
    id: UUID
    body: str
    commentable: CommentableRef
    flags_count: int
    status: str  # "Pending" or "Reviewed"
    user: UserPublic | None = None
    created_at: datetime
    actions: list[ActionLink] = []


class QueuePage(BaseModel):
    filter: QueueFilter
    page: int
    per_page: int
    total: int
    total_pages: int
    menu: list[MenuLink]
    comments: list[QueueRow]
    prev_page_href: str | None = None
    next_page_href: str | None = None
