"""Domain model for GitHub Discussions.

All entities are frozen dataclasses built fresh from each API response.
They are never cached or mutated after construction, so two values built
from the same raw node compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class Author:
    login: str
    avatar_url: str | None = None


@dataclass(frozen=True)
class Category:
    id: str
    name: str


@dataclass(frozen=True)
class Comment:
    id: str
    author: Author
    body: str
    created_at: datetime
    url: str


@dataclass(frozen=True)
class Discussion:
    """A discussion as returned by list queries.

    ``comment_count`` is the remote total, not the number of comments
    materialized anywhere. ``category`` is None when the remote reported none.
    """

    id: str
    number: int
    title: str
    author: Author
    created_at: datetime
    updated_at: datetime
    comment_count: int
    url: str
    locked: bool
    category: Category | None = None


@dataclass(frozen=True)
class DiscussionDetail(Discussion):
    """A discussion with its body and the first page of comments.

    ``comments`` keeps server order (oldest first) and is capped at the
    client's comment limit; compare ``len(comments)`` with ``comment_count``
    to detect truncation.
    """

    body: str = ""
    comments: tuple[Comment, ...] = field(default_factory=tuple)

    @property
    def truncated(self) -> bool:
        return len(self.comments) < self.comment_count


@dataclass(frozen=True)
class DiscussionOrder:
    # Passed to the API verbatim: CREATED_AT | UPDATED_AT, ASC | DESC.
    field: str = "UPDATED_AT"
    direction: str = "DESC"

    def as_variables(self) -> dict:
        return {"field": self.field, "direction": self.direction}


@dataclass(frozen=True)
class ListOptions:
    first: int = DEFAULT_PAGE_SIZE
    after: str | None = None
    order_by: DiscussionOrder = field(default_factory=DiscussionOrder)
