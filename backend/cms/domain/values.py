"""Small value objects carried by a loaded page."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from cms.utils.dates import utcnow


@dataclass(frozen=True)
class DateRange:
    """
    A window of time where either bound may be open.

    A missing start or end means the range is unbounded on that side.
    """
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def is_in_range(self, when: Optional[datetime] = None) -> bool:
        when = when or utcnow()
        if self.start is not None and self.start > when:
            return False
        if self.end is not None and self.end < when:
            return False
        return True

    def get_start(self):
        return self.start

    def get_end(self):
        return self.end


@dataclass
class Authorship:
    created_at: Optional[datetime] = None
    created_by: Optional[int] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = None
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[int] = None

    def create(self, at: datetime, by: Optional[int] = None) -> "Authorship":
        self.created_at = at
        self.created_by = by
        return self

    def update(self, at: datetime, by: Optional[int] = None) -> "Authorship":
        self.updated_at = at
        self.updated_by = by
        return self

    def delete(self, at: datetime, by: Optional[int] = None) -> "Authorship":
        self.deleted_at = at
        self.deleted_by = by
        return self

    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@dataclass(frozen=True)
class Slug:
    segments: List[str] = field(default_factory=list)

    @classmethod
    def from_path(cls, path: str) -> "Slug":
        return cls([part for part in (path or "").strip("/").split("/") if part])

    @property
    def full(self) -> str:
        return "/" + "/".join(self.segments)

    @property
    def last_segment(self) -> Optional[str]:
        return self.segments[-1] if self.segments else None

    def with_last_segment(self, segment: str) -> "Slug":
        return Slug(self.segments[:-1] + [segment])

    def __str__(self) -> str:
        return self.full
