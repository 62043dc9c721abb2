from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from cms.domain.values import Authorship, DateRange, Slug
from cms.utils.dates import utcnow


@dataclass(eq=False)
class Page:
    """
    A loaded page.

    Built by the page loader from a ``page`` row; ``slug``, ``access`` and
    ``access_groups`` hold the resolved values (full path, inherited access)
    rather than what is stored on the row.
    """
    id: Optional[int] = None
    title: Optional[str] = None
    type: Any = None
    slug: Slug = field(default_factory=Slug)
    publish_date_range: DateRange = field(default_factory=DateRange)
    authorship: Authorship = field(default_factory=Authorship)
    tags: List[str] = field(default_factory=list)

    left: int = 0
    right: int = 0
    depth: int = 0

    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_html_head: Optional[str] = None
    meta_html_foot: Optional[str] = None

    visibility_search: bool = True
    visibility_menu: bool = True
    visibility_aggregator: bool = True

    password: Optional[str] = None
    access: int = 0
    access_groups: Dict[str, Any] = field(default_factory=dict)
    # Set by the loader when access was resolved from an ancestor; never stored
    access_inherited: bool = False

    comments_enabled: bool = False
    comments_access: Optional[int] = None
    comments_access_groups: Optional[str] = None
    comments_approval: bool = False
    comments_expiry: Optional[int] = None

    def __eq__(self, other):
        if not isinstance(other, Page):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self):
        return hash((Page, self.id))

    def get_type(self):
        return self.type

    def is_homepage(self) -> bool:
        return str(self.slug) == "/"

    def has_children(self) -> bool:
        return (self.right - self.left) > 1

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def set_tags(self, tags) -> "Page":
        self.tags = list(dict.fromkeys(tags))
        return self

    def set_published(self, publish: bool = True) -> None:
        now = utcnow()
        if publish:
            self.publish_date_range = DateRange(now)
        else:
            self.publish_date_range = DateRange(now, now)

    def set_password(self, password: Optional[str]) -> None:
        self.password = generate_password_hash(password) if password else None

    def check_password(self, password: str) -> bool:
        if not self.password:
            return True
        return check_password_hash(self.password, password)
