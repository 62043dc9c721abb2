from cms.extensions import db
from .base import BaseModel
from .soft_delete_mixin import SoftDeleteMixin

class PageRecord(BaseModel, SoftDeleteMixin):
    """
    One row of the page tree.

    Only the last slug segment is stored; the full path is rebuilt from the
    ancestors when a page is loaded.
    """
    __tablename__ = "page"

    title = db.Column(db.String(255), nullable=False)
    type = db.Column(db.String(100), nullable=False, index=True)
    slug = db.Column(db.String(255), nullable=True, index=True)

    # Nested set coordinates
    position_left = db.Column(db.Integer, nullable=False, default=0, index=True)
    position_right = db.Column(db.Integer, nullable=False, default=0, index=True)
    position_depth = db.Column(db.Integer, nullable=False, default=0, index=True)

    publish_at = db.Column(db.Integer, nullable=True)
    unpublish_at = db.Column(db.Integer, nullable=True)

    created_by = db.Column(db.Integer, nullable=True)
    updated_at = db.Column(db.Integer, nullable=True)
    updated_by = db.Column(db.Integer, nullable=True)

    meta_title = db.Column(db.String(255), nullable=True)
    meta_description = db.Column(db.Text, nullable=True)
    meta_html_head = db.Column(db.Text, nullable=True)
    meta_html_foot = db.Column(db.Text, nullable=True)

    visibility_search = db.Column(db.Boolean, nullable=False, default=True)
    visibility_menu = db.Column(db.Boolean, nullable=False, default=True)
    visibility_aggregator = db.Column(db.Boolean, nullable=False, default=True)

    password = db.Column(db.String(255), nullable=True)
    access = db.Column(db.Integer, nullable=False, default=-100)

    comment_enabled = db.Column(db.Boolean, nullable=False, default=False)
    comment_access = db.Column(db.Integer, nullable=True)
    comment_access_groups = db.Column(db.String(255), nullable=True)
    comment_approval = db.Column(db.Boolean, nullable=False, default=False)
    comment_expiry = db.Column(db.Integer, nullable=True)

    __table_args__ = (
        db.Index("idx_page_position", "position_left", "position_right", "position_depth"),
    )


class PageAccessGroup(db.Model):
    __tablename__ = "page_access_group"

    page_id = db.Column(db.Integer, db.ForeignKey("page.id"), primary_key=True)
    group_name = db.Column(db.String(100), primary_key=True)


class PageTag(db.Model):
    __tablename__ = "page_tag"

    page_id = db.Column(db.Integer, db.ForeignKey("page.id"), primary_key=True)
    tag_name = db.Column(db.String(100), primary_key=True, index=True)


class PageSlugHistory(db.Model):
    __tablename__ = "page_slug_history"

    # A historical slug points at exactly one page; archiving it again replaces the row
    slug = db.Column(db.String(255), primary_key=True)
    page_id = db.Column(db.Integer, db.ForeignKey("page.id"), nullable=False, index=True)
    created_at = db.Column(db.Integer, nullable=False)
    created_by = db.Column(db.Integer, nullable=True)
