"""Shared fixtures for tests."""

import pytest

from cms import create_app
from cms.extensions import db
from cms.models.page import PageAccessGroup, PageRecord, PageTag
from cms.page_types import PageType, PageTypeCollection
from cms.pages import Loader
from cms.users import Group, GroupCollection
from cms.utils.dates import now_ts


class BlankPage(PageType):
    name = "blank"


class ProductPage(PageType):
    name = "product"

    def set_fields(self, factory):
        factory.add_field("text", "price", "Price").required()
        factory.add_field("richtext", "description", "Description")
        factory.add_field("link", "more", "More information")

        images = factory.add_group("images", "Images").set_repeatable(True, min=1, max=3)
        images.add(factory.get_field("file", "image", "Image"))
        images.add(factory.get_field("text", "caption", "Caption"))

        comments = factory.add_group("comments", "Comments")
        comments.add(factory.get_field("text", "allow_comments", "Allow comments"))
        comments.add(factory.get_field("productoption", "permission", "Who may comment"))


@pytest.fixture
def app():
    """Return an application bound to a fresh in-memory database."""
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def page_types():
    return PageTypeCollection([BlankPage(), ProductPage()])


@pytest.fixture
def groups():
    return GroupCollection([Group("editors"), Group("members")])


@pytest.fixture
def loader(app, page_types, groups):
    return Loader(page_types, groups)


@pytest.fixture
def make_page(session):
    """Insert a page row directly, bypassing the writer."""

    def _make_page(title, left, right, depth, slug=None, **columns):
        access_groups = columns.pop("access_groups", ())
        tags = columns.pop("tags", ())

        columns.setdefault("type", "blank")
        columns.setdefault("access", 0)
        columns.setdefault("created_at", now_ts())

        record = PageRecord(
            title=title,
            slug=slug,
            position_left=left,
            position_right=right,
            position_depth=depth,
            **columns,
        )
        session.add(record)
        session.flush()

        for name in access_groups:
            session.add(PageAccessGroup(page_id=record.id, group_name=name))
        for tag in tags:
            session.add(PageTag(page_id=record.id, tag_name=tag))

        session.commit()
        return record.id

    return _make_page


@pytest.fixture
def tree(make_page):
    """
    root (1, 10)
    ├── blog (2, 5)
    │   └── hello-world (3, 4)
    ├── about (6, 7)
    └── contact (8, 9)
    """
    return {
        "root": make_page("Home", 1, 10, 0),
        "blog": make_page("Blog", 2, 5, 1, slug="blog", tags=["news"]),
        "post": make_page("Hello world", 3, 4, 2, slug="hello-world", access=-100, tags=["news", "intro"]),
        "about": make_page("About us", 6, 7, 1, slug="about", type="product"),
        "contact": make_page("Contact", 8, 9, 1, slug="contact"),
    }
