"""Tests for the plain data normalizers."""

from cms.content.loader import ContentLoader
from cms.fields import Factory
from cms.normalizers import normalize_content, normalize_page, normalize_pagination
from cms.utils.pagination import Pagination


def test_normalize_page_public_view(loader, tree) -> None:
    data = normalize_page(loader.get_by_id(tree["post"]))

    assert data["slug"] == "/blog/hello-world"
    assert data["type"] == "blank"
    assert data["tags"] == ["intro", "news"]
    assert "access" not in data


def test_normalize_page_admin_view(loader, tree) -> None:
    data = normalize_page(loader.get_by_id(tree["post"]), admin=True)

    assert data["position"] == {"left": 3, "right": 4, "depth": 2}
    assert data["access"] == 0
    assert data["access_inherited"] is True
    assert data["password_protected"] is False


def test_normalize_content(loader, tree) -> None:
    content = ContentLoader(Factory()).load(loader.get_by_id(tree["about"]))
    content.get("price").set_value("10.00")

    data = normalize_content(content)

    assert data["price"] == "10.00"
    assert data["images"] == []
    assert data["comments"] == {"allow_comments": None, "permission": {}}


def test_normalize_pagination_from_loader(loader, tree) -> None:
    pagination = Pagination(per_page=2)
    pages = loader.set_pagination(pagination).get_all()

    data = normalize_pagination(pages, lambda page: page.id, pagination=pagination)

    assert data["items"] == [tree["root"], tree["blog"]]
    assert data["pagination"] == {"page": 1, "per_page": 2, "total": 5, "total_pages": 3}


def test_normalize_pagination_offsets() -> None:
    data = normalize_pagination([1, 2], lambda item: {"n": item}, page=1, per_page=2, total=3)

    assert data["pagination"]["total_pages"] == 2
