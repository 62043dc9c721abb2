"""Tests for the nested set page loader."""

import pytest

from cms.domain.exceptions import ConfigurationError
from cms.models.page import PageSlugHistory
from cms.pages import Loader, PageOrder, TitleOrder
from cms.users import User
from cms.utils.dates import now_ts
from cms.utils.pagination import Pagination


def test_get_by_id_singular_and_plural(loader, tree) -> None:
    page = loader.get_by_id(tree["blog"])
    pages = loader.get_by_id([tree["about"], tree["contact"], 999])

    assert page.title == "Blog"
    assert list(pages) == [tree["about"], tree["contact"]]
    assert loader.get_by_id(999) is None
    assert loader.get_by_id([]) == {}


def test_slug_is_rebuilt_from_ancestors(loader, tree) -> None:
    post = loader.get_by_id(tree["post"])

    assert str(post.slug) == "/blog/hello-world"
    assert post.slug.last_segment == "hello-world"


def test_homepage_has_root_slug(loader, tree) -> None:
    homepage = loader.get_homepage()

    assert homepage.id == tree["root"]
    assert str(homepage.slug) == "/"
    assert homepage.is_homepage()
    assert loader.get_by_slug(str(homepage.slug)) == homepage


def test_get_by_slug_walks_the_tree(loader, tree) -> None:
    post = loader.get_by_slug("/blog/hello-world")

    assert post.id == tree["post"]
    assert loader.get_parent(post).id == tree["blog"]
    assert loader.get_root(post).id == tree["root"]


def test_get_by_slug_requires_the_full_path(loader, tree) -> None:
    assert loader.get_by_slug("/hello-world", check_history=False) is None
    assert loader.get_by_slug("/about/hello-world", check_history=False) is None
    assert loader.get_by_slug("/about").id == tree["about"]


def test_get_by_slug_falls_back_to_history(session, loader, tree) -> None:
    session.add(PageSlugHistory(slug="/old-about", page_id=tree["about"], created_at=now_ts()))
    session.commit()

    assert loader.get_by_slug("/old-about").id == tree["about"]
    assert loader.get_by_slug("/old-about", check_history=False) is None
    assert loader.check_slug_history("old-about").id == tree["about"]


def test_get_root_of_top_level_page_is_itself(loader, tree) -> None:
    root = loader.get_by_id(tree["root"])

    assert loader.get_root(root) is root
    assert loader.get_parent(root) is None


def test_parent_children_round_trip(loader, tree) -> None:
    for page_id in tree.values():
        page = loader.get_by_id(page_id)
        parent = loader.get_parent(page)
        children = loader.get_children(parent)

        assert page_id in children


def test_children_of_nothing_are_top_level_pages(loader, tree) -> None:
    assert list(loader.get_children(None)) == [tree["root"]]
    assert list(loader.get_top_level()) == [tree["root"]]


def test_children_are_direct_only(loader, tree) -> None:
    root = loader.get_by_id(tree["root"])

    assert list(loader.get_children(root)) == [tree["blog"], tree["about"], tree["contact"]]
    assert root.has_children()
    assert not loader.get_by_id(tree["about"]).has_children()


def test_siblings_exclude_the_page_unless_asked(loader, tree) -> None:
    about = loader.get_by_id(tree["about"])

    siblings = loader.get_siblings(about)
    with_page = loader.get_siblings(about, include_request_page=True)

    assert list(siblings) == [tree["blog"], tree["contact"]]
    assert list(with_page) == [tree["blog"], tree["about"], tree["contact"]]


def test_siblings_of_top_level_pages(make_page, loader, tree) -> None:
    extra = make_page("Landing", 11, 12, 0, slug="landing")
    root = loader.get_by_id(tree["root"])

    assert list(loader.get_siblings(root)) == [extra]


def test_access_is_inherited_from_parent(make_page, loader) -> None:
    parent = make_page("Members", 1, 4, 0, slug="members", access=2, access_groups=["members"])
    child = make_page("Club", 2, 3, 1, slug="club", access=-1)

    page = loader.get_by_id(child)

    assert page.access == 2
    assert page.access_inherited
    assert list(page.access_groups) == ["members"]
    assert not loader.get_by_id(parent).access_inherited


def test_access_without_any_ancestor_is_floored(make_page, loader) -> None:
    orphan = make_page("Loose", 1, 2, 0, slug="loose", access=-100)

    page = loader.get_by_id(orphan)

    assert page.access == 0


def test_unknown_access_groups_are_dropped(make_page, loader) -> None:
    page_id = make_page("Staff", 1, 2, 0, access=300, access_groups=["editors", "ghosts"])

    page = loader.get_by_id(page_id)

    assert list(page.access_groups) == ["editors"]


def test_deleted_pages_are_skipped_by_default(make_page, loader, tree) -> None:
    gone = make_page("Gone", 11, 12, 0, slug="gone", deleted_at=now_ts())

    assert loader.get_by_id(gone) is None
    assert loader.get_by_slug("/gone", check_history=False) is None
    assert loader.include_deleted().get_by_id(gone).authorship.is_deleted()


def test_unpublished_pages(make_page, loader, tree) -> None:
    future = make_page("Soon", 11, 12, 0, slug="soon", publish_at=now_ts() + 3600)
    expired = make_page("Old", 13, 14, 0, slug="old", unpublish_at=now_ts() - 3600)

    assert loader.get_by_id(future).title == "Soon"

    loader.include_unpublished(False)
    assert loader.get_by_id(future) is None
    assert loader.get_by_id(expired) is None
    assert loader.get_by_id(tree["about"]) is not None


def test_unviewable_pages(make_page, groups, page_types, tree) -> None:
    private = make_page("Private", 11, 12, 0, slug="private", access=300, access_groups=["members"])
    guest_loader = Loader(page_types, groups).include_unviewable(False)
    member_loader = Loader(page_types, groups, user=User(7, frozenset({"members"})))
    member_loader.include_unviewable(False)

    assert guest_loader.get_by_id(private) is None
    assert member_loader.get_by_id(private).id == private


def test_get_by_type_and_tag(loader, tree) -> None:
    assert list(loader.get_by_type("PRODUCT")) == [tree["about"]]
    assert list(loader.get_by_tag("news")) == [tree["blog"], tree["post"]]
    assert loader.get_by_tag("missing") == {}


def test_orderings(loader, tree) -> None:
    assert list(loader.order_by(PageOrder.REVERSE).get_all())[0] == tree["contact"]
    assert list(loader.order_by("id_reverse").get_all())[0] == tree["contact"]
    assert list(loader.order_by(TitleOrder()).get_all())[0] == tree["about"]


def test_unknown_ordering_is_a_configuration_error(loader) -> None:
    with pytest.raises(ConfigurationError):
        loader.order_by("alphabetical")


def test_pagination_applies_to_one_query(loader, tree) -> None:
    pagination = Pagination(per_page=2, current_page=2)

    pages = loader.set_pagination(pagination).get_all()

    assert list(pages) == [tree["post"], tree["about"]]
    assert pagination.total == 5
    assert pagination.meta()["total_pages"] == 3
    assert len(loader.get_all()) == 5


def test_search_ranks_title_matches_first(loader, tree) -> None:
    results = loader.get_by_search_terms("hello world blog")

    assert list(results) == [tree["post"], tree["blog"]]


def test_search_min_length_must_be_an_integer(loader, tree) -> None:
    with pytest.raises(ConfigurationError):
        loader.get_by_search_terms("blog", options={"min_length": "3"})


def test_search_ignores_short_terms(loader, tree) -> None:
    assert loader.get_by_search_terms("us") == {}
    assert list(loader.get_by_search_terms("us", options={"min_length": 2})) == [tree["about"]]


def test_search_skips_unpublished_pages(make_page, loader, tree) -> None:
    make_page("Hello later", 11, 12, 0, slug="later", publish_at=now_ts() + 3600)

    assert list(loader.get_by_search_terms("hello")) == [tree["post"]]


def test_get_by_slug_skips_pages_without_a_slug(make_page, loader) -> None:
    make_page("Home", 1, 8, 0)
    make_page("Section", 2, 7, 1, slug="a")
    make_page("Unnamed", 3, 6, 2)
    leaf = make_page("Leaf", 4, 5, 3, slug="b")

    page = loader.get_by_id(leaf)

    assert str(page.slug) == "/a/b"
    assert loader.get_by_slug(str(page.slug), check_history=False) == page
    assert loader.get_by_slug("/b", check_history=False) is None
