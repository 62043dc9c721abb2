"""Tests for the comment content shape check."""

import pytest

from cms.content.content import Content
from cms.domain.exceptions import InvalidContent, ValidationError
from cms.domain.invariants.comments import assert_comments_content, is_comments_content_valid
from cms.fields import Group
from cms.fields.types import Productoption, Text


def comments_content(allow="allow", permission=None, permission_field=Productoption):
    group = Group("comments")
    group.add(Text("allow_comments").set_value(allow))
    group.add(permission_field("permission").set_value(permission or {"value": "members"}))
    return Content().set("comments", group)


def test_valid_comment_settings() -> None:
    assert is_comments_content_valid(comments_content())
    assert is_comments_content_valid(comments_content(allow="approve"))


def test_missing_comments_group() -> None:
    with pytest.raises(InvalidContent, match="not declared"):
        assert_comments_content(Content())


def test_comments_must_be_a_group() -> None:
    content = Content().set("comments", Text("comments"))

    with pytest.raises(InvalidContent, match="must be a content group"):
        assert_comments_content(content)


def test_disabled_comments() -> None:
    with pytest.raises(InvalidContent, match="disabled"):
        assert_comments_content(comments_content(allow="disabled"))


def test_unknown_comment_setting() -> None:
    with pytest.raises(InvalidContent, match="`sometimes` is invalid"):
        assert_comments_content(comments_content(allow="sometimes"))


def test_permission_must_be_a_multiple_value_field() -> None:
    content = comments_content(permission_field=Text, permission="members")

    with pytest.raises(InvalidContent, match="multiple value field"):
        assert_comments_content(content)


def test_empty_permission() -> None:
    content = comments_content()
    content.get("comments").get("permission").reset()

    assert not is_comments_content_valid(content)


def test_invalid_content_is_a_validation_error() -> None:
    assert issubclass(InvalidContent, ValidationError)
