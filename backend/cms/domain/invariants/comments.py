from cms.domain.exceptions import InvalidContent
from cms.fields.base import Field, MultipleValueField
from cms.fields.group import Group

COMMENTS = "comments"
ALLOW_COMMENTS = "allow_comments"
PERMISSION = "permission"

ALLOW = "allow"
APPROVE = "approve"
DISABLED = "disabled"


def assert_comments_content(content):
    """
    Check that page content carries everything needed to take comments.

    The content needs a ``comments`` group holding an ``allow_comments``
    field set to ``allow`` or ``approve`` and a ``permission`` multiple
    value field with at least one value.
    """
    group = content.get(COMMENTS)

    if group is None:
        raise InvalidContent(f"`{COMMENTS}` group not declared on the page content")

    if not isinstance(group, Group):
        raise InvalidContent(
            f"`{COMMENTS}` must be a content group, `{type(group).__name__}` given"
        )

    _assert_enabling_options(group)
    _assert_access_options(group)


def is_comments_content_valid(content) -> bool:
    try:
        assert_comments_content(content)
    except InvalidContent:
        return False
    return True


def _assert_enabling_options(group):
    allow = group.get(ALLOW_COMMENTS)

    if allow is None:
        raise InvalidContent(f"Option for `{ALLOW_COMMENTS}` not defined")

    if not isinstance(allow, Field):
        raise InvalidContent(f"`{ALLOW_COMMENTS}` must be a single value field")

    value = allow.get_value()

    if value == DISABLED:
        raise InvalidContent("Comments are disabled for this page")

    if value not in (ALLOW, APPROVE):
        raise InvalidContent(f"Comment setting `{value}` is invalid")


def _assert_access_options(group):
    permission = group.get(PERMISSION)

    if permission is None:
        raise InvalidContent(f"Option for `{PERMISSION}` not set")

    if not isinstance(permission, MultipleValueField):
        raise InvalidContent(f"`{PERMISSION}` must be a multiple value field")

    if not any(permission.get_value().values()):
        raise InvalidContent(f"`{PERMISSION}` is not determined")
