from .create_page import create_page
from .delete_page import delete_page, restore_page
from .move_page import change_order, change_parent
from .publish_page import publish_page
from .save_content import save_content
from .slugs import remove_historical_slug, update_slug
from .unpublish_page import unpublish_page
from .update_page import save_page

__all__ = [
    "change_order",
    "change_parent",
    "create_page",
    "delete_page",
    "publish_page",
    "remove_historical_slug",
    "restore_page",
    "save_content",
    "save_page",
    "unpublish_page",
    "update_slug",
]
