from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from cms.domain.exceptions import NestedSetError
from cms.extensions import db
from cms.utils.audit import log_action
from cms.utils.transaction import transactional


def change_order(*, loader, nested_set, page, nearest_sibling_id=None) -> bool:
    """
    Move a page among its siblings.

    The page is placed directly before ``nearest_sibling_id``, which must
    share its parent; without a sibling it goes to the end of the list.
    Returns ``False`` when the move could not be applied, in which case
    the tree is left as it was.
    """
    if nearest_sibling_id:
        try:
            same_parent = nested_set.parent_id(nearest_sibling_id) == nested_set.parent_id(page.id)
        except NestedSetError as exc:
            current_app.logger.warning("Cannot reorder page %s: %s", page.id, exc)
            return False

        if not same_parent:
            current_app.logger.warning(
                "Cannot reorder page %s next to page %s: they are not siblings",
                page.id, nearest_sibling_id,
            )
            return False

        moved = _move(
            nested_set,
            page.id,
            nearest_sibling_id,
            action="page.reorder",
        )
    else:
        parent_id = None
        if page.depth > 0:
            parent = loader.get_parent(page)
            if parent is None:
                current_app.logger.warning(
                    "Cannot reorder page %s: its parent could not be loaded", page.id
                )
                return False
            parent_id = parent.id

        moved = _move(
            nested_set,
            page.id,
            parent_id,
            as_child=True,
            action="page.reorder",
        )

    return moved


def change_parent(*, nested_set, page_id, new_parent_id=None) -> bool:
    """
    Move a page, with its descendants, to the end of ``new_parent_id``'s
    children. No parent makes it the last top-level page.
    """
    return _move(
        nested_set,
        page_id,
        new_parent_id,
        as_child=True,
        action="page.move",
    )


def _move(nested_set, page_id, target_id, as_child=False, action="page.move") -> bool:
    try:
        nested_set.move(page_id, target_id, as_child=as_child)
    except (NestedSetError, SQLAlchemyError) as exc:
        current_app.logger.warning(
            "Could not move page %s (target %s): %s", page_id, target_id, exc
        )
        return False

    with transactional():
        log_action(
            action=action,
            entity_type="page",
            entity_id=page_id,
            payload={"target_id": target_id, "as_child": as_child},
        )

    db.session.expire_all()
    return True
