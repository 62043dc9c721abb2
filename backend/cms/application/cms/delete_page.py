from typing import Optional

from sqlalchemy import select

from cms.domain.exceptions import InvariantViolation
from cms.extensions import db
from cms.models.page import PageRecord
from cms.utils.audit import log_action
from cms.utils.dates import to_datetime
from cms.utils.transaction import transactional


def _get_record(page_id):
    record = db.session.execute(
        select(PageRecord).where(PageRecord.id == page_id).with_for_update()
    ).scalar_one_or_none()

    if record is None:
        raise InvariantViolation(f"Page {page_id} does not exist")
    return record


def delete_page(
    *,
    page,
    actor_id: Optional[int],
):
    """
    Soft-delete a page.

    The row keeps its place in the tree so it can be restored; loaders skip
    it unless told to include deleted pages. Deleting a page with live
    children is refused.
    """
    if page.has_children():
        live_children = db.session.execute(
            select(PageRecord.id).where(
                PageRecord.position_left > page.left,
                PageRecord.position_right < page.right,
                PageRecord.deleted_at.is_(None),
            ).limit(1)
        ).scalar()

        if live_children is not None:
            raise InvariantViolation(f"Page {page.id} still has live child pages")

    record = _get_record(page.id)

    with transactional():
        record.soft_delete(actor_id)

        log_action(
            action="page.delete",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"deleted_by": actor_id},
        )

    page.authorship.delete(to_datetime(record.deleted_at), actor_id)
    return page


def restore_page(
    *,
    page,
    actor_id: Optional[int] = None,
):
    """Undo a soft delete."""
    record = _get_record(page.id)

    with transactional():
        record.restore()

        log_action(
            action="page.restore",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
        )

    page.authorship.deleted_at = None
    page.authorship.deleted_by = None
    return page
