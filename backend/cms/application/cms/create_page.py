from typing import Optional

from flask import current_app

from cms.domain.invariants.page import assert_page_position
from cms.extensions import db
from cms.models.page import PageRecord
from cms.utils.audit import log_action
from cms.utils.dates import now_ts
from cms.utils.transaction import transactional


def create_page(
    *,
    loader,
    nested_set,
    page_type,
    title: str,
    actor_id: Optional[int],
    parent=None,
):
    """
    Create a new page of ``page_type``.

    The page is appended as the last child of ``parent``, or as the last
    top-level page when no parent is given. Inserting the row and making
    room for it in the tree happen in one transaction.

    Returns the page as loaded by ``loader``.
    """
    if not title:
        raise ValueError("A page title is required")

    record = PageRecord()
    record.title = title
    record.type = page_type.get_name()
    record.created_at = now_ts()
    record.created_by = actor_id
    record.access = current_app.config.get("CMS_DEFAULT_ACCESS", -100)

    with transactional():
        # 1️⃣ Position the page in the tree
        nested_set.insert(record, parent_id=parent.id if parent is not None else None)
        assert_page_position(record.position_left, record.position_right, record.position_depth)

        # 2️⃣ Persist the row
        db.session.add(record)
        db.session.flush()

        # 3️⃣ Audit logging
        log_action(
            action="page.create",
            entity_type="page",
            entity_id=record.id,
            actor_id=actor_id,
            payload={
                "title": title,
                "type": record.type,
                "parent_id": parent.id if parent is not None else None,
            },
        )

    current_app.logger.info(
        "Created page %s (%s) at [%s, %s]",
        record.id, record.type, record.position_left, record.position_right,
    )

    return loader.get_by_id(record.id)
