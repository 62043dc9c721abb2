from flask import current_app
from sqlalchemy import update

from cms.domain.lifecycle.page import published_range
from cms.extensions import db
from cms.models.page import PageRecord
from cms.utils.audit import log_action
from cms.utils.dates import to_timestamp, utcnow
from cms.utils.transaction import transactional


def publish_page(*, page, actor_id=None):
    """
    Publish a page from now on.

    Only the two publish columns are written; anything else changed on
    ``page`` still needs a ``save_page``.
    """
    # 1️⃣ Lifecycle transition
    page.publish_date_range = published_range(page.publish_date_range, utcnow())

    with transactional():
        # 2️⃣ Persist the window
        db.session.execute(
            update(PageRecord)
            .where(PageRecord.id == page.id)
            .values(
                publish_at=to_timestamp(page.publish_date_range.get_start()),
                unpublish_at=to_timestamp(page.publish_date_range.get_end()),
            )
            .execution_options(synchronize_session=False)
        )

        # 3️⃣ Audit logging
        log_action(
            action="page.publish",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={
                "publish_at": to_timestamp(page.publish_date_range.get_start()),
                "unpublish_at": to_timestamp(page.publish_date_range.get_end()),
            },
        )

    db.session.expire_all()
    current_app.logger.info("Published page %s", page.id)

    return page
