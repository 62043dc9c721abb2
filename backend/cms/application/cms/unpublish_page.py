from flask import current_app
from sqlalchemy import update

from cms.domain.lifecycle.page import unpublished_range
from cms.extensions import db
from cms.models.page import PageRecord
from cms.utils.audit import log_action
from cms.utils.dates import to_timestamp, utcnow
from cms.utils.transaction import transactional


def unpublish_page(*, page, actor_id=None):
    """Take a page offline as of now; only the publish columns are written."""
    # 1️⃣ Lifecycle transition
    page.publish_date_range = unpublished_range(page.publish_date_range, utcnow())

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
            action="page.unpublish",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"unpublish_at": to_timestamp(page.publish_date_range.get_end())},
        )

    db.session.expire_all()
    current_app.logger.info("Unpublished page %s", page.id)

    return page
