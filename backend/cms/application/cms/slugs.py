from typing import Optional

from flask import current_app
from sqlalchemy import delete, update

from cms.domain.exceptions import InvariantViolation
from cms.domain.values import Slug
from cms.extensions import db
from cms.models.page import PageRecord, PageSlugHistory
from cms.utils.audit import log_action
from cms.utils.dates import now_ts
from cms.utils.transaction import transactional


def update_slug(
    *,
    page,
    new_slug: str,
    actor_id: Optional[int],
):
    """
    Give a page a new last slug segment.

    The current full slug is archived in the slug history first, so old
    links keep resolving to the page. Archiving a slug that is already in
    the history points it at this page again.
    """
    new_slug = (new_slug or "").strip("/")

    if not new_slug or "/" in new_slug:
        raise InvariantViolation(f"`{new_slug}` is not a valid slug segment")

    old_slug = str(page.slug)

    with transactional():
        # 1️⃣ Archive the current slug
        if page.slug.segments:
            db.session.merge(
                PageSlugHistory(
                    slug=old_slug,
                    page_id=page.id,
                    created_at=now_ts(),
                    created_by=actor_id,
                )
            )

        # 2️⃣ Store the new segment
        db.session.execute(
            update(PageRecord)
            .where(PageRecord.id == page.id)
            .values(slug=new_slug)
            .execution_options(synchronize_session=False)
        )

        # 3️⃣ Audit logging
        log_action(
            action="page.slug",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"from": old_slug, "to": new_slug},
        )

    db.session.expire_all()

    if page.slug.segments:
        page.slug = page.slug.with_last_segment(new_slug)
    else:
        page.slug = Slug([new_slug])

    current_app.logger.info("Page %s slug changed from %s to %s", page.id, old_slug, page.slug)

    return page


def remove_historical_slug(*, slug: str) -> bool:
    """Delete one archived slug. Returns whether a row was removed."""
    slug = "/" + (slug or "").lstrip("/")

    with transactional():
        result = db.session.execute(
            delete(PageSlugHistory).where(PageSlugHistory.slug == slug)
        )

    return result.rowcount > 0
