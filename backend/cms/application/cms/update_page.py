from typing import Optional

from flask import current_app
from sqlalchemy import delete, update

from cms.domain.exceptions import InvariantViolation
from cms.domain.values import Authorship
from cms.extensions import db
from cms.models.page import PageAccessGroup, PageRecord, PageTag
from cms.services.authorisation import Authorisation
from cms.signals import PageEvent, page_edited
from cms.utils.dates import now_ts, to_datetime, to_timestamp
from cms.utils.transaction import transactional


def save_page(
    *,
    page,
    actor_id: Optional[int],
):
    """
    Persist every editable column of a loaded page.

    Responsibilities:
    - Stamp the update authorship
    - Write scalar and metadata columns in one update
    - Replace the access group and tag rows
    - Notify ``page_edited`` listeners

    A page whose access was inherited keeps inheriting: the inherit
    sentinel is stored and its own access group rows are left untouched.
    Clear ``access_inherited`` to give the page access of its own.

    Nested set coordinates are left alone; only the tree mutations move
    pages. Returns the page carried by the event, which listeners may
    have replaced.
    """
    if page.id is None:
        raise InvariantViolation("Cannot save a page that has not been created")

    now = now_ts()

    with transactional():
        # 1️⃣ Update authorship
        authorship = page.authorship or Authorship()
        authorship.update(to_datetime(now), actor_id)
        page.authorship = authorship

        # 2️⃣ Scalar columns
        result = db.session.execute(
            update(PageRecord)
            .where(PageRecord.id == page.id)
            .values(
                title=page.title,
                type=page.type.get_name() if page.type is not None else None,
                publish_at=to_timestamp(page.publish_date_range.get_start()),
                unpublish_at=to_timestamp(page.publish_date_range.get_end()),
                updated_at=now,
                updated_by=actor_id,
                meta_title=page.meta_title,
                meta_description=page.meta_description,
                meta_html_head=page.meta_html_head,
                meta_html_foot=page.meta_html_foot,
                visibility_search=bool(page.visibility_search),
                visibility_menu=bool(page.visibility_menu),
                visibility_aggregator=bool(page.visibility_aggregator),
                password=page.password,
                access=Authorisation.INHERIT if page.access_inherited else page.access,
                comment_enabled=bool(page.comments_enabled),
                comment_access=page.comments_access,
                comment_access_groups=page.comments_access_groups,
                comment_approval=bool(page.comments_approval),
                comment_expiry=page.comments_expiry,
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            raise InvariantViolation(f"Page {page.id} does not exist")

        # 3️⃣ Access groups, unless they came from an ancestor
        if not page.access_inherited:
            db.session.execute(delete(PageAccessGroup).where(PageAccessGroup.page_id == page.id))
            for name in page.access_groups:
                db.session.add(PageAccessGroup(page_id=page.id, group_name=name))

        # 4️⃣ Tags
        db.session.execute(delete(PageTag).where(PageTag.page_id == page.id))
        for tag in dict.fromkeys(page.tags):
            db.session.add(PageTag(page_id=page.id, tag_name=tag))

    db.session.expire_all()
    current_app.logger.debug("Saved page %s", page.id)

    # 5️⃣ Notify listeners
    event = PageEvent(page)
    page_edited.send(current_app._get_current_object(), event=event, actor_id=actor_id)

    return event.page
