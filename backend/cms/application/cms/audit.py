from cms.signals import page_edited
from cms.utils.audit import log_action
from cms.utils.transaction import transactional


def record_page_edit(sender, event, actor_id=None, **extra):
    """``page_edited`` receiver writing the ``page.update`` audit entry."""
    page = event.page

    with transactional():
        log_action(
            action="page.update",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"title": page.title, "slug": str(page.slug)},
        )


def connect_audit_listener():
    # weak=False: the receiver is a module level function, kept for the process lifetime
    page_edited.connect(record_page_edit, weak=False)
