from sqlalchemy import delete

from cms.extensions import db
from cms.fields.base import MultipleValueField
from cms.fields.group import Group, RepeatableContainer
from cms.models.page_content import PageContentRecord
from cms.utils.audit import log_action
from cms.utils.transaction import transactional


def save_content(*, page, content, actor_id=None, validate=True):
    """
    Replace the stored content of a page with the values held by ``content``.

    Rows are written in the shape the content loader reads them back:
    ungrouped fields with an empty group name, grouped fields under their
    group, repeatable groups with one sequence per instance and multiple
    value fields with one row per value key.
    """
    if validate:
        content.validate()

    rows = []
    for name, slot in content:
        if isinstance(slot, RepeatableContainer):
            for sequence, group in enumerate(slot):
                rows.extend(_group_rows(page.id, group, name, sequence))
        elif isinstance(slot, Group):
            rows.extend(_group_rows(page.id, slot, name, 0))
        else:
            rows.extend(_field_rows(page.id, slot, "", 0))

    with transactional():
        db.session.execute(
            delete(PageContentRecord).where(PageContentRecord.page_id == page.id)
        )
        db.session.add_all(rows)

        log_action(
            action="page.content",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"values": len(rows)},
        )

    return len(rows)


def _group_rows(page_id, group, group_name, sequence):
    for field in group:
        if isinstance(field, Group):
            continue
        yield from _field_rows(page_id, field, group_name, sequence)


def _field_rows(page_id, field, group_name, sequence):
    if isinstance(field, MultipleValueField):
        for key, value in field.get_value().items():
            if value is None:
                continue
            yield PageContentRecord(
                page_id=page_id,
                field_name=field.get_name(),
                group_name=group_name,
                sequence=sequence,
                data_name=key,
                value_string=str(value),
            )
        return

    value = field.get_value()
    if value is None:
        return

    yield PageContentRecord(
        page_id=page_id,
        field_name=field.get_name(),
        group_name=group_name,
        sequence=sequence,
        data_name="",
        value_string=str(value),
    )
