from itertools import groupby

from flask import current_app
from sqlalchemy import select

from cms.content.content import Content
from cms.extensions import db
from cms.fields.base import MultipleValueField
from cms.fields.group import Group, RepeatableContainer
from cms.models.page_content import PageContentRecord


class ContentLoader:
    """
    Loads the stored content values for a page into a ``Content`` instance
    shaped by the page's type.

    Nothing is cached; every call reads from the database again.
    """

    def __init__(self, field_factory):
        self._field_factory = field_factory

    def load(self, page):
        # Grouped rows sort before ungrouped ones ("" sorts last descending)
        rows = db.session.execute(
            select(PageContentRecord)
            .where(PageContentRecord.page_id == page.id)
            .order_by(
                PageContentRecord.group_name.desc(),
                PageContentRecord.sequence.asc(),
                PageContentRecord.field_name,
                PageContentRecord.data_name,
            )
        ).scalars().all()

        content = Content()
        self._field_factory.build(page.type)

        for name, field in self._field_factory.items():
            if isinstance(field, Group) and field.is_repeatable():
                content.set(name, RepeatableContainer(field))
            else:
                content.set(name, field)

        skipped = 0
        for group_name, group_rows in groupby(rows, key=lambda row: row.group_name or ""):
            for row in group_rows:
                field = self._find_field(content, group_name, row)

                if field is None:
                    skipped += 1
                    continue

                if isinstance(field, MultipleValueField):
                    field.set_value(row.data_name, row.value_string)
                else:
                    field.set_value(row.value_string)

        if skipped:
            current_app.logger.debug(
                "Skipped %d stored content value(s) for page %s not in the `%s` schema",
                skipped, page.id, page.type.get_name(),
            )

        content.set_validator(self._field_factory.get_validator())

        return content

    @staticmethod
    def _find_field(content, group_name, row):
        if not group_name:
            field = content.get(row.field_name)
            return None if isinstance(field, (Group, RepeatableContainer)) else field

        group = content.get(group_name)

        if isinstance(group, RepeatableContainer):
            group = group.get_or_create(row.sequence or 0)

        if not isinstance(group, Group):
            return None

        field = group.get(row.field_name)
        return None if isinstance(field, Group) else field
