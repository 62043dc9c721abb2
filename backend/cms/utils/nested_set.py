# cms/utils/nested_set.py
from flask import current_app
from sqlalchemy import func, select, update

from cms.domain.exceptions import InvariantViolation, NestedSetError
from cms.domain.invariants.page import assert_tree
from cms.extensions import db
from cms.models.page import PageRecord
from cms.utils.transaction import transactional


class NestedSet:
    """
    Renumbers the ``page`` nested set when pages are inserted or moved.

    Every move runs in one transaction: the subtree being moved is lifted
    out (its coordinates negated), the gap it leaves is closed, a gap is
    opened at the destination and the subtree is dropped into it. The whole
    tree is checked before commit, so a failed move leaves nothing behind.
    """

    def __init__(self, verify=True):
        self._verify = verify

    # -------------------------------------------------
    # Insert
    # -------------------------------------------------

    def insert(self, record, parent_id=None):
        """
        Position ``record`` as the last child of ``parent_id``, or as the
        last top-level page when no parent is given.

        Does not commit; call inside the caller's transaction.
        """
        if parent_id:
            parent = self._position(parent_id)
            if parent is None:
                raise NestedSetError(
                    f"Cannot insert under page {parent_id}: page not found",
                    target_id=parent_id,
                )
            new_left = parent.position_right
            depth = parent.position_depth + 1
            self._shift(new_left, 2)
        else:
            new_left = self._max_right() + 1
            depth = 0

        record.position_left = new_left
        record.position_right = new_left + 1
        record.position_depth = depth
        return record

    # -------------------------------------------------
    # Move
    # -------------------------------------------------

    def move(self, page_id, target_id, as_child=False, add_after=False):
        """
        Move a page, with all its descendants.

        - ``as_child``: becomes the last child of ``target_id`` (or the last
          top-level page if ``target_id`` is falsy)
        - ``add_after``: placed directly after sibling ``target_id``
        - otherwise: placed directly before sibling ``target_id``
        """
        try:
            with transactional():
                self._move(page_id, target_id, as_child, add_after)
        finally:
            db.session.expire_all()

    def _move(self, page_id, target_id, as_child, add_after):
        node = self._position(page_id, for_update=True)
        if node is None:
            raise NestedSetError(f"Page {page_id} not found", page_id=page_id)

        left, right, depth = node.position_left, node.position_right, node.position_depth
        width = right - left + 1

        if target_id:
            target = self._position(target_id, for_update=True)
            if target is None:
                raise NestedSetError(
                    f"Target page {target_id} not found", page_id=page_id, target_id=target_id
                )
            if left <= target.position_left <= right:
                raise NestedSetError(
                    f"Cannot move page {page_id} relative to itself or one of its descendants",
                    page_id=page_id,
                    target_id=target_id,
                )
        elif not as_child:
            raise NestedSetError(
                "A sibling to move next to is required", page_id=page_id
            )

        # 1️⃣ Lift the subtree out of the tree
        self._execute(
            update(PageRecord)
            .where(PageRecord.position_left.between(left, right))
            .values(
                position_left=-PageRecord.position_left,
                position_right=-PageRecord.position_right,
            )
        )

        # 2️⃣ Close the gap it left
        self._shift(right + 1, -width)

        # 3️⃣ Work out the destination against the closed-up tree
        if as_child and not target_id:
            new_left = self._max_right() + 1
            new_depth = 0
        else:
            target = self._position(target_id)
            if as_child:
                new_left = target.position_right
                new_depth = target.position_depth + 1
            elif add_after:
                new_left = target.position_right + 1
                new_depth = target.position_depth
            else:
                new_left = target.position_left
                new_depth = target.position_depth

        # 4️⃣ Open a gap at the destination
        self._shift(new_left, width)

        # 5️⃣ Drop the subtree into the gap
        offset = new_left - left
        self._execute(
            update(PageRecord)
            .where(PageRecord.position_left < 0)
            .values(
                position_left=-PageRecord.position_left + offset,
                position_right=-PageRecord.position_right + offset,
                position_depth=PageRecord.position_depth + (new_depth - depth),
            )
        )

        if self._verify:
            try:
                self.verify()
            except InvariantViolation as exc:
                raise NestedSetError(
                    f"Moving page {page_id} would corrupt the page tree: {exc}",
                    page_id=page_id,
                    target_id=target_id,
                ) from exc

        current_app.logger.debug(
            "Moved page %s from [%s, %s] to [%s, %s] at depth %s",
            page_id, left, right, new_left, new_left + width - 1, new_depth,
        )

    def verify(self):
        rows = db.session.execute(
            select(
                PageRecord.id,
                PageRecord.position_left,
                PageRecord.position_right,
                PageRecord.position_depth,
            )
        ).all()
        assert_tree(tuple(row) for row in rows)

    def parent_id(self, page_id):
        """Id of the page directly containing ``page_id``; ``None`` for top-level pages."""
        node = self._position(page_id)
        if node is None:
            raise NestedSetError(f"Page {page_id} not found", page_id=page_id)

        return db.session.execute(
            select(PageRecord.id).where(
                PageRecord.position_left < node.position_left,
                PageRecord.position_right > node.position_right,
                PageRecord.position_depth == node.position_depth - 1,
            )
        ).scalar()

    # -------------------------------------------------
    # Helpers
    # -------------------------------------------------

    def _position(self, page_id, for_update=False):
        query = select(
            PageRecord.position_left,
            PageRecord.position_right,
            PageRecord.position_depth,
        ).where(PageRecord.id == page_id)
        if for_update:
            query = query.with_for_update()
        return db.session.execute(query).first()

    def _max_right(self):
        return db.session.execute(
            select(func.coalesce(func.max(PageRecord.position_right), 0))
        ).scalar()

    def _shift(self, from_position, delta):
        """Shift every coordinate at or after ``from_position`` by ``delta``."""
        self._execute(
            update(PageRecord)
            .where(PageRecord.position_left >= from_position)
            .values(position_left=PageRecord.position_left + delta)
        )
        self._execute(
            update(PageRecord)
            .where(PageRecord.position_right >= from_position)
            .values(position_right=PageRecord.position_right + delta)
        )

    @staticmethod
    def _execute(statement):
        db.session.execute(statement.execution_options(synchronize_session=False))
