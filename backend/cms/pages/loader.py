import copy
from collections.abc import Iterable

from flask import current_app
from sqlalchemy import and_, exists, func, or_, select
from sqlalchemy.orm import aliased

from cms.domain.exceptions import ConfigurationError
from cms.domain.page import Page
from cms.domain.values import Authorship, DateRange, Slug
from cms.extensions import db
from cms.models.page import PageAccessGroup, PageRecord, PageSlugHistory, PageTag
from cms.pages.order import ORDER_CLAUSES, PageOrder, PageOrderStatement
from cms.services.authorisation import Authorisation
from cms.services.searcher import Searcher
from cms.users import AnonymousUser
from cms.utils.dates import now_ts, to_datetime


class Loader:
    """
    Loads pages from the ``page`` nested set and returns prepared ``Page``
    instances.

    Usage::

        loader = Loader(page_types, groups)

        page = loader.get_by_id(1)                    # Page or None
        pages = loader.get_by_id([1, 2, 3])           # {id: Page}

        # deleted pages are skipped unless asked for
        page = loader.include_deleted(True).get_by_id(3)

        page = loader.get_by_slug("/blog/hello-world")
        children = loader.get_children(page)
        siblings = loader.get_siblings(page)

    Singular lookups return ``None`` when nothing matches; plural lookups
    return a dict keyed by page id, ordered by the current ordering.
    """

    def __init__(
        self,
        page_types,
        groups,
        authorisation=None,
        user=None,
        searcher=None,
    ):
        self._page_types = page_types
        self._groups = groups
        self._authorisation = authorisation or Authorisation()
        self._user = user or AnonymousUser()
        self._searcher = searcher or Searcher()

        self._load_deleted = False
        self._load_unpublished = True
        self._load_unviewable = True
        self._order = PageOrder.STANDARD
        self._pagination = None

    # -------------------------------------------------
    # Options
    # -------------------------------------------------

    def include_deleted(self, flag=True):
        self._load_deleted = bool(flag)
        return self

    def include_unpublished(self, flag=True):
        self._load_unpublished = bool(flag)
        return self

    def include_unviewable(self, flag=True):
        self._load_unviewable = bool(flag)
        return self

    def order_by(self, order):
        if isinstance(order, PageOrderStatement):
            self._order = order
            return self

        try:
            self._order = PageOrder(order)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown page ordering `{order}`") from exc

        return self

    def set_pagination(self, pagination):
        """Paginate the next query only."""
        self._pagination = pagination
        return self

    def set_user(self, user):
        self._user = user
        return self

    # -------------------------------------------------
    # Lookups
    # -------------------------------------------------

    def get_by_id(self, page_ids):
        plural = isinstance(page_ids, Iterable) and not isinstance(page_ids, (str, bytes))
        ids = list(page_ids) if plural else [page_ids]

        if not ids:
            return {}

        return self._load(self._base_query().where(PageRecord.id.in_(ids)), plural)

    def get_homepage(self):
        """The left-most live top-level page."""
        page_id = db.session.execute(
            select(PageRecord.id)
            .where(
                PageRecord.deleted_at.is_(None),
                PageRecord.position_depth == 0,
            )
            .order_by(PageRecord.position_left)
            .limit(1)
        ).scalar()

        return self.get_by_id(page_id) if page_id is not None else None

    def get_by_slug(self, slug, check_history=True):
        slug = str(slug)
        path = slug.strip("/")

        if not path:
            return self.get_homepage()

        # Only the last segment of a slug is stored, so match each segment
        # against a chain of ancestors, innermost first. Pages without a slug
        # add no segment, so each level is the nearest slugged ancestor.
        parts = path.split("/")[::-1]
        levels = [aliased(PageRecord, name=f"level{i + 1}") for i in range(len(parts))]
        leaf, outermost = levels[0], levels[-1]

        query = select(leaf.id).where(
            leaf.slug == parts[0],
            leaf.deleted_at.is_(None),
        )

        for i in range(1, len(parts)):
            level, inner = levels[i], levels[i - 1]
            between = aliased(PageRecord, name=f"between{i}")
            query = query.join(
                level,
                and_(
                    level.position_left < inner.position_left,
                    level.position_right > inner.position_right,
                ),
            ).where(
                level.slug == parts[i],
                level.deleted_at.is_(None),
                ~exists().where(
                    between.position_left > level.position_left,
                    between.position_right < level.position_right,
                    between.position_left < inner.position_left,
                    between.position_right > inner.position_right,
                    _has_slug(between),
                ),
            )

        # The outermost segment must start the path: no ancestor above it
        # contributes a segment of its own
        ancestor = aliased(PageRecord, name="ancestor")
        query = query.where(
            ~exists().where(
                ancestor.position_left < outermost.position_left,
                ancestor.position_right > outermost.position_right,
                _has_slug(ancestor),
            )
        )

        page_id = db.session.execute(query.order_by(leaf.position_left).limit(1)).scalar()

        if page_id is not None:
            return self.get_by_id(page_id)

        if check_history:
            current_app.logger.debug("No live page at `%s`, checking slug history", slug)
            return self.check_slug_history(slug)

        return None

    def check_slug_history(self, slug):
        slug = "/" + str(slug).lstrip("/")

        page_id = db.session.execute(
            select(PageSlugHistory.page_id).where(PageSlugHistory.slug == slug)
        ).scalar()

        return self.get_by_id(page_id) if page_id is not None else None

    def get_parent(self, page):
        if page.depth <= 0:
            return None

        page_id = db.session.execute(
            select(PageRecord.id)
            .where(
                PageRecord.position_left < page.left,
                PageRecord.position_right > page.left,
                PageRecord.position_depth == page.depth - 1,
            )
            .limit(1)
        ).scalar()

        return self.get_by_id(page_id) if page_id is not None else None

    def get_root(self, page):
        if page.depth == 0:
            return page

        page_id = db.session.execute(
            select(PageRecord.id)
            .where(
                PageRecord.position_left < page.left,
                PageRecord.position_right > page.right,
                PageRecord.position_depth == 0,
            )
            .limit(1)
        ).scalar()

        return self.get_by_id(page_id) if page_id is not None else None

    def get_by_type(self, page_type):
        name = page_type.get_name() if hasattr(page_type, "get_name") else str(page_type)

        return self._load(
            self._base_query().where(func.lower(PageRecord.type) == name.lower()),
            plural=True,
        )

    def get_by_tag(self, tag):
        tagged = select(PageTag.page_id).where(PageTag.tag_name == tag)

        return self._load(
            self._base_query().where(PageRecord.id.in_(tagged)),
            plural=True,
        )

    def get_all(self):
        return self._load(self._base_query(), plural=True)

    def get_top_level(self):
        return self.get_children(None)

    def get_by_search_terms(self, terms, page=1, options=None):
        """
        Pages matching ``terms``, best match first.

        Options:
        - ``min_length``: shortest term to search for (integer)
        - ``per_page``: slice the ranked results to ``page``
        """
        options = options or {}
        min_length = options.get("min_length")

        if min_length:
            if not isinstance(min_length, int) or isinstance(min_length, bool):
                raise ConfigurationError("`min_length` option must be an integer")
            self._searcher.set_min_term_length(min_length)

        self._searcher.set_terms(terms)
        ids = self._searcher.get_ids()

        if not ids:
            return {}

        results = {
            page_id: result
            for page_id, result in self.get_by_id(ids).items()
            if self._authorisation.is_viewable(result, self._user)
            and self._authorisation.is_published(result)
        }

        results = self._searcher.get_sorted(results)

        per_page = options.get("per_page")
        if per_page:
            start = (max(page, 1) - 1) * per_page
            results = dict(list(results.items())[start:start + per_page])

        return results

    def get_children(self, page=None):
        if page is None:
            # Children of the virtual root are the top-level pages
            query = self._base_query().where(PageRecord.position_depth == 0)
        else:
            query = self._base_query().where(
                PageRecord.position_left > page.left,
                PageRecord.position_right < page.right,
                PageRecord.position_depth == page.depth + 1,
            )

        return self._load(query, plural=True)

    def get_siblings(self, page, include_request_page=False):
        if page.depth == 0:
            # Top-level pages have no parent range to join against
            query = self._base_query().where(
                PageRecord.position_depth == 0,
                PageRecord.id != page.id,
            )
        else:
            parent = aliased(PageRecord, name="parent")
            query = (
                self._base_query()
                .join(
                    parent,
                    and_(
                        PageRecord.position_left > parent.position_left,
                        PageRecord.position_right < parent.position_right,
                    ),
                )
                .where(
                    parent.position_left < page.left,
                    parent.position_right > page.right,
                    parent.position_depth == page.depth - 1,
                    PageRecord.position_depth == page.depth,
                    PageRecord.id != page.id,
                )
            )

        pages = self._load(query, plural=True)

        if include_request_page:
            pages[page.id] = page
            if self._order in (PageOrder.STANDARD, PageOrder.REVERSE):
                pages = dict(sorted(
                    pages.items(),
                    key=lambda item: item[1].left,
                    reverse=self._order is PageOrder.REVERSE,
                ))

        return pages

    # -------------------------------------------------
    # Query building
    # -------------------------------------------------

    def _base_query(self):
        query = select(PageRecord)

        if not self._load_deleted:
            query = query.where(PageRecord.deleted_at.is_(None))

        if not self._load_unpublished:
            now = now_ts()
            query = query.where(
                or_(PageRecord.publish_at.is_(None), PageRecord.publish_at <= now),
                or_(PageRecord.unpublish_at.is_(None), PageRecord.unpublish_at >= now),
            )

        return self._order_query(query)

    def _order_query(self, query):
        if isinstance(self._order, PageOrderStatement):
            return self._order.apply(query)

        return query.order_by(*ORDER_CLAUSES[self._order])

    def _load(self, query, plural):
        if self._pagination is not None:
            pagination, self._pagination = self._pagination, None
            query = pagination.apply(db.session, query)

        records = db.session.execute(query).scalars().unique().all()

        if not records:
            return {} if plural else None

        pages = self._load_pages(records)

        if plural:
            return pages

        if not pages:
            return None

        return next(iter(pages.values())) if len(pages) == 1 else pages

    # -------------------------------------------------
    # Materialisation
    # -------------------------------------------------

    def _load_pages(self, records):
        ids = [record.id for record in records]
        access_groups = self._access_group_names(ids)
        tags = self._tag_names(ids)
        homepage_left = self._min_position_left()

        pages = {}

        for record in records:
            # 1️⃣ Deleted pages
            if record.deleted_at and not self._load_deleted:
                continue

            page = Page(
                id=record.id,
                title=record.title,
                left=record.position_left,
                right=record.position_right,
                depth=record.position_depth,
                meta_title=record.meta_title,
                meta_description=record.meta_description,
                meta_html_head=record.meta_html_head,
                meta_html_foot=record.meta_html_foot,
                password=record.password,
                comments_enabled=bool(record.comment_enabled),
                comments_access=record.comment_access,
                comments_access_groups=record.comment_access_groups,
                comments_approval=bool(record.comment_approval),
                comments_expiry=record.comment_expiry,
            )

            # 2️⃣ Visibility flags
            page.visibility_search = bool(record.visibility_search)
            page.visibility_menu = bool(record.visibility_menu)
            page.visibility_aggregator = bool(record.visibility_aggregator)

            # 3️⃣ Publish window
            page.publish_date_range = DateRange(
                to_datetime(record.publish_at),
                to_datetime(record.unpublish_at),
            )

            # 4️⃣ Unpublished pages
            if not self._load_unpublished and not self._authorisation.is_published(page):
                continue

            # 5️⃣ Page type, one copy per page as types can hold schema state
            page.type = copy.copy(self._page_types.get(record.type))

            # 6️⃣ Slug; the left-most page is the homepage and always lives at "/"
            if record.position_left == homepage_left:
                page.slug = Slug([])
            else:
                page.slug = self._build_slug(record)

            # 7️⃣ Authorship
            page.authorship = self._build_authorship(record)

            # 8️⃣ Access, inherited from the nearest ancestor that sets one
            access = record.access
            group_names = access_groups.get(record.id, [])
            check_left, check_depth = record.position_left, record.position_depth

            while access is not None and access < 0:
                parent = db.session.execute(
                    select(
                        PageRecord.id,
                        PageRecord.access,
                        PageRecord.position_left,
                        PageRecord.position_depth,
                    ).where(
                        PageRecord.position_left < check_left,
                        PageRecord.position_right > check_left,
                        PageRecord.position_depth == check_depth - 1,
                    )
                ).first()

                if parent is None:
                    break

                access = parent.access
                group_names = self._access_group_names([parent.id]).get(parent.id, [])
                check_left, check_depth = parent.position_left, parent.position_depth
                page.access_inherited = True

            if page.access_inherited:
                current_app.logger.debug(
                    "Page %s inherits access %s", record.id, access
                )

            page.access = max(0, access or 0)

            # 9️⃣ Access groups; names the directory does not know are dropped
            page.access_groups = {}
            for name in group_names:
                group = self._groups.get(name.strip())
                if group is not None:
                    page.access_groups[group.get_name()] = group

            page.tags = tags.get(record.id, [])

            # 🔟 Pages the current user cannot view
            if not self._load_unviewable and not self._authorisation.is_viewable(page, self._user):
                continue

            pages[page.id] = page

        return pages

    def _build_slug(self, record):
        ancestors = db.session.execute(
            select(PageRecord.slug)
            .where(
                PageRecord.position_left < record.position_left,
                PageRecord.position_right > record.position_right,
            )
            .order_by(PageRecord.position_depth.asc())
        ).scalars().all()

        return Slug([segment for segment in (*ancestors, record.slug) if segment])

    @staticmethod
    def _build_authorship(record):
        authorship = Authorship()

        if record.created_at:
            authorship.create(to_datetime(record.created_at), record.created_by)

        if record.updated_at:
            authorship.update(to_datetime(record.updated_at), record.updated_by)

        if record.deleted_at:
            authorship.delete(to_datetime(record.deleted_at), record.deleted_by)

        return authorship

    @staticmethod
    def _access_group_names(page_ids):
        names = {}
        rows = db.session.execute(
            select(PageAccessGroup.page_id, PageAccessGroup.group_name)
            .where(PageAccessGroup.page_id.in_(page_ids))
            .order_by(PageAccessGroup.group_name)
        ).all()

        for page_id, group_name in rows:
            names.setdefault(page_id, []).append(group_name)
        return names

    @staticmethod
    def _tag_names(page_ids):
        tags = {}
        rows = db.session.execute(
            select(PageTag.page_id, PageTag.tag_name)
            .where(PageTag.page_id.in_(page_ids))
            .order_by(PageTag.tag_name)
        ).all()

        for page_id, tag_name in rows:
            tags.setdefault(page_id, []).append(tag_name)
        return tags

    @staticmethod
    def _min_position_left():
        return db.session.execute(
            select(func.min(PageRecord.position_left)).where(PageRecord.deleted_at.is_(None))
        ).scalar()


def _has_slug(record):
    return and_(record.slug.is_not(None), record.slug != "")
