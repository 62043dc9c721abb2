import re

from sqlalchemy import select

from cms.extensions import db
from cms.models.page import PageRecord
from cms.models.page_content import PageContentRecord


class Searcher:
    """
    Ranks pages against a set of search terms.

    Each term scores a page by where it appears: in the title, in the slug
    or in any stored content value. Pages are ranked by total score, ties
    broken by page id.
    """

    TITLE_SCORE = 3
    SLUG_SCORE = 2
    CONTENT_SCORE = 1

    def __init__(self, min_term_length=3):
        self._min_term_length = min_term_length
        self._terms = []
        self._ranking = None

    def set_min_term_length(self, length):
        self._min_term_length = length
        self._ranking = None
        return self

    def set_terms(self, terms):
        if isinstance(terms, str):
            terms = re.split(r"[\s,]+", terms)
        self._terms = [term.strip() for term in terms if term and term.strip()]
        self._ranking = None
        return self

    def get_terms(self):
        return [term for term in self._terms if len(term) >= self._min_term_length]

    def get_ids(self):
        if self._ranking is None:
            self._ranking = self._rank()
        return list(self._ranking)

    def get_sorted(self, pages):
        """Order a ``{page_id: page}`` mapping by this searcher's ranking."""
        ranking = {page_id: position for position, page_id in enumerate(self.get_ids())}
        ordered = sorted(pages.items(), key=lambda item: ranking.get(item[0], len(ranking)))
        return dict(ordered)

    def _rank(self):
        scores = {}

        for term in self.get_terms():
            pattern = f"%{term}%"

            for column, score in (
                (PageRecord.title, self.TITLE_SCORE),
                (PageRecord.slug, self.SLUG_SCORE),
            ):
                for page_id in db.session.execute(
                    select(PageRecord.id).where(column.ilike(pattern))
                ).scalars():
                    scores[page_id] = scores.get(page_id, 0) + score

            for page_id in db.session.execute(
                select(PageContentRecord.page_id)
                .where(PageContentRecord.value_string.ilike(pattern))
                .distinct()
            ).scalars():
                scores[page_id] = scores.get(page_id, 0) + self.CONTENT_SCORE

        ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
        return [page_id for page_id, _ in ranked]
