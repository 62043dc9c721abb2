from flask import current_app

from cms.services.searcher import Searcher

from .loader import Loader
from .order import PageOrder, PageOrderStatement, TitleOrder


def create_loader(page_types, groups, user=None, authorisation=None):
    """A ``Loader`` whose searcher uses the configured minimum term length."""
    searcher = Searcher(current_app.config.get("CMS_SEARCH_MIN_TERM_LENGTH", 3))
    return Loader(
        page_types,
        groups,
        authorisation=authorisation,
        user=user,
        searcher=searcher,
    )


__all__ = ["Loader", "PageOrder", "PageOrderStatement", "TitleOrder", "create_loader"]
