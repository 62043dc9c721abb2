from enum import Enum

from cms.models.page import PageRecord


class PageOrder(str, Enum):
    STANDARD = "standard"
    REVERSE = "reverse"
    ID = "id"
    ID_REVERSE = "id_reverse"
    CREATED_DATE = "created_date"
    CREATED_DATE_REVERSE = "created_date_reverse"
    UPDATED_DATE = "updated_date"
    UPDATED_DATE_REVERSE = "updated_date_reverse"


ORDER_CLAUSES = {
    PageOrder.STANDARD: (PageRecord.position_left.asc(),),
    PageOrder.REVERSE: (PageRecord.position_left.desc(),),
    PageOrder.ID: (PageRecord.id.asc(),),
    PageOrder.ID_REVERSE: (PageRecord.id.desc(),),
    PageOrder.CREATED_DATE: (PageRecord.created_at.asc(), PageRecord.id.asc()),
    PageOrder.CREATED_DATE_REVERSE: (PageRecord.created_at.desc(), PageRecord.id.desc()),
    PageOrder.UPDATED_DATE: (PageRecord.updated_at.asc(), PageRecord.id.asc()),
    PageOrder.UPDATED_DATE_REVERSE: (PageRecord.updated_at.desc(), PageRecord.id.desc()),
}


class PageOrderStatement:
    """Custom ordering; ``apply`` receives the page select and returns it ordered."""

    def apply(self, query):
        raise NotImplementedError


class TitleOrder(PageOrderStatement):
    def __init__(self, descending=False):
        self.descending = descending

    def apply(self, query):
        column = PageRecord.title.desc() if self.descending else PageRecord.title.asc()
        return query.order_by(column, PageRecord.position_left.asc())
