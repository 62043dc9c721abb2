from .page import PageRecord, PageAccessGroup, PageTag, PageSlugHistory
from .page_content import PageContentRecord
from .audit_log import AuditLog

__all__ = [
    "AuditLog",
    "PageAccessGroup",
    "PageContentRecord",
    "PageRecord",
    "PageSlugHistory",
    "PageTag",
]
