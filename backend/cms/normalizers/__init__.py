from .content import normalize_content
from .page import normalize_page
from .pagination import normalize_pagination

__all__ = ["normalize_content", "normalize_page", "normalize_pagination"]
