from exemplar.models.base import Base
from exemplar.models.search_history import SearchHistory

__all__ = ["Base", "SearchHistory"]
