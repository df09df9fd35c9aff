from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from exemplar.models.base import Base, TimestampMixin, generate_uuid


class SearchHistory(Base, TimestampMixin):
    __tablename__ = "search_history"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    word: Mapped[str] = mapped_column(String(500), unique=True, index=True)
    search_count: Mapped[int] = mapped_column(Integer, default=1)
