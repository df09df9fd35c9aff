from datetime import datetime

from pydantic import BaseModel


class SearchHistoryResponse(BaseModel):
    word: str
    search_count: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
