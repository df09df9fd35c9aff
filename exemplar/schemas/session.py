from pydantic import BaseModel

from exemplar.schemas.search import (
    ExamplePhrase,
    ImageResult,
    PaginatedImageResult,
    SearchResult,
)


class SessionSnapshot(BaseModel):
    word: str = ""
    result: SearchResult | None = None
    pagination: PaginatedImageResult | None = None
    explanation: str | None = None
    is_loading: bool = False
    images_loading: bool = False
    exporting: bool = False
    curation_mode: bool = False
    selected_phrases: list[ExamplePhrase] = []
    selected_images: list[ImageResult] = []
    anki_enabled: bool = False
