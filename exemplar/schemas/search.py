from pydantic import BaseModel, Field, model_validator


class ImageResult(BaseModel):
    id: str
    url: str
    thumbnail: str
    description: str | None = None
    author: str | None = None
    source_url: str | None = None


class ExamplePhrase(BaseModel):
    text: str
    translation: str
    category: str


class PaginatedImageResult(BaseModel):
    images: list[ImageResult] = Field(default_factory=list)
    current_page: int = Field(1, ge=1)
    total_pages: int = Field(1, ge=1)
    has_next: bool = False
    has_previous: bool = False

    @model_validator(mode="after")
    def _check_page_flags(self) -> "PaginatedImageResult":
        if self.has_next != (self.current_page < self.total_pages):
            raise ValueError("has_next must equal current_page < total_pages")
        if self.has_previous != (self.current_page > 1):
            raise ValueError("has_previous must equal current_page > 1")
        return self

    @classmethod
    def build(
        cls, images: list[ImageResult], current_page: int, total_pages: int
    ) -> "PaginatedImageResult":
        total_pages = max(total_pages, current_page, 1)
        return cls(
            images=images,
            current_page=current_page,
            total_pages=total_pages,
            has_next=current_page < total_pages,
            has_previous=current_page > 1,
        )

    @classmethod
    def empty(cls) -> "PaginatedImageResult":
        return cls.build([], 1, 1)


class SearchResult(BaseModel):
    word: str
    images: list[ImageResult]
    phrases: list[ExamplePhrase]


class AggregatedSearch(BaseModel):
    result: SearchResult
    pagination: PaginatedImageResult
    explanation: str | None = None


class SearchRequest(BaseModel):
    word: str


class PageRequest(BaseModel):
    page: int
