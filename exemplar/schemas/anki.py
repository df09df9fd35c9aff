import enum
from typing import Any

from pydantic import BaseModel

from exemplar.schemas.search import ExamplePhrase, ImageResult


class AnkiConnectRequest(BaseModel):
    action: str
    version: int
    params: dict[str, Any] | None = None


class AnkiConnectResponse(BaseModel):
    result: Any = None
    error: str | None = None


class Card(BaseModel):
    word: str
    explanation: str | None = None
    phrase: ExamplePhrase
    image: ImageResult | None = None
    audio_url: str | None = None


class ExportState(str, enum.Enum):
    DONE = "done"
    ABORTED = "aborted"  # deck could not be ensured, nothing submitted


class ExportOutcome(BaseModel):
    success_count: int = 0
    failed_count: int = 0
    state: ExportState = ExportState.DONE


class ExportRequest(BaseModel):
    audio_url: str | None = None


class AnkiStatusResponse(BaseModel):
    enabled: bool
    connected: bool
    deck_name: str
