from pydantic import BaseModel


class AnkiSettingsView(BaseModel):
    enabled: bool
    deck_name: str


class AppSettings(BaseModel):
    """Public view of the settings; API keys are never exposed."""

    anki: AnkiSettingsView
    images_per_page: int
    llm_provider: str
    llm_model: str
    explanation_language: str
