from pydantic import BaseModel
from pydantic_settings import BaseSettings


class AnkiSettings(BaseModel):
    enabled: bool = True
    url: str = "http://127.0.0.1:8765"
    api_version: int = 6
    deck_name: str = "Exemplar::Vocabulary"


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///exemplar.db"
    log_level: str = "INFO"

    anthropic_api_key: str = ""
    openai_api_key: str = ""
    llm_provider: str = "anthropic"  # "anthropic" or "openai"
    llm_model: str = "claude-sonnet-4-20250514"

    explanation_language: str = "English"
    phrase_count: int = 6

    image_search_url: str = "https://api.unsplash.com"
    image_search_api_key: str = ""
    images_per_page: int = 6

    http_timeout: float = 30.0

    anki: AnkiSettings = AnkiSettings()

    model_config = {
        "env_prefix": "EXEMPLAR_",
        "env_file": ".env",
        "env_nested_delimiter": "__",
    }


settings = Settings()


def get_settings() -> Settings:
    return settings
