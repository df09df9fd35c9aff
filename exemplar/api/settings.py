from fastapi import APIRouter, Depends

from exemplar.config import Settings, get_settings
from exemplar.schemas.settings import AnkiSettingsView, AppSettings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=AppSettings)
async def read_settings(current: Settings = Depends(get_settings)):
    return AppSettings(
        anki=AnkiSettingsView(
            enabled=current.anki.enabled,
            deck_name=current.anki.deck_name,
        ),
        images_per_page=current.images_per_page,
        llm_provider=current.llm_provider,
        llm_model=current.llm_model,
        explanation_language=current.explanation_language,
    )
