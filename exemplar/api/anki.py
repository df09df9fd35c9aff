import logging

from fastapi import APIRouter, HTTPException

from exemplar.config import settings
from exemplar.schemas.anki import AnkiStatusResponse
from exemplar.services.anki_service import (
    AnkiConnectError,
    check_connection,
    get_deck_names,
    get_model_field_names,
    get_model_names,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/anki", tags=["anki"])


@router.get("/status", response_model=AnkiStatusResponse)
async def anki_status():
    connected = await check_connection() if settings.anki.enabled else False
    return AnkiStatusResponse(
        enabled=settings.anki.enabled,
        connected=connected,
        deck_name=settings.anki.deck_name,
    )


@router.get("/decks", response_model=list[str])
async def list_decks():
    try:
        return await get_deck_names()
    except AnkiConnectError as e:
        logger.exception("Listing decks failed")
        raise HTTPException(status_code=502, detail=f"AnkiConnect error: {e}")


@router.get("/models", response_model=list[str])
async def list_models():
    try:
        return await get_model_names()
    except AnkiConnectError as e:
        logger.exception("Listing note types failed")
        raise HTTPException(status_code=502, detail=f"AnkiConnect error: {e}")


@router.get("/models/{model_name}/fields", response_model=list[str])
async def list_model_fields(model_name: str):
    try:
        return await get_model_field_names(model_name)
    except AnkiConnectError as e:
        logger.exception("Listing fields of %r failed", model_name)
        raise HTTPException(status_code=502, detail=f"AnkiConnect error: {e}")
