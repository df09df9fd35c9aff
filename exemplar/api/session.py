from fastapi import APIRouter, Depends, HTTPException, status

from exemplar.schemas.anki import ExportOutcome, ExportRequest
from exemplar.schemas.search import PageRequest, SearchRequest
from exemplar.schemas.session import SessionSnapshot
from exemplar.session import (
    AnkiDisabledError,
    EmptySelectionError,
    ExportInProgressError,
    SelectionIndexError,
    SessionController,
    get_controller,
)

router = APIRouter(tags=["session"])


@router.get("/session", response_model=SessionSnapshot)
async def get_session(controller: SessionController = Depends(get_controller)):
    return controller.snapshot()


@router.post("/search", response_model=SessionSnapshot)
async def search(
    body: SearchRequest,
    controller: SessionController = Depends(get_controller),
):
    """Fetch images, phrases and an explanation for a word."""
    return await controller.search(body.word)


@router.post("/search/page", response_model=SessionSnapshot)
async def change_page(
    body: PageRequest,
    controller: SessionController = Depends(get_controller),
):
    await controller.change_page(body.page)
    return controller.snapshot()


@router.post("/curation/toggle", response_model=SessionSnapshot)
async def toggle_curation(controller: SessionController = Depends(get_controller)):
    return controller.toggle_curation_mode()


@router.post("/curation/phrases/{index}", response_model=SessionSnapshot)
async def toggle_phrase(
    index: int,
    controller: SessionController = Depends(get_controller),
):
    try:
        return controller.toggle_phrase(index)
    except SelectionIndexError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/curation/images/{index}", response_model=SessionSnapshot)
async def toggle_image(
    index: int,
    controller: SessionController = Depends(get_controller),
):
    try:
        return controller.toggle_image(index)
    except SelectionIndexError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/curation/export", response_model=ExportOutcome)
async def export(
    body: ExportRequest | None = None,
    controller: SessionController = Depends(get_controller),
):
    audio_url = body.audio_url if body else None
    try:
        return await controller.export_selection(audio_url=audio_url)
    except AnkiDisabledError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except EmptySelectionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ExportInProgressError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
