from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from exemplar.database import get_db
from exemplar.schemas.history import SearchHistoryResponse
from exemplar.services.history_service import clear_searches, list_searches

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=list[SearchHistoryResponse])
async def get_history(
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    return await list_searches(db, limit)


@router.delete("")
async def delete_history(db: AsyncSession = Depends(get_db)):
    removed = await clear_searches(db)
    return {"removed": removed}
