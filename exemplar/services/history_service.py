from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from exemplar.models.search_history import SearchHistory


async def add_search(db: AsyncSession, word: str) -> SearchHistory:
    word = word.strip()
    result = await db.execute(select(SearchHistory).where(SearchHistory.word == word))
    entry = result.scalar_one_or_none()
    if entry is None:
        entry = SearchHistory(word=word)
        db.add(entry)
    else:
        entry.search_count += 1
    await db.commit()
    await db.refresh(entry)
    return entry


async def list_searches(db: AsyncSession, limit: int = 50) -> list[SearchHistory]:
    result = await db.execute(
        select(SearchHistory).order_by(SearchHistory.updated_at.desc()).limit(limit)
    )
    return list(result.scalars().all())


async def clear_searches(db: AsyncSession) -> int:
    result = await db.execute(delete(SearchHistory))
    await db.commit()
    return result.rowcount
