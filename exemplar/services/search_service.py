import asyncio
import logging

from exemplar.config import settings
from exemplar.database import async_session
from exemplar.schemas.search import AggregatedSearch, PaginatedImageResult, SearchResult
from exemplar.services.history_service import add_search
from exemplar.services.image_service import search_images
from exemplar.services.llm_service import generate_explanation, generate_phrases

logger = logging.getLogger(__name__)


async def record_history(word: str) -> None:
    try:
        async with async_session() as db:
            await add_search(db, word)
    except Exception:
        logger.exception("Failed to record %r in search history", word)


async def search_word(word: str) -> AggregatedSearch | None:
    """Look up images, phrases and an explanation for ``word`` concurrently.

    Each source fails on its own: a failed lookup is logged and replaced by an
    empty fallback so the others still reach the caller. Blank words return
    None without touching anything.
    """
    if not word or not word.strip():
        return None

    await record_history(word)

    images, phrases, explanation = await asyncio.gather(
        search_images(word, page=1, per_page=settings.images_per_page),
        generate_phrases(word),
        generate_explanation(word),
        return_exceptions=True,
    )

    if isinstance(images, BaseException):
        logger.error("Image search failed for %r", word, exc_info=images)
        images = PaginatedImageResult.empty()
    if isinstance(phrases, BaseException):
        logger.error("Phrase generation failed for %r", word, exc_info=phrases)
        phrases = []
    if isinstance(explanation, BaseException):
        logger.error("Explanation generation failed for %r", word, exc_info=explanation)
        explanation = None

    return AggregatedSearch(
        result=SearchResult(word=word, images=images.images, phrases=phrases),
        pagination=images,
        explanation=explanation,
    )
