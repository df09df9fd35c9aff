import logging

import httpx

from exemplar.config import settings
from exemplar.schemas.search import ImageResult, PaginatedImageResult

logger = logging.getLogger(__name__)


class ImageSearchError(Exception):
    pass


def _to_image(item: dict) -> ImageResult:
    urls = item.get("urls") or {}
    user = item.get("user") or {}
    links = item.get("links") or {}
    return ImageResult(
        id=str(item.get("id", "")),
        url=urls.get("regular") or urls.get("full") or "",
        thumbnail=urls.get("small") or urls.get("thumb") or urls.get("regular") or "",
        description=item.get("alt_description") or item.get("description"),
        author=user.get("name"),
        source_url=links.get("html"),
    )


async def search_images(
    word: str, page: int = 1, per_page: int | None = None
) -> PaginatedImageResult:
    """Search photos for ``word`` and return one page of results."""
    per_page = per_page or settings.images_per_page
    params = {"query": word, "page": page, "per_page": per_page}
    headers = {
        "Authorization": f"Client-ID {settings.image_search_api_key}",
        "Accept-Version": "v1",
    }
    try:
        async with httpx.AsyncClient(
            base_url=settings.image_search_url, timeout=settings.http_timeout
        ) as client:
            response = await client.get("/search/photos", params=params, headers=headers)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise ImageSearchError(
            f"Image search failed: {e.response.status_code} {e.response.text[:200]}"
        ) from e
    except httpx.HTTPError as e:
        raise ImageSearchError(f"Image search request failed: {e}") from e

    data = response.json()
    images = [_to_image(item) for item in data.get("results", [])]
    total_pages = int(data.get("total_pages") or 1)
    logger.debug("Image search %r page %d: %d images", word, page, len(images))
    return PaginatedImageResult.build(images, page, total_pages)
