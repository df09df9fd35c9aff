from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select

from exemplar.models.search_history import SearchHistory
from exemplar.schemas.search import PaginatedImageResult
from exemplar.services.image_service import ImageSearchError
from exemplar.services.llm_service import LLMResponseError
from exemplar.services.search_service import search_word
from tests.conftest import make_images, make_phrases


@pytest.fixture
def sources():
    with (
        patch("exemplar.services.search_service.search_images", new_callable=AsyncMock) as images,
        patch("exemplar.services.search_service.generate_phrases", new_callable=AsyncMock) as phrases,
        patch("exemplar.services.search_service.generate_explanation", new_callable=AsyncMock) as explanation,
    ):
        images.return_value = PaginatedImageResult.build(make_images(6), 1, 4)
        phrases.return_value = make_phrases(3)
        explanation.return_value = "A house."
        yield SimpleNamespace(images=images, phrases=phrases, explanation=explanation)


class TestSearchWord:
    async def test_merges_all_sources(self, sources):
        result = await search_word("casa")
        assert result.result.word == "casa"
        assert len(result.result.images) == 6
        assert len(result.result.phrases) == 3
        assert result.pagination.total_pages == 4
        assert result.explanation == "A house."
        sources.images.assert_awaited_once_with("casa", page=1, per_page=6)

    async def test_image_failure_falls_back_to_empty_page(self, sources):
        sources.images.side_effect = ImageSearchError("boom")
        result = await search_word("casa")
        assert result.result.images == []
        assert result.pagination == PaginatedImageResult(
            images=[], current_page=1, total_pages=1, has_next=False, has_previous=False
        )
        assert len(result.result.phrases) == 3
        assert result.explanation == "A house."

    async def test_phrase_failure_falls_back_to_empty_list(self, sources):
        sources.phrases.side_effect = LLMResponseError("bad json")
        result = await search_word("casa")
        assert result.result.phrases == []
        assert len(result.result.images) == 6
        assert result.explanation == "A house."

    async def test_explanation_failure_falls_back_to_none(self, sources):
        sources.explanation.side_effect = RuntimeError("rate limited")
        result = await search_word("casa")
        assert result.explanation is None
        assert len(result.result.phrases) == 3

    async def test_all_sources_failing_still_returns_result(self, sources):
        sources.images.side_effect = ImageSearchError("down")
        sources.phrases.side_effect = RuntimeError("down")
        sources.explanation.side_effect = RuntimeError("down")
        result = await search_word("casa")
        assert result.result.word == "casa"
        assert result.result.images == []
        assert result.result.phrases == []
        assert result.explanation is None

    async def test_failures_are_logged(self, sources, caplog):
        sources.images.side_effect = ImageSearchError("down")
        await search_word("casa")
        assert "Image search failed" in caplog.text

    @pytest.mark.parametrize("word", ["", "   ", "\n\t"])
    async def test_blank_word_is_noop(self, sources, word, db):
        assert await search_word(word) is None
        sources.images.assert_not_awaited()
        sources.phrases.assert_not_awaited()
        sources.explanation.assert_not_awaited()
        result = await db.execute(select(SearchHistory))
        assert result.scalars().all() == []

    async def test_records_history(self, sources, db):
        await search_word("casa")
        result = await db.execute(select(SearchHistory))
        assert [h.word for h in result.scalars().all()] == ["casa"]

    async def test_history_failure_does_not_affect_search(self, sources):
        with patch(
            "exemplar.services.search_service.add_search",
            new_callable=AsyncMock,
            side_effect=RuntimeError("disk full"),
        ):
            result = await search_word("casa")
        assert len(result.result.phrases) == 3
