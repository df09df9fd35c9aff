"""Session state for the current word and the transitions that change it.

The UI never mutates state directly. It calls one of the transition methods on
:class:`SessionController` and renders the :class:`SessionSnapshot` it gets
back (or receives through :meth:`SessionController.subscribe`).
"""

import logging
from typing import Callable

from exemplar.config import settings
from exemplar.schemas.anki import ExportOutcome
from exemplar.schemas.search import PaginatedImageResult, SearchResult
from exemplar.schemas.session import SessionSnapshot
from exemplar.selection import SelectionState
from exemplar.services.export_service import export_cards
from exemplar.services.image_service import search_images
from exemplar.services.search_service import search_word

logger = logging.getLogger(__name__)

Listener = Callable[[SessionSnapshot], None]


class AnkiDisabledError(Exception):
    """Export was requested while Anki export is turned off in settings."""


class EmptySelectionError(Exception):
    """Export was requested with no phrase selected."""


class SelectionIndexError(Exception):
    """A toggle referenced a phrase or image index outside the current result."""


class ExportInProgressError(Exception):
    """Another export of the selection has not finished yet."""


class SessionController:
    def __init__(self) -> None:
        self.word = ""
        self.result: SearchResult | None = None
        self.pagination: PaginatedImageResult | None = None
        self.explanation: str | None = None
        self.is_loading = False
        self.images_loading = False
        self.exporting = False
        self.selection = SelectionState()
        self._generation = 0
        self._listeners: list[Listener] = []

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            word=self.word,
            result=self.result,
            pagination=self.pagination,
            explanation=self.explanation,
            is_loading=self.is_loading,
            images_loading=self.images_loading,
            exporting=self.exporting,
            curation_mode=self.selection.curation_mode,
            selected_phrases=self.selection.phrases.items(),
            selected_images=self.selection.images.items(),
            anki_enabled=settings.anki.enabled,
        )

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> SessionSnapshot:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Session listener failed")
        return snapshot

    async def search(self, word: str) -> SessionSnapshot:
        if not word or not word.strip():
            return self.snapshot()

        self._generation += 1
        generation = self._generation
        self.word = word
        self.explanation = None
        self.pagination = None
        self.selection.exit_mode()
        self.is_loading = True
        self.images_loading = True
        self._notify()

        try:
            aggregated = await search_word(word)
        finally:
            if generation == self._generation:
                self.is_loading = False
                self.images_loading = False

        if generation != self._generation:
            # A newer search started while this one was in flight
            return self.snapshot()

        if aggregated is not None:
            self.result = aggregated.result
            self.pagination = aggregated.pagination
            self.explanation = aggregated.explanation
        # Phrase and image identities do not survive a new search
        self.selection.exit_mode()
        return self._notify()

    async def change_page(self, page: int) -> bool:
        """Load another page of images for the current word.

        Returns False when the request is dropped: no current word, another
        image request in flight, a page out of range, or a failed lookup.
        """
        if not self.word or self.images_loading or page < 1:
            return False
        if self.pagination is not None and page > self.pagination.total_pages:
            return False

        generation = self._generation
        word = self.word
        self.images_loading = True
        self._notify()

        try:
            pagination = await search_images(
                word, page=page, per_page=settings.images_per_page
            )
        except Exception:
            logger.exception("Page change to %d failed for %r", page, word)
            pagination = None
        finally:
            if generation == self._generation:
                self.images_loading = False

        if pagination is None or generation != self._generation:
            self._notify()
            return False

        self.pagination = pagination
        if self.result is not None:
            self.result = self.result.model_copy(update={"images": pagination.images})
        self._notify()
        return True

    def toggle_curation_mode(self) -> SessionSnapshot:
        self.selection.toggle_mode()
        return self._notify()

    def toggle_phrase(self, index: int) -> SessionSnapshot:
        phrases = self.result.phrases if self.result else []
        if not 0 <= index < len(phrases):
            raise SelectionIndexError(f"No phrase at index {index}")
        self.selection.toggle_phrase(phrases[index])
        return self._notify()

    def toggle_image(self, index: int) -> SessionSnapshot:
        images = self.result.images if self.result else []
        if not 0 <= index < len(images):
            raise SelectionIndexError(f"No image at index {index}")
        self.selection.toggle_image(images[index])
        return self._notify()

    async def export_selection(self, audio_url: str | None = None) -> ExportOutcome:
        if not settings.anki.enabled:
            raise AnkiDisabledError("Anki export is disabled in settings")
        phrases = self.selection.phrases.items()
        if not phrases or self.result is None:
            raise EmptySelectionError("Select at least one phrase to create Anki cards")
        if self.exporting:
            raise ExportInProgressError("An export is already running")

        self.exporting = True
        self._notify()
        try:
            outcome = await export_cards(
                self.result.word,
                self.explanation,
                phrases,
                self.selection.images.items(),
                audio_url=audio_url,
            )
        finally:
            self.exporting = False
        if outcome.success_count > 0:
            self.selection.exit_mode()
        self._notify()
        return outcome


_controller = SessionController()


def get_controller() -> SessionController:
    return _controller
