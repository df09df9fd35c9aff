import logging
import re

from exemplar.config import settings
from exemplar.schemas.anki import Card, ExportOutcome, ExportState
from exemplar.schemas.search import ExamplePhrase, ImageResult
from exemplar.services.anki_service import (
    AnkiConnectError,
    add_note,
    create_deck,
    get_deck_names,
    store_media_file,
)
from exemplar.services.card_templates import format_card

logger = logging.getLogger(__name__)


def _word_tag(word: str) -> str:
    # Anki splits tags on whitespace
    return re.sub(r"\s+", "_", word.strip().lower())


async def ensure_deck(deck_name: str) -> bool:
    try:
        existing = await get_deck_names()
    except AnkiConnectError:
        logger.exception("Failed to get deck names")
        existing = []
    if deck_name in existing:
        return True
    try:
        await create_deck(deck_name)
    except AnkiConnectError:
        logger.exception("Failed to create deck %r", deck_name)
        return False
    logger.info("Created deck %r", deck_name)
    return True


def build_cards(
    word: str,
    explanation: str | None,
    phrases: list[ExamplePhrase],
    images: list[ImageResult],
    audio_url: str | None = None,
) -> list[Card]:
    """One card per phrase; the whole batch shares the first selected image."""
    image = images[0] if images else None
    return [
        Card(
            word=word,
            explanation=explanation,
            phrase=phrase,
            image=image,
            audio_url=audio_url,
        )
        for phrase in phrases
    ]


async def submit_card(card: Card, deck_name: str) -> bool:
    front, back = format_card(card)
    try:
        note_id = await add_note(
            deck_name,
            front,
            back,
            tags=["exemplar", "vocabulary", _word_tag(card.word)],
        )
    except AnkiConnectError:
        logger.exception("Failed to add card %r to Anki", card.phrase.text)
        return False

    if card.audio_url and note_id:
        try:
            await store_media_file(f"{card.word}_audio.mp3", card.audio_url)
        except AnkiConnectError:
            logger.exception("Failed to add audio to note %s", note_id)
    return True


async def export_cards(
    word: str,
    explanation: str | None,
    phrases: list[ExamplePhrase],
    images: list[ImageResult],
    deck_name: str | None = None,
    audio_url: str | None = None,
) -> ExportOutcome:
    """Submit one note per selected phrase, in selection order.

    The deck is created first if needed; if that fails nothing is submitted and
    the outcome is marked aborted. Individual note failures are counted and the
    batch carries on.
    """
    if not phrases:
        return ExportOutcome()

    deck_name = deck_name or settings.anki.deck_name
    if not await ensure_deck(deck_name):
        return ExportOutcome(state=ExportState.ABORTED)

    outcome = ExportOutcome()
    for card in build_cards(word, explanation, phrases, images, audio_url):
        if await submit_card(card, deck_name):
            outcome.success_count += 1
        else:
            outcome.failed_count += 1

    logger.info(
        "Exported %r to %r: %d added, %d failed",
        word,
        deck_name,
        outcome.success_count,
        outcome.failed_count,
    )
    return outcome
