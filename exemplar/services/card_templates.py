"""HTML fragments for the Front and Back fields of an exported note."""

from html import escape

from exemplar.schemas.anki import Card

_FONT = "font-family: system-ui, -apple-system, sans-serif;"
_HEADING = "color: #2563eb; font-size: 2rem; font-weight: bold;"


def _image_html(card: Card) -> str:
    if not card.image:
        return ""
    return (
        f'<img src="{escape(card.image.thumbnail)}" alt="{escape(card.word)}" '
        f'style="max-width: 300px; height: auto; border-radius: 8px; margin-bottom: 16px;">'
    )


def _audio_html(card: Card) -> str:
    if not card.audio_url:
        return ""
    return (
        f'<audio controls style="width: 100%; margin-top: 16px;">'
        f'<source src="{escape(card.audio_url)}" type="audio/mpeg">'
        f"Your browser does not support the audio element.</audio>"
    )


def _explanation_html(card: Card) -> str:
    if not card.explanation:
        return ""
    return (
        '<div style="background: #f8fafc; border-left: 4px solid #3b82f6; '
        'padding: 16px; margin: 16px 0; border-radius: 4px;">'
        '<h3 style="margin: 0 0 8px 0; color: #1e40af;">Explanation</h3>'
        f'<p style="margin: 0; color: #374151;">{escape(card.explanation)}</p>'
        "</div>"
    )


def _phrase_html(card: Card) -> str:
    phrase = card.phrase
    return (
        '<div style="background: #f0f9ff; border-left: 4px solid #0ea5e9; '
        'padding: 16px; margin: 16px 0; border-radius: 4px;">'
        '<h3 style="margin: 0 0 8px 0; color: #0369a1;">Example Phrase</h3>'
        f'<p style="margin: 0 0 8px 0; font-weight: 500; color: #1e293b;">{escape(phrase.text)}</p>'
        f'<p style="margin: 0; font-style: italic; color: #64748b;">{escape(phrase.translation)}</p>'
        '<span style="display: inline-block; background: #dbeafe; color: #1e40af; '
        'padding: 4px 8px; border-radius: 12px; font-size: 0.75rem; margin-top: 8px;">'
        f"{escape(phrase.category)}</span>"
        "</div>"
    )


def format_card(card: Card) -> tuple[str, str]:
    """Return the (front, back) HTML for a card."""
    image = _image_html(card)
    word = escape(card.word)

    front = (
        f'<div style="text-align: center; {_FONT}">'
        f"{image}"
        f'<h2 style="{_HEADING} margin: 16px 0;">{word}</h2>'
        "</div>"
    )
    back = (
        f'<div style="{_FONT} line-height: 1.6;">'
        f"{image}"
        f'<h2 style="{_HEADING} margin: 16px 0 24px 0;">{word}</h2>'
        f"{_explanation_html(card)}"
        f"{_phrase_html(card)}"
        f"{_audio_html(card)}"
        "</div>"
    )
    return front, back
