"""Client for the AnkiConnect add-on's local HTTP API."""

import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from exemplar.config import settings
from exemplar.schemas.anki import AnkiConnectRequest, AnkiConnectResponse

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:audio/[^;]+;base64,")


class AnkiConnectError(Exception):
    """AnkiConnect could not be reached or returned an error."""


async def _send_request(action: str, params: dict[str, Any] | None = None) -> Any:
    request = AnkiConnectRequest(
        action=action, version=settings.anki.api_version, params=params
    )
    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            response = await client.post(
                settings.anki.url, json=request.model_dump(exclude_none=True)
            )
            response.raise_for_status()
            body = AnkiConnectResponse.model_validate(response.json())
    except httpx.HTTPStatusError as e:
        raise AnkiConnectError(
            f"AnkiConnect HTTP error {e.response.status_code} for {action}"
        ) from e
    except httpx.HTTPError as e:
        raise AnkiConnectError(
            f"Could not reach AnkiConnect at {settings.anki.url}. "
            "Make sure Anki is running with AnkiConnect installed."
        ) from e
    except (ValueError, ValidationError) as e:
        raise AnkiConnectError(
            f"AnkiConnect returned a malformed reply for {action}"
        ) from e

    if body.error is not None:
        raise AnkiConnectError(f"AnkiConnect error for {action}: {body.error}")
    return body.result


async def check_connection() -> bool:
    try:
        version = await _send_request("version")
    except AnkiConnectError:
        logger.exception("AnkiConnect connection test failed")
        return False
    return isinstance(version, int) and version >= settings.anki.api_version


async def get_deck_names() -> list[str]:
    return await _send_request("deckNames") or []


async def create_deck(deck_name: str) -> int:
    return await _send_request("createDeck", {"deck": deck_name})


async def add_note(
    deck_name: str, front: str, back: str, tags: list[str], model_name: str = "Basic"
) -> int | None:
    return await _send_request(
        "addNote",
        {
            "note": {
                "deckName": deck_name,
                "modelName": model_name,
                "fields": {"Front": front, "Back": back},
                "tags": tags,
            }
        },
    )


async def store_media_file(filename: str, audio_url: str) -> str:
    # data: URLs go inline as base64; http(s) URLs are downloaded by Anki.
    if _DATA_URL_PREFIX.match(audio_url):
        params = {"filename": filename, "data": _DATA_URL_PREFIX.sub("", audio_url)}
    elif audio_url.startswith(("http://", "https://")):
        params = {"filename": filename, "url": audio_url}
    else:
        params = {"filename": filename, "data": audio_url}
    return await _send_request("storeMediaFile", params)


async def get_model_names() -> list[str]:
    return await _send_request("modelNames") or []


async def get_model_field_names(model_name: str) -> list[str]:
    return await _send_request("modelFieldNames", {"modelName": model_name}) or []
