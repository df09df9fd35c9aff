from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from exemplar.config import settings
from exemplar.database import get_db
from exemplar.main import app
from exemplar.models import Base
from exemplar.schemas.search import (
    AggregatedSearch,
    ExamplePhrase,
    ImageResult,
    PaginatedImageResult,
    SearchResult,
)
from exemplar.services.anki_service import AnkiConnectError
from exemplar.session import SessionController, get_controller

TEST_DB_URL = "sqlite+aiosqlite://"

engine = create_async_engine(
    TEST_DB_URL,
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
test_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
async def setup_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    with patch("exemplar.services.search_service.async_session", test_session):
        yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def override_get_db():
    async with test_session() as session:
        yield session


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
async def db():
    async with test_session() as session:
        yield session


@pytest.fixture(autouse=True)
def anki_enabled():
    saved = settings.anki.enabled
    settings.anki.enabled = True
    yield
    settings.anki.enabled = saved


# --- Session controller (fresh per test) ---


@pytest.fixture
def controller():
    fresh = SessionController()
    app.dependency_overrides[get_controller] = lambda: fresh
    yield fresh
    app.dependency_overrides.pop(get_controller, None)


# --- HTTP client ---


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# --- Sample data ---


def make_images(count: int, prefix: str = "img") -> list[ImageResult]:
    return [
        ImageResult(
            id=f"{prefix}-{i}",
            url=f"https://images.example/{prefix}-{i}.jpg",
            thumbnail=f"https://images.example/{prefix}-{i}-thumb.jpg",
        )
        for i in range(count)
    ]


def make_phrases(count: int) -> list[ExamplePhrase]:
    return [
        ExamplePhrase(
            text=f"phrase {i}",
            translation=f"translation {i}",
            category="daily life",
        )
        for i in range(1, count + 1)
    ]


def make_aggregated(
    word: str = "casa",
    images: list[ImageResult] | None = None,
    phrases: list[ExamplePhrase] | None = None,
    explanation: str | None = "A house or home.",
    total_pages: int = 3,
) -> AggregatedSearch:
    images = make_images(6) if images is None else images
    phrases = make_phrases(5) if phrases is None else phrases
    pagination = PaginatedImageResult.build(images, 1, total_pages)
    return AggregatedSearch(
        result=SearchResult(word=word, images=pagination.images, phrases=phrases),
        pagination=pagination,
        explanation=explanation,
    )


@pytest.fixture
async def searched(controller):
    """A controller that has completed a search for "casa"."""
    with patch("exemplar.session.search_word", new_callable=AsyncMock) as mock:
        mock.return_value = make_aggregated()
        await controller.search("casa")
    return controller


# --- Boundary mock: AnkiConnect ---


class FakeAnkiConnect:
    """Stands in for ``anki_service._send_request`` and records every action."""

    def __init__(self, decks=None):
        self.decks = list(decks or [])
        self.calls: list[tuple[str, dict | None]] = []
        self.fail_actions: set[str] = set()
        self.failing_phrases: set[str] = set()
        self.notes: list[dict] = []
        self.version = 6

    async def __call__(self, action, params=None):
        self.calls.append((action, params))
        if action in self.fail_actions:
            raise AnkiConnectError(f"{action} failed")
        if action == "version":
            return self.version
        if action == "deckNames":
            return list(self.decks)
        if action == "createDeck":
            self.decks.append(params["deck"])
            return 1
        if action == "addNote":
            note = params["note"]
            back = note["fields"]["Back"]
            if any(text in back for text in self.failing_phrases):
                raise AnkiConnectError("cannot create note")
            self.notes.append(note)
            return 1000 + len(self.notes)
        if action == "storeMediaFile":
            return params["filename"]
        if action == "modelNames":
            return ["Basic", "Cloze"]
        if action == "modelFieldNames":
            return ["Front", "Back"]
        raise AnkiConnectError(f"unsupported action {action}")

    @property
    def actions(self) -> list[str]:
        return [action for action, _ in self.calls]


@pytest.fixture
def anki():
    fake = FakeAnkiConnect()
    with patch("exemplar.services.anki_service._send_request", new=fake):
        yield fake


# --- Boundary mock: httpx transport ---


@pytest.fixture
def mock_http():
    """Route every ``httpx.AsyncClient`` created by the services to a handler.

    Usage:
        mock_http(handler)   handler(request) returns an httpx.Response
    """
    real_client = httpx.AsyncClient
    patches = []

    def install(handler):
        def factory(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(handler)
            return real_client(*args, **kwargs)

        p = patch("httpx.AsyncClient", side_effect=factory)
        p.start()
        patches.append(p)

    yield install

    for p in patches:
        p.stop()


# --- Boundary mock: Anthropic SDK ---


@pytest.fixture
def mock_anthropic():
    """Mock anthropic.AsyncAnthropic at the SDK boundary.

    Usage:
        set_response("json string")           single response
        set_responses(["r1", "r2"])            sequential responses
    """
    responses = []
    call_index = {"i": 0}

    def set_response(text):
        responses.clear()
        responses.append(text)
        call_index["i"] = 0

    def set_responses(texts):
        responses.clear()
        responses.extend(texts)
        call_index["i"] = 0

    mock_message_create = AsyncMock()

    async def _create_side_effect(**kwargs):
        idx = call_index["i"]
        call_index["i"] += 1
        text = responses[idx] if idx < len(responses) else responses[-1]
        content_block = MagicMock()
        content_block.text = text
        message = MagicMock()
        message.content = [content_block]
        return message

    mock_message_create.side_effect = _create_side_effect

    mock_client_instance = MagicMock()
    mock_client_instance.messages = MagicMock()
    mock_client_instance.messages.create = mock_message_create

    with patch("anthropic.AsyncAnthropic", return_value=mock_client_instance):
        yield {
            "set_response": set_response,
            "set_responses": set_responses,
            "create_mock": mock_message_create,
        }
