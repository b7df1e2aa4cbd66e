"""Shared pytest fixtures for Photo Studio tests."""

import base64
import shutil
import tempfile
from io import BytesIO
from pathlib import Path
from types import SimpleNamespace
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from photostudio.api.main import app, get_history_db
from photostudio.core.config import StudioConfig
from photostudio.core.generation_client import GenerationClient
from photostudio.core.history_db import HistoryDB


def make_png_bytes(color: str = "red", size: tuple[int, int] = (8, 8)) -> bytes:
    """Render a tiny solid-colour PNG."""
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_data_url(color: str = "red") -> str:
    """Render a tiny PNG and wrap it in a data URL."""
    return "data:image/png;base64," + base64.b64encode(make_png_bytes(color)).decode("ascii")


def image_response(data: bytes, mime_type: str = "image/png") -> SimpleNamespace:
    """Build an SDK-shaped response whose first candidate holds one image."""
    part = SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


def shot_of(contents: list) -> str:
    """Identify which shot a request is for from its prompt text."""
    prompt = contents[-1]
    if "Upper body front shot" in prompt:
        return "front"
    if "45-degree" in prompt:
        return "side"
    if "Full body shot" in prompt:
        return "full"
    raise AssertionError(f"Unrecognised prompt: {prompt[:60]}")


class FakeModels:
    """Stand-in for ``client.aio.models`` that records every call.

    Args:
        handler: Callable ``(shot, contents) -> response`` (may raise)
    """

    def __init__(self, handler=None):
        self.calls: list[dict] = []
        self.handler = handler or (lambda shot, contents: image_response(shot.encode()))

    async def generate_content(self, *, model, contents):
        self.calls.append({"model": model, "contents": contents})
        return self.handler(shot_of(contents), contents)


class FakeGenaiClient:
    """Stand-in for ``google.genai.Client`` exposing ``aio.models``."""

    def __init__(self, handler=None):
        self.models = FakeModels(handler)
        self.aio = SimpleNamespace(models=self.models)

    @property
    def calls(self) -> list[dict]:
        return self.models.calls


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path, monkeypatch) -> StudioConfig:
    """Create a test configuration with temporary directories.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        StudioConfig instance for testing
    """
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("PHOTOSTUDIO_GEMINI_API_KEY", raising=False)

    return StudioConfig(
        _env_file=None,
        gemini_api_key="test-key",
        data_dir=str(temp_dir / "data"),
        outputs_dir=str(temp_dir / "outputs"),
        api_base_url="http://studio.test",
    )


@pytest.fixture
def history_db(temp_dir: Path) -> HistoryDB:
    """Create an empty history database in a temporary directory."""
    return HistoryDB(temp_dir / "history.db")


@pytest.fixture
def source_image() -> str:
    """A single valid source image payload."""
    return make_data_url("blue")


@pytest.fixture
def fake_genai() -> FakeGenaiClient:
    """Fake SDK client answering every shot with a distinct image."""
    return FakeGenaiClient()


@pytest.fixture
def generation_client(fake_genai: FakeGenaiClient) -> GenerationClient:
    """Generation client wired to the fake SDK client."""
    return GenerationClient(api_key="test-key", client=fake_genai)


@pytest.fixture
def test_client(history_db: HistoryDB) -> Generator[TestClient, None, None]:
    """FastAPI TestClient backed by a temporary history database.

    The lifespan hook is not run (no ``with`` block), so the global database
    is never opened; the dependency override supplies the test store.
    """
    app.dependency_overrides[get_history_db] = lambda: history_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def data_url_factory():
    """Factory for tiny PNG data URLs: ``data_url_factory("green")``."""
    return make_data_url


@pytest.fixture
def genai_factory():
    """Factory for fake SDK clients: ``genai_factory(handler)``."""
    return FakeGenaiClient


@pytest.fixture
def response_factory():
    """Factory for SDK-shaped image responses: ``response_factory(b"...")``."""
    return image_response
