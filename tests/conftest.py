"""Shared pytest fixtures for Robo AI tests."""

import asyncio
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from roboai.core.config import RoboConfig
from roboai.core.model_adapters import GenerationError, ImageAdapterBase
from roboai.ui.models import FormState, default_character_slots


class FakeImageAdapter(ImageAdapterBase):
    """Scriptable adapter used instead of the hosted model.

    ``outcomes`` maps a prompt to an Exception (raised) or a delay in seconds
    (the image is returned after sleeping). Unlisted prompts succeed at once.
    """

    name = "Fake-Image"
    description = "In-memory adapter for tests"

    def __init__(self, config=None, outcomes: dict | None = None):
        self.config = config
        self.outcomes = outcomes or {}
        self.calls: list[dict] = []
        self.completed: list[str] = []

    async def generate(self, prompt, characters, aspect_ratio, custom_aspect_ratio="", api_key=None):
        self.calls.append(
            {
                "prompt": prompt,
                "characters": [slot.name for slot in characters],
                "aspect_ratio": aspect_ratio,
                "custom_aspect_ratio": custom_aspect_ratio,
                "api_key": api_key,
            }
        )
        outcome = self.outcomes.get(prompt)
        if isinstance(outcome, (int, float)):
            await asyncio.sleep(outcome)
        elif isinstance(outcome, BaseException):
            raise outcome

        self.completed.append(prompt)
        return Image.new("RGB", (32, 18), color=(200, 30, 30))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> RoboConfig:
    """Create a test configuration with temporary directories."""
    return RoboConfig(
        api_key="test-key",
        downloads_dir=str(temp_dir / "downloads"),
        max_prompts=10,
        character_slots=4,
        _env_file=None,
    )


@pytest.fixture
def sample_image_file(temp_dir: Path) -> Path:
    """A small PNG on disk, usable as a character reference."""
    path = temp_dir / "hero.png"
    Image.new("RGB", (64, 64), color=(10, 120, 200)).save(path)
    return path


@pytest.fixture
def fake_adapter() -> FakeImageAdapter:
    return FakeImageAdapter()


@pytest.fixture
def failing_adapter() -> FakeImageAdapter:
    """Adapter whose second prompt fails."""
    return FakeImageAdapter(outcomes={"scene two": GenerationError("Quota exceeded (Code: 429)")})


@pytest.fixture
def form_state(fake_adapter: FakeImageAdapter) -> FormState:
    """Initialized form state wired to the fake adapter."""
    return FormState(characters=default_character_slots(4), adapter=fake_adapter)


@pytest.fixture
def form_state_with_hero(form_state: FormState, sample_image_file: Path) -> FormState:
    """Form state whose first slot is selected and has a reference image."""
    form_state.update_character("1", name="Hero")
    form_state.attach_character_file("1", sample_image_file)
    return form_state


@pytest.fixture
def drain():
    """Return a helper that drains an async iterator on a fresh event loop."""

    def _collect(async_iterable) -> list:
        async def _drain():
            return [item async for item in async_iterable]

        return asyncio.run(_drain())

    return _collect
