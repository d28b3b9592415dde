"""Unit tests for configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from roboai.core.config import RoboConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "ROBOAI_API_KEY",
        "API_KEY",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
        "ROBOAI_MAX_PROMPTS",
        "ROBOAI_MODEL_ID",
    ):
        monkeypatch.delenv(name, raising=False)


class TestRoboConfig:
    """Tests for RoboConfig."""

    def test_defaults(self, temp_dir: Path):
        config = RoboConfig(downloads_dir=temp_dir / "dl", _env_file=None)

        assert config.api_key == ""
        assert config.default_model_adapter == "Gemini-Flash-Image"
        assert config.model_id == "gemini-2.5-flash-image"
        assert config.default_aspect_ratio == "16:9"
        assert config.max_prompts == 10
        assert config.character_slots == 4
        assert config.gradio_server_port == 7860
        assert not config.gradio_share

    def test_creates_downloads_dir(self, temp_dir: Path):
        target = temp_dir / "nested" / "downloads"

        RoboConfig(downloads_dir=target, _env_file=None)

        assert target.is_dir()

    def test_prefixed_env(self, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("ROBOAI_MAX_PROMPTS", "5")
        monkeypatch.setenv("ROBOAI_MODEL_ID", "gemini-custom")

        config = RoboConfig(downloads_dir=temp_dir, _env_file=None)

        assert config.max_prompts == 5
        assert config.model_id == "gemini-custom"

    @pytest.mark.parametrize("name", ["ROBOAI_API_KEY", "API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"])
    def test_api_key_aliases(self, monkeypatch, temp_dir: Path, name):
        monkeypatch.setenv(name, "secret")

        config = RoboConfig(downloads_dir=temp_dir, _env_file=None)

        assert config.api_key == "secret"

    def test_api_key_by_field_name(self, temp_dir: Path):
        config = RoboConfig(api_key="direct", downloads_dir=temp_dir, _env_file=None)
        assert config.api_key == "direct"

    @pytest.mark.parametrize(
        "field, value",
        [
            ("max_prompts", 0),
            ("max_prompts", 51),
            ("character_slots", 9),
            ("gradio_server_port", 80),
            ("request_timeout_ms", 10),
        ],
    )
    def test_bounds(self, temp_dir: Path, field, value):
        with pytest.raises(ValidationError):
            RoboConfig(downloads_dir=temp_dir, _env_file=None, **{field: value})
