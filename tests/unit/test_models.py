"""Unit tests for domain models."""

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from PIL import Image

from roboai.core.models import (
    PREVIEW_SIZE,
    AspectRatio,
    CharacterSlot,
    GenerationResult,
    ResultStatus,
)


class TestAspectRatio:
    """Tests for AspectRatio enum."""

    def test_preset_values(self):
        assert [r.value for r in AspectRatio] == ["16:9", "9:16", "1:1", "4:3", "Custom"]

    def test_is_string(self):
        assert AspectRatio.RATIO_16_9 == "16:9"


class TestCharacterSlot:
    """Tests for CharacterSlot model."""

    def test_defaults(self):
        slot = CharacterSlot(slot_id="1", name="Character 1")

        assert slot.file_path is None
        assert slot.preview is None
        assert not slot.is_selected
        assert not slot.has_file

    def test_attach_file_selects_slot(self, sample_image_file: Path):
        slot = CharacterSlot(slot_id="2", name="Villain")

        slot.attach_file(sample_image_file)

        assert slot.is_selected
        assert slot.has_file
        assert slot.file_path == sample_image_file
        assert slot.preview is not None

    def test_attach_file_builds_thumbnail(self, temp_dir: Path):
        big = temp_dir / "big.png"
        Image.new("RGB", (1024, 512)).save(big)
        slot = CharacterSlot(slot_id="1", name="Hero")

        slot.attach_file(str(big))

        assert slot.preview.width <= PREVIEW_SIZE[0]
        assert slot.preview.height <= PREVIEW_SIZE[1]
        assert slot.preview.mode == "RGB"

    def test_replacing_file_releases_previous_preview(self, sample_image_file: Path):
        slot = CharacterSlot(slot_id="1", name="Hero")
        old_preview = MagicMock()
        slot.preview = old_preview

        slot.attach_file(sample_image_file)

        old_preview.close.assert_called_once()
        assert slot.preview is not old_preview

    def test_unreadable_file_keeps_previous_state(self, temp_dir: Path, sample_image_file: Path):
        """A failed upload leaves the existing reference in place."""
        bogus = temp_dir / "notes.png"
        bogus.write_text("not an image")
        slot = CharacterSlot(slot_id="1", name="Hero")
        slot.attach_file(sample_image_file)
        preview = slot.preview

        with pytest.raises(OSError):
            slot.attach_file(bogus)

        assert slot.file_path == sample_image_file
        assert slot.preview is preview

    def test_detach_file(self, sample_image_file: Path):
        slot = CharacterSlot(slot_id="1", name="Hero")
        slot.attach_file(sample_image_file)

        slot.detach_file()

        assert slot.file_path is None
        assert slot.preview is None
        assert slot.is_selected  # selection is left to the user

    def test_release_preview_without_preview(self):
        slot = CharacterSlot(slot_id="1", name="Hero")
        slot.release_preview()
        assert slot.preview is None


class TestGenerationResult:
    """Tests for GenerationResult model."""

    def _result(self) -> GenerationResult:
        return GenerationResult(result_id="gen-abc-0", prompt="scene", index=1, batch_id="abc")

    def test_starts_pending(self):
        result = self._result()

        assert result.status is ResultStatus.PENDING
        assert result.is_pending
        assert not result.has_image
        assert isinstance(result.created_at, datetime)

    def test_succeed(self):
        result = self._result()
        image = Image.new("RGB", (4, 4))

        result.succeed(image)

        assert result.status is ResultStatus.SUCCEEDED
        assert result.image is image
        assert result.has_image
        assert result.error is None

    def test_fail(self):
        result = self._result()

        result.fail("Quota exceeded")

        assert result.status is ResultStatus.FAILED
        assert result.error == "Quota exceeded"
        assert result.image is None

    def test_fail_with_empty_message(self):
        result = self._result()
        result.fail("")
        assert result.error == "Failed"

    @pytest.mark.parametrize(
        "first, second",
        [
            ("succeed", "fail"),
            ("fail", "succeed"),
            ("succeed", "succeed"),
            ("fail", "fail"),
        ],
    )
    def test_transitions_exactly_once(self, first, second):
        result = self._result()
        args = {"succeed": (Image.new("RGB", (2, 2)),), "fail": ("boom",)}

        getattr(result, first)(*args[first])

        with pytest.raises(RuntimeError, match="already resolved"):
            getattr(result, second)(*args[second])
