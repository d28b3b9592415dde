"""Unit tests for character slot handlers."""

from pathlib import Path

from roboai.core.models import PREVIEW_SIZE
from roboai.ui.handlers.characters import (
    rename_character,
    toggle_character,
    upload_character_image,
)
from roboai.ui.models import FormState


class TestCharacterHandlers:
    def test_rename(self, form_state: FormState):
        state = rename_character("2", "Villain", form_state)
        assert state.get_slot("2").name == "Villain"

    def test_toggle(self, form_state: FormState):
        state = toggle_character("1", False, form_state)
        assert not state.get_slot("1").is_selected

    def test_upload_selects_slot(self, form_state: FormState, sample_image_file: Path):
        checkbox, preview, caption, state = upload_character_image(
            "3", str(sample_image_file), form_state
        )

        assert checkbox["value"] is True
        assert caption == "`hero.png`"
        assert state.get_slot("3").file_path == sample_image_file

    def test_upload_returns_thumbnail(self, form_state: FormState, sample_image_file: Path):
        _, preview, _, state = upload_character_image("3", str(sample_image_file), form_state)

        assert preview is state.get_slot("3").preview
        assert max(preview.size) <= max(PREVIEW_SIZE)

    def test_replacing_upload_swaps_preview(
        self, form_state_with_hero: FormState, sample_image_file: Path
    ):
        old_preview = form_state_with_hero.get_slot("1").preview

        _, preview, _, _ = upload_character_image("1", str(sample_image_file), form_state_with_hero)

        assert preview is not None
        assert preview is not old_preview

    def test_clear_upload(self, form_state_with_hero: FormState):
        checkbox, preview, caption, state = upload_character_image("1", None, form_state_with_hero)

        assert preview is None
        assert caption == "*No image*"
        assert state.get_slot("1").file_path is None
        assert checkbox["value"] is True

    def test_unreadable_upload(self, form_state: FormState, temp_dir: Path):
        bogus = temp_dir / "broken.png"
        bogus.write_bytes(b"\x00\x01garbage")

        checkbox, preview, caption, state = upload_character_image("2", str(bogus), form_state)

        assert caption.startswith("❌ Could not open image")
        assert preview is None
        assert state.get_slot("2").file_path is None
        assert checkbox["value"] is False
