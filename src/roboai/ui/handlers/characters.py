"""Character slot handlers."""

import logging

import gradio as gr
from PIL import Image

from ..models import FormState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


def _file_caption(state: FormState, slot_id: str) -> str:
    slot = state.get_slot(slot_id)
    if slot.file_path is None:
        return "*No image*"
    return f"`{slot.file_path.name}`"


def rename_character(slot_id: str, name: str, state: FormState) -> FormState:
    """Rename a character slot.

    Args:
        slot_id: Slot identifier
        name: New display name
        state: Form state

    Returns:
        Updated state
    """
    state = initialize_ui_state(state)
    state.update_character(slot_id, name=name)
    return state


def toggle_character(slot_id: str, selected: bool, state: FormState) -> FormState:
    """Include or exclude a character from the next batch."""
    state = initialize_ui_state(state)
    state.update_character(slot_id, is_selected=bool(selected))
    return state


def upload_character_image(
    slot_id: str, file_path: str | None, state: FormState
) -> tuple[gr.Checkbox, Image.Image | None, str, FormState]:
    """Attach (or clear) a slot's reference image.

    Attaching an image also selects the slot.

    Args:
        slot_id: Slot identifier
        file_path: Uploaded file path, or None when the upload was cleared
        state: Form state

    Returns:
        Tuple of (checkbox_update, preview_image, file_caption, updated_state)
    """
    state = initialize_ui_state(state)

    try:
        slot = state.attach_character_file(slot_id, file_path)
        return gr.update(value=slot.is_selected), slot.preview, _file_caption(state, slot_id), state

    except OSError as e:
        logger.error(f"Could not open reference image for slot {slot_id}: {e}", exc_info=True)
        slot = state.get_slot(slot_id)
        return (
            gr.update(value=slot.is_selected),
            slot.preview,
            f"❌ Could not open image: {e}",
            state,
        )
