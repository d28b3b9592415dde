"""Scene prompt list handlers.

The UI pre-creates ``max_prompts`` rows (textbox + remove button) and shows
only as many as the state holds, so every handler returns a full set of row
updates.
"""

import logging

import gradio as gr

from ..models import FormState
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)


def prompt_counter(state: FormState) -> str:
    return f"{len(state.prompts)}/{state.max_prompts}"


def prompt_row_updates(state: FormState, row_count: int) -> list:
    """Build updates for every prompt textbox followed by every remove button."""
    can_remove = len(state.prompts) > 1
    boxes = []
    buttons = []
    for i in range(row_count):
        visible = i < len(state.prompts)
        boxes.append(gr.update(value=state.prompts[i] if visible else "", visible=visible))
        buttons.append(gr.update(visible=visible and can_remove))
    return boxes + buttons


def _response(state: FormState, row_count: int | None) -> list:
    return [
        *prompt_row_updates(state, row_count or state.max_prompts),
        prompt_counter(state),
        gr.update(visible=len(state.prompts) < state.max_prompts),
        state,
    ]


def add_prompt(state: FormState, row_count: int | None = None) -> list:
    """Append an empty scene prompt.

    Returns:
        Row updates, counter text, add-button update and the updated state
    """
    state = initialize_ui_state(state)
    if not state.add_prompt():
        logger.info(f"Prompt limit reached ({state.max_prompts})")
    return _response(state, row_count)


def remove_prompt(index: int, state: FormState, row_count: int | None = None) -> list:
    """Remove the prompt at ``index``; later prompts shift up."""
    state = initialize_ui_state(state)
    state.remove_prompt(index)
    return _response(state, row_count)


def update_prompt(index: int, text: str, state: FormState) -> FormState:
    """Store an edited prompt in place."""
    state = initialize_ui_state(state)
    state.update_prompt(index, text)
    return state
