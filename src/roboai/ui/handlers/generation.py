"""Batch generation and aspect-ratio handlers."""

import logging
from collections.abc import AsyncIterator

import gradio as gr

from roboai.core.batch import BatchDispatcher, prepare_batch
from roboai.core.config import config
from roboai.core.models import AspectRatio

from ..models import FormState
from ..rendering import render_results_html, render_status
from ..state import initialize_ui_state
from ..validation import NO_REFERENCES_QUESTION, ValidationError, check_submission

logger = logging.getLogger(__name__)


def set_aspect_ratio(ratio: str, state: FormState) -> tuple[gr.Textbox, FormState]:
    """Store the preset and show the custom field only for "Custom".

    Returns:
        Tuple of (custom_textbox_update, updated_state)
    """
    state = initialize_ui_state(state)
    state.aspect_ratio = ratio
    return gr.update(visible=ratio == AspectRatio.CUSTOM.value), state


def set_custom_aspect_ratio(value: str, state: FormState) -> FormState:
    state = initialize_ui_state(state)
    state.custom_aspect_ratio = value or ""
    return state


def _gallery_items(state: FormState) -> list[tuple]:
    return [(result.image, f"{result.index:03d}") for result in state.completed_results()]


def _snapshot(state: FormState, status: str | None = None) -> tuple:
    """Full set of outputs for the generation event.

    While a no-reference submission awaits an answer, the confirmation group
    and its question stay up in every snapshot, including those streamed by a
    batch that is still running.

    Returns:
        Tuple of (status_markdown, board_html, gallery_items, confirm_group_update,
        download_batch_update, updated_state)
    """
    if status is None:
        if state.awaiting_confirmation:
            status = f"⚠️ {NO_REFERENCES_QUESTION}"
        else:
            status = render_status(state.results, state.is_generating)

    return (
        status,
        render_results_html(state.results),
        _gallery_items(state),
        gr.update(visible=state.awaiting_confirmation),
        gr.update(interactive=bool(state.completed_results()) and not state.is_generating),
        state,
    )


async def generate_batch(state: FormState, confirmed: bool = False) -> AsyncIterator[tuple]:
    """Validate the form and run one generation call per non-empty prompt.

    Yields a full UI snapshot once the placeholders exist and again each time
    a call resolves. A submission without any selected reference image stops
    at a confirmation prompt unless ``confirmed`` is set.

    Args:
        state: Form state
        confirmed: The user agreed to generate without character references

    Yields:
        Tuples as described in ``_snapshot``
    """
    batch = None
    try:
        state = initialize_ui_state(state)

        check = check_submission(state)
        if check.needs_confirmation and not confirmed:
            state.awaiting_confirmation = True
            yield _snapshot(state)
            return

        batch = prepare_batch(state.prompts)
        state.start_batch(batch)
        yield _snapshot(state)

        dispatcher = BatchDispatcher(state.adapter)
        async for completion in dispatcher.run(
            batch,
            check.characters,
            state.aspect_ratio,
            state.custom_aspect_ratio,
            api_key=config.api_key,
        ):
            # Completions from a superseded batch are dropped here
            if state.apply_completion(completion) is not None:
                yield _snapshot(state)

    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
        yield _snapshot(state, status=f"❌ **Validation Error**\n\n{e}")

    except Exception as e:
        logger.error(f"Error generating batch: {e}", exc_info=True)
        if batch is not None and batch.batch_id == state.active_batch_id:
            state.is_generating = False
        yield _snapshot(
            state,
            status=(
                "❌ **Error**\n\nAn unexpected error occurred. "
                f"Check logs for details.\n\n`{e}`"
            ),
        )


async def confirm_generation(state: FormState) -> AsyncIterator[tuple]:
    """Proceed with a batch after the no-reference confirmation."""
    state = initialize_ui_state(state)
    state.awaiting_confirmation = False
    async for snapshot in generate_batch(state, confirmed=True):
        yield snapshot


def decline_generation(state: FormState) -> tuple:
    """Dismiss the no-reference confirmation, leaving results untouched."""
    state = initialize_ui_state(state)
    state.awaiting_confirmation = False
    logger.info("Generation without references declined")
    return _snapshot(state, status="*Generation cancelled*")
