"""State management utilities for the Robo AI UI.

This module handles the lazy initialization and cleanup of per-session form
state: the fixed character slots, the prompt bounds and the image adapter.
"""

import logging
import shutil

from roboai.core.config import config
from roboai.core.model_adapters import model_registry

from .models import FormState, default_character_slots

logger = logging.getLogger(__name__)


def initialize_ui_state(state: FormState | None = None, adapter_name: str | None = None) -> FormState:
    """Initialize or ensure form state is ready.

    Args:
        state: Existing FormState or None
        adapter_name: Name of the image adapter to use (default: from config)

    Returns:
        Initialized FormState instance
    """
    if state is None:
        logger.info("Creating new FormState")
        state = FormState(
            aspect_ratio=config.default_aspect_ratio,
            max_prompts=config.max_prompts,
        )

    if state.is_initialized():
        return state

    logger.info("Initializing FormState components...")

    try:
        if not state.characters:
            state.characters = default_character_slots(config.character_slots)
            state.max_prompts = config.max_prompts

        if state.adapter is None:
            name = adapter_name or config.default_model_adapter
            logger.info(f"Initializing image adapter: {name}")
            state.adapter = model_registry.instantiate(name, config)

        logger.info(f"FormState initialization complete: {state}")
        return state

    except Exception as e:
        logger.error(f"Error initializing FormState: {e}", exc_info=True)
        raise


def cleanup_ui_state(state: FormState) -> None:
    """Release previews, generated images and downloads held by a session.

    Registered as the session State's delete callback, so it runs when a
    browser session ends.

    Args:
        state: Form state to clean up
    """
    logger.info("Cleaning up FormState resources")

    for slot in state.characters:
        slot.release_preview()

    for result in state.results:
        if result.image is not None:
            result.image.close()

    state.results = []
    state.active_batch_id = None
    state.is_generating = False
    state.awaiting_confirmation = False
    state.viewer.close()
    state.adapter = None

    if state.download_dir is not None:
        shutil.rmtree(state.download_dir, ignore_errors=True)
        state.download_dir = None

    logger.info("FormState cleanup complete")
