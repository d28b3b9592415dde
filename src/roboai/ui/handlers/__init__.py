"""UI event handlers organized by feature area.

- characters: Character slot naming, selection and reference uploads
- prompts: Scene prompt list editing
- generation: Aspect ratio and batch generation
- gallery: Result viewer (pan/zoom) and downloads
"""

from .characters import (
    rename_character,
    toggle_character,
    upload_character_image,
)
from .gallery import (
    close_viewer,
    download_batch,
    download_selected,
    open_result,
    pan_view,
    reset_view,
    select_result,
    viewer_gesture,
    zoom_in,
    zoom_out,
)
from .generation import (
    confirm_generation,
    decline_generation,
    generate_batch,
    set_aspect_ratio,
    set_custom_aspect_ratio,
)
from .prompts import (
    add_prompt,
    prompt_counter,
    prompt_row_updates,
    remove_prompt,
    update_prompt,
)

__all__ = [
    # Character handlers
    "rename_character",
    "toggle_character",
    "upload_character_image",
    # Prompt handlers
    "add_prompt",
    "prompt_counter",
    "prompt_row_updates",
    "remove_prompt",
    "update_prompt",
    # Generation handlers
    "confirm_generation",
    "decline_generation",
    "generate_batch",
    "set_aspect_ratio",
    "set_custom_aspect_ratio",
    # Gallery handlers
    "close_viewer",
    "download_batch",
    "download_selected",
    "open_result",
    "pan_view",
    "reset_view",
    "select_result",
    "viewer_gesture",
    "zoom_in",
    "zoom_out",
]
