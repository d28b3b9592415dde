"""Session state and constants for the Robo AI Gradio UI."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from roboai.core.batch import Batch, Completion
from roboai.core.models import AspectRatio, CharacterSlot, GenerationResult
from roboai.core.viewer import ViewerState

logger = logging.getLogger(__name__)

# Form defaults
DEFAULT_MAX_PROMPTS = 10
DEFAULT_CHARACTER_SLOTS = 4

ASPECT_RATIO_CHOICES = [
    ("16:9 (Landscape)", AspectRatio.RATIO_16_9.value),
    ("9:16 (Portrait)", AspectRatio.RATIO_9_16.value),
    ("1:1 (Square)", AspectRatio.RATIO_1_1.value),
    ("4:3 (Standard)", AspectRatio.RATIO_4_3.value),
    ("Custom", AspectRatio.CUSTOM.value),
]


def default_character_slots(count: int = DEFAULT_CHARACTER_SLOTS) -> list[CharacterSlot]:
    """Fixed placeholder slots; only the first starts selected."""
    return [
        CharacterSlot(slot_id=str(i + 1), name=f"Character {i + 1}", is_selected=(i == 0))
        for i in range(count)
    ]


@dataclass
class FormState:
    """Session state for the Gradio UI.

    Each user gets their own FormState through ``gr.State``. All mutation
    happens on the server event loop, so no locking is needed.

    Attributes
    ----------
    characters : list[CharacterSlot]
        Fixed set of character reference slots
    aspect_ratio : str
        Selected preset, or "Custom"
    custom_aspect_ratio : str
        Free-text ratio used only when the preset is "Custom"
    prompts : list[str]
        Scene prompts in display order, always 1..max_prompts entries
    max_prompts : int
        Upper bound on prompt entries
    results : list[GenerationResult]
        Placeholders of the visible batch
    active_batch_id : str | None
        Token of the visible batch; completions for other batches are dropped
    is_generating : bool
        True while the visible batch still has calls in flight
    awaiting_confirmation : bool
        A submission without references is waiting for the user to confirm or
        decline; stays set while other batches keep streaming
    viewer : ViewerState
        Pan/zoom state of the image viewer
    download_dir : Path | None
        Folder holding this session's latest download
    adapter : Any | None
        Image adapter instance (ImageAdapterBase)
    """

    characters: list[CharacterSlot] = field(default_factory=list)
    aspect_ratio: str = AspectRatio.RATIO_16_9.value
    custom_aspect_ratio: str = ""
    prompts: list[str] = field(default_factory=lambda: [""])
    max_prompts: int = DEFAULT_MAX_PROMPTS

    results: list[GenerationResult] = field(default_factory=list)
    active_batch_id: str | None = None
    is_generating: bool = False
    awaiting_confirmation: bool = False

    viewer: ViewerState = field(default_factory=ViewerState)
    download_dir: Path | None = None
    adapter: Any | None = None

    def is_initialized(self) -> bool:
        return bool(self.characters) and self.adapter is not None

    # Prompt list
    def add_prompt(self) -> bool:
        """Append an empty prompt unless the list is full."""
        if len(self.prompts) >= self.max_prompts:
            return False
        self.prompts.append("")
        return True

    def update_prompt(self, index: int, text: str) -> None:
        if 0 <= index < len(self.prompts):
            self.prompts[index] = text or ""

    def remove_prompt(self, index: int) -> bool:
        """Remove one prompt; the last remaining entry is never removed."""
        if len(self.prompts) <= 1 or not 0 <= index < len(self.prompts):
            return False
        del self.prompts[index]
        return True

    # Character slots
    def get_slot(self, slot_id: str) -> CharacterSlot:
        for slot in self.characters:
            if slot.slot_id == slot_id:
                return slot
        raise KeyError(f"Unknown character slot: {slot_id}")

    def update_character(
        self, slot_id: str, name: str | None = None, is_selected: bool | None = None
    ) -> CharacterSlot:
        slot = self.get_slot(slot_id)
        if name is not None:
            slot.name = name
        if is_selected is not None:
            slot.is_selected = is_selected
        return slot

    def attach_character_file(self, slot_id: str, file_path: str | Path | None) -> CharacterSlot:
        slot = self.get_slot(slot_id)
        if file_path:
            slot.attach_file(file_path)
        else:
            slot.detach_file()
        return slot

    # Results
    def start_batch(self, batch: Batch) -> None:
        """Replace the visible results with a new batch."""
        for result in self.results:
            if result.image is not None:
                result.image.close()
        self.results = list(batch.results)
        self.active_batch_id = batch.batch_id
        self.is_generating = bool(batch.results)
        self.awaiting_confirmation = False
        self.viewer.close()

    def apply_completion(self, completion: Completion) -> GenerationResult | None:
        """Patch the matching placeholder of the active batch.

        Completions from a superseded batch are ignored.
        """
        if completion.batch_id != self.active_batch_id:
            logger.debug(
                f"Ignoring completion {completion.result_id} from stale batch {completion.batch_id}"
            )
            return None

        active = Batch(batch_id=completion.batch_id, results=self.results)
        result = active.apply(completion)
        if active.is_complete:
            self.is_generating = False
        return result

    def completed_results(self) -> list[GenerationResult]:
        return [result for result in self.results if result.has_image]

    def __repr__(self) -> str:
        return (
            f"FormState(initialized={self.is_initialized()}, "
            f"prompts={len(self.prompts)}, results={len(self.results)}, "
            f"generating={self.is_generating})"
        )
