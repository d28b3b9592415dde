"""Domain models shared by the batch dispatcher, adapters and UI."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)

PREVIEW_SIZE = (256, 256)


class AspectRatio(str, Enum):
    """Aspect-ratio presets offered by the form."""

    RATIO_16_9 = "16:9"
    RATIO_9_16 = "9:16"
    RATIO_1_1 = "1:1"
    RATIO_4_3 = "4:3"
    CUSTOM = "Custom"


class ResultStatus(str, Enum):
    """Lifecycle of a single generation placeholder."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class CharacterSlot:
    """A fixed character reference slot.

    A slot binds an optional local image file to a thumbnail preview and an
    inclusion flag. Slots are created once per session and edited in place.
    The slot owns its preview: attaching a new file closes the previous
    preview before opening the next one.
    """

    slot_id: str
    name: str
    file_path: Path | None = None
    preview: Image.Image | None = None
    is_selected: bool = False

    @property
    def has_file(self) -> bool:
        return self.file_path is not None

    def attach_file(self, file_path: str | Path) -> None:
        """Attach a reference image and select the slot.

        Args:
            file_path: Path to the uploaded image

        Raises:
            OSError: If the file cannot be opened as an image
        """
        path = Path(file_path)

        with Image.open(path) as img:
            preview = img.convert("RGB")
        preview.thumbnail(PREVIEW_SIZE)

        self.release_preview()
        self.file_path = path
        self.preview = preview
        self.is_selected = True
        logger.info(f"Slot {self.slot_id} ({self.name}) attached {path.name}")

    def detach_file(self) -> None:
        """Remove the attached image, keeping name and selection."""
        self.release_preview()
        self.file_path = None

    def release_preview(self) -> None:
        if self.preview is not None:
            self.preview.close()
            self.preview = None


@dataclass
class GenerationResult:
    """One placeholder in a batch and, once resolved, its outcome.

    Attributes
    ----------
    result_id : str
        Identity within the session (``gen-<batch>-<i>``)
    prompt : str
        Source prompt text
    index : int
        1-based ordinal used for display and filenames
    batch_id : str
        Token of the batch this result belongs to
    status : ResultStatus
        Pending until the network call resolves
    image : Image.Image | None
        Decoded image on success
    error : str | None
        Human-readable message on failure
    created_at : datetime
        When the placeholder was created
    """

    result_id: str
    prompt: str
    index: int
    batch_id: str
    status: ResultStatus = ResultStatus.PENDING
    image: Image.Image | None = None
    error: str | None = None
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_pending(self) -> bool:
        return self.status is ResultStatus.PENDING

    @property
    def has_image(self) -> bool:
        return self.status is ResultStatus.SUCCEEDED and self.image is not None

    def succeed(self, image: Image.Image) -> None:
        """Mark the placeholder as succeeded.

        Raises:
            RuntimeError: If the result has already been resolved
        """
        self._ensure_pending()
        self.image = image
        self.status = ResultStatus.SUCCEEDED

    def fail(self, message: str) -> None:
        """Mark the placeholder as failed.

        Raises:
            RuntimeError: If the result has already been resolved
        """
        self._ensure_pending()
        self.error = message or "Failed"
        self.status = ResultStatus.FAILED

    def _ensure_pending(self) -> None:
        if not self.is_pending:
            raise RuntimeError(f"Result {self.result_id} already resolved ({self.status.value})")
