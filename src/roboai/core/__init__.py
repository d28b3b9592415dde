"""Core functionality for batch image generation.

- **Model Adapters**: hosted image models behind a common async interface
- **model_registry**: Registry for discovering and instantiating adapters
- **BatchDispatcher**: Per-prompt fan-out with independent success/failure
- **ViewerState**: Pan/zoom model for the image viewer
- **RoboConfig** / **config**: Configuration using Pydantic Settings
"""

# Import adapters to ensure they're registered
from roboai.core.adapters import GeminiFlashImageAdapter  # noqa: F401
from roboai.core.batch import Batch, BatchDispatcher, prepare_batch, selected_characters
from roboai.core.config import RoboConfig, config
from roboai.core.model_adapters import GenerationError, ImageAdapterBase, model_registry
from roboai.core.models import AspectRatio, CharacterSlot, GenerationResult, ResultStatus
from roboai.core.viewer import ViewerState

__all__ = [
    "AspectRatio",
    "Batch",
    "BatchDispatcher",
    "CharacterSlot",
    "GenerationError",
    "GenerationResult",
    "ImageAdapterBase",
    "ResultStatus",
    "RoboConfig",
    "ViewerState",
    "config",
    "model_registry",
    "prepare_batch",
    "selected_characters",
]
