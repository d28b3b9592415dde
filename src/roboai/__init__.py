"""Robo AI Story Creator - consistent character storyboards from a hosted image model."""

__version__ = "0.1.0"

from roboai.core.config import RoboConfig, config
from roboai.core.model_adapters import ImageAdapterBase, model_registry

# Import adapters to ensure they're registered
from roboai.core.adapters import GeminiFlashImageAdapter  # noqa: F401

__all__ = [
    "ImageAdapterBase",
    "model_registry",
    "RoboConfig",
    "config",
    "GeminiFlashImageAdapter",
]
