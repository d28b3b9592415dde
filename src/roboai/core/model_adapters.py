"""Base classes and registry for image model adapters.

Each hosted image model is wrapped in an adapter that implements a common
interface. The batch dispatcher only talks to that interface, so swapping the
hosted model is a matter of registering a different adapter.

Usage Example
-------------
    >>> from roboai.core.model_adapters import model_registry
    >>> from roboai.core.config import config
    >>>
    >>> print(model_registry.list_available())
    ['Gemini-Flash-Image']
    >>>
    >>> adapter = model_registry.instantiate("Gemini-Flash-Image", config)
    >>> image = await adapter.generate(
    ...     prompt="the hero walks into town",
    ...     characters=[hero_slot],
    ...     aspect_ratio="16:9",
    ...     api_key=config.api_key,
    ... )
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from PIL import Image

from .config import RoboConfig
from .models import CharacterSlot

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """A generation call failed.

    The message is already normalized for display on a result card.
    """

    pass


class ImageAdapterBase(ABC):
    """Abstract base class for hosted image model adapters.

    Attributes
    ----------
    name : str
        Registry name of the adapter
    description : str
        Brief description of the model
    config : RoboConfig
        Configuration object containing model settings
    """

    name: str = "Base Image Adapter"
    description: str = "Base class for image adapters"
    version: str = "0.1.0"

    def __init__(self, config: RoboConfig) -> None:
        self.config = config
        logger.info(f"Initialized {self.name} adapter")

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        characters: Sequence[CharacterSlot],
        aspect_ratio: str,
        custom_aspect_ratio: str = "",
        api_key: str | None = None,
    ) -> Image.Image:
        """Generate one image for one prompt.

        Args:
            prompt: Scene description
            characters: Selected character slots carrying reference files
            aspect_ratio: Preset value, or "Custom"
            custom_aspect_ratio: Free-text ratio used when the preset is "Custom"
            api_key: Credential (defaults to the configured key)

        Returns:
            Decoded image

        Raises:
            GenerationError: If the call fails or returns no image
        """
        pass


class ModelRegistry:
    """Registry for managing available image adapters."""

    def __init__(self) -> None:
        self._adapters: dict[str, type[ImageAdapterBase]] = {}

    def register(self, adapter_class: type[ImageAdapterBase]) -> None:
        """Register an adapter class, overwriting any adapter with the same name."""
        adapter_name = adapter_class.name

        if adapter_name in self._adapters:
            logger.warning(f"Model adapter '{adapter_name}' is already registered, overwriting")

        self._adapters[adapter_name] = adapter_class
        logger.info(f"Registered model adapter: {adapter_name}")

    def instantiate(self, adapter_name: str, config: RoboConfig) -> ImageAdapterBase:
        """Create an instance of a registered adapter.

        Args:
            adapter_name: Name of the adapter to instantiate
            config: Configuration object

        Returns:
            New adapter instance

        Raises:
            KeyError: If adapter_name is not registered
        """
        if adapter_name not in self._adapters:
            available = ", ".join(self.list_available())
            raise KeyError(
                f"Model adapter '{adapter_name}' not found. Available adapters: {available}"
            )

        instance = self._adapters[adapter_name](config=config)
        logger.info(f"Instantiated model adapter: {adapter_name}")
        return instance

    def list_available(self) -> list[str]:
        return list(self._adapters.keys())

    def get_adapter_info(self, adapter_name: str) -> dict[str, Any] | None:
        if adapter_name not in self._adapters:
            return None

        adapter_class = self._adapters[adapter_name]
        return {
            "name": adapter_class.name,
            "description": adapter_class.description,
            "version": adapter_class.version,
        }


# Global model registry instance
model_registry = ModelRegistry()
