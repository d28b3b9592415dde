"""Hosted image model adapters.

Importing this package registers every adapter with the global model registry.
"""

from .gemini_flash_image import GeminiFlashImageAdapter

__all__ = ["GeminiFlashImageAdapter"]
