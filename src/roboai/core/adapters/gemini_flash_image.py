"""Gemini Flash Image adapter.

Sends the selected character references as inline image parts, followed by a
synthesized text instruction, to the hosted Gemini image model and decodes the
first inline image part of the first candidate.

Aspect Ratio Handling
---------------------
The model only accepts a small set of ratios. A preset of "Custom" takes the
free-text value from the form; anything outside SUPPORTED_ASPECT_RATIOS is
replaced with "1:1" before the request is sent.
"""

import asyncio
import io
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from PIL import Image

from ..model_adapters import GenerationError, ImageAdapterBase, model_registry
from ..models import AspectRatio, CharacterSlot

logger = logging.getLogger(__name__)

SUPPORTED_ASPECT_RATIOS = ("1:1", "3:4", "4:3", "9:16", "16:9")
FALLBACK_ASPECT_RATIO = "1:1"
DEFAULT_ERROR_MESSAGE = "Failed to generate image"
NO_IMAGE_MESSAGE = "No image data found in response"


def resolve_aspect_ratio(aspect_ratio: str, custom_aspect_ratio: str = "") -> str:
    """Pick the ratio string to send to the model.

    Args:
        aspect_ratio: Preset value (e.g. "16:9") or "Custom"
        custom_aspect_ratio: Free-text ratio, only used with "Custom"

    Returns:
        A member of SUPPORTED_ASPECT_RATIOS
    """
    if aspect_ratio == AspectRatio.CUSTOM.value:
        ratio = (custom_aspect_ratio or "").strip() or FALLBACK_ASPECT_RATIO
    else:
        ratio = (aspect_ratio or "").strip()

    if ratio not in SUPPORTED_ASPECT_RATIOS:
        logger.warning(f"Ratio {ratio!r} is not supported, defaulting to {FALLBACK_ASPECT_RATIO}")
        ratio = FALLBACK_ASPECT_RATIO

    return ratio


def build_instruction(prompt: str, characters: Sequence[CharacterSlot]) -> str:
    """Wrap the scene prompt in an instruction naming the referenced characters."""
    if not characters:
        return f"Generate an image: {prompt}. High quality, consistent style."

    names = ", ".join(slot.name for slot in characters)
    return (
        f"Using the attached character references ({names}), "
        f"generate an image: {prompt}. High quality, consistent style."
    )


def describe_api_error(exc: BaseException) -> str:
    """Normalize a remote failure to a display string.

    Uses the structured message/code/status fields of ``google.genai`` API
    errors when present, e.g. ``"API key not valid (Code: 400) [INVALID_ARGUMENT]"``.
    """
    message = getattr(exc, "message", None) or str(exc) or DEFAULT_ERROR_MESSAGE

    code = getattr(exc, "code", None)
    status = getattr(exc, "status", None)
    if code:
        message += f" (Code: {code})"
    if status:
        message += f" [{status}]"

    return message


def _mime_type_for_suffix(suffix: str) -> str:
    lowered = suffix.strip().lower()
    if lowered in {".jpg", ".jpeg"}:
        return "image/jpeg"
    if lowered == ".webp":
        return "image/webp"
    if lowered == ".gif":
        return "image/gif"
    return "image/png"


def _read_reference(path: Path) -> types.Part:
    return types.Part(
        inline_data=types.Blob(data=path.read_bytes(), mime_type=_mime_type_for_suffix(path.suffix))
    )


def _extract_first_image(response: Any) -> Image.Image:
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            data = getattr(inline_data, "data", None) if inline_data else None
            if data:
                image = Image.open(io.BytesIO(data))
                image.load()
                return image

    raise GenerationError(NO_IMAGE_MESSAGE)


class GeminiFlashImageAdapter(ImageAdapterBase):
    """Adapter for the hosted Gemini 2.5 Flash Image model."""

    name = "Gemini-Flash-Image"
    description = "Gemini image model with character reference images"
    version = "0.1.0"

    def __init__(self, config) -> None:
        super().__init__(config)
        # One client per credential, reused across calls
        self._clients: dict[str, genai.Client] = {}

    def _client(self, api_key: str) -> genai.Client:
        client = self._clients.get(api_key)
        if client is None:
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=self.config.request_timeout_ms),
            )
            self._clients[api_key] = client
        return client

    async def generate(
        self,
        prompt: str,
        characters: Sequence[CharacterSlot],
        aspect_ratio: str,
        custom_aspect_ratio: str = "",
        api_key: str | None = None,
    ) -> Image.Image:
        key = self.config.api_key if api_key is None else api_key
        client = self._client(key)

        # References first for context, then the instruction
        parts: list[types.Part] = []
        for slot in characters:
            if slot.file_path is not None:
                parts.append(await asyncio.to_thread(_read_reference, slot.file_path))
        parts.append(types.Part(text=build_instruction(prompt, characters)))

        ratio = resolve_aspect_ratio(aspect_ratio, custom_aspect_ratio)
        content_config = types.GenerateContentConfig(
            response_modalities=["IMAGE"],
            image_config=types.ImageConfig(aspect_ratio=ratio),
        )

        logger.info(
            f"Requesting {self.config.model_id} image "
            f"(ratio={ratio}, references={len(parts) - 1})"
        )

        try:
            response = await client.aio.models.generate_content(
                model=self.config.model_id,
                contents=[types.Content(role="user", parts=parts)],
                config=content_config,
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini generation error: {e}")
            raise GenerationError(describe_api_error(e)) from e

        return _extract_first_image(response)


model_registry.register(GeminiFlashImageAdapter)
