"""Batch dispatch: one independent generation call per prompt.

A submission becomes a :class:`Batch` of pending placeholders, one per
non-empty prompt, numbered from 1 in prompt order. :class:`BatchDispatcher`
then starts one asyncio task per placeholder and yields a :class:`Completion`
as each call resolves, in whatever order they finish.

Completions are applied by ``result_id``. Every completion also carries the
token of the batch it was issued for, so a holder of newer state can discard
completions from a superseded batch (see ``FormState.apply_completion``).

There is no retry, no cancellation and no overall timeout. A failure only ever
affects its own placeholder.
"""

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from PIL import Image

from .model_adapters import GenerationError, ImageAdapterBase
from .models import CharacterSlot, GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to generate image"


@dataclass(frozen=True)
class Completion:
    """Outcome of one placeholder's network call."""

    batch_id: str
    result_id: str
    image: Image.Image | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.image is not None


@dataclass
class Batch:
    """The full set of placeholders created by one submission."""

    batch_id: str
    results: list[GenerationResult] = field(default_factory=list)

    def get(self, result_id: str) -> GenerationResult | None:
        for result in self.results:
            if result.result_id == result_id:
                return result
        return None

    @property
    def is_complete(self) -> bool:
        return all(not result.is_pending for result in self.results)

    def apply(self, completion: Completion) -> GenerationResult | None:
        """Transition the matching placeholder.

        Returns:
            The updated result, or None if the completion belongs elsewhere
        """
        if completion.batch_id != self.batch_id:
            return None

        result = self.get(completion.result_id)
        if result is None:
            return None

        if completion.succeeded:
            result.succeed(completion.image)
        else:
            result.fail(completion.error or DEFAULT_FAILURE_MESSAGE)
        return result


def new_batch_id() -> str:
    return uuid.uuid4().hex[:12]


def non_empty_prompts(prompts: Iterable[str]) -> list[str]:
    return [prompt for prompt in prompts if prompt and prompt.strip()]


def prepare_batch(
    prompts: Iterable[str],
    created_at: datetime | None = None,
    batch_id: str | None = None,
) -> Batch:
    """Create pending placeholders for every non-empty prompt.

    Args:
        prompts: Prompt list in display order (blank entries are skipped)
        created_at: Timestamp for the placeholders (default: now)
        batch_id: Batch token (default: a fresh random token)

    Returns:
        Batch whose results are indexed 1..n in prompt order
    """
    batch_id = batch_id or new_batch_id()
    created_at = created_at or datetime.now()

    results = [
        GenerationResult(
            result_id=f"gen-{batch_id}-{i}",
            prompt=prompt,
            index=i + 1,
            batch_id=batch_id,
            created_at=created_at,
        )
        for i, prompt in enumerate(non_empty_prompts(prompts))
    ]
    return Batch(batch_id=batch_id, results=results)


def selected_characters(slots: Iterable[CharacterSlot]) -> list[CharacterSlot]:
    """Slots that are both flagged for inclusion and carry a file."""
    return [slot for slot in slots if slot.is_selected and slot.has_file]


class BatchDispatcher:
    """Fan out one adapter call per placeholder."""

    def __init__(self, adapter: ImageAdapterBase) -> None:
        self.adapter = adapter

    async def run(
        self,
        batch: Batch,
        characters: Sequence[CharacterSlot],
        aspect_ratio: str,
        custom_aspect_ratio: str = "",
        api_key: str | None = None,
    ) -> AsyncIterator[Completion]:
        """Issue every call of the batch concurrently.

        Yields:
            One Completion per placeholder, in completion order
        """
        logger.info(
            f"Starting batch {batch.batch_id}: {len(batch.results)} prompts, "
            f"{len(characters)} character references"
        )

        tasks = [
            asyncio.create_task(
                self._generate_one(
                    batch.batch_id, result, characters, aspect_ratio, custom_aspect_ratio, api_key
                )
            )
            for result in batch.results
        ]

        failures = 0
        for next_done in asyncio.as_completed(tasks):
            completion = await next_done
            if not completion.succeeded:
                failures += 1
            yield completion

        logger.info(
            f"Batch {batch.batch_id} complete: "
            f"{len(tasks) - failures} succeeded, {failures} failed"
        )

    async def _generate_one(
        self,
        batch_id: str,
        result: GenerationResult,
        characters: Sequence[CharacterSlot],
        aspect_ratio: str,
        custom_aspect_ratio: str,
        api_key: str | None,
    ) -> Completion:
        try:
            image = await self.adapter.generate(
                prompt=result.prompt,
                characters=characters,
                aspect_ratio=aspect_ratio,
                custom_aspect_ratio=custom_aspect_ratio,
                api_key=api_key,
            )
        except GenerationError as e:
            logger.error(f"Generation error for prompt {result.index} ({result.prompt!r}): {e}")
            return Completion(batch_id, result.result_id, error=str(e) or DEFAULT_FAILURE_MESSAGE)
        except Exception as e:
            logger.error(
                f"Unexpected error for prompt {result.index} ({result.prompt!r}): {e}",
                exc_info=True,
            )
            return Completion(batch_id, result.result_id, error=str(e) or DEFAULT_FAILURE_MESSAGE)

        return Completion(batch_id, result.result_id, image=image)
