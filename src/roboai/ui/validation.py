"""Validation utilities for Robo AI form submissions."""

import logging
from dataclasses import dataclass

from roboai.core.batch import non_empty_prompts, selected_characters
from roboai.core.models import CharacterSlot

from .models import FormState

logger = logging.getLogger(__name__)

NO_PROMPTS_MESSAGE = "Please enter at least one prompt."
NO_REFERENCES_QUESTION = "No character reference images selected. Generate generic images?"


class ValidationError(Exception):
    """User-friendly validation error.

    The message is intended to be displayed directly to the user.
    """

    pass


@dataclass
class SubmissionCheck:
    """Outcome of pre-flight checks for a submission.

    Attributes
    ----------
    prompts : list[str]
        Non-empty prompts in display order
    characters : list[CharacterSlot]
        Slots that are selected and carry a file
    needs_confirmation : bool
        True when no reference image will be sent
    """

    prompts: list[str]
    characters: list[CharacterSlot]

    @property
    def needs_confirmation(self) -> bool:
        return not self.characters


def check_submission(state: FormState) -> SubmissionCheck:
    """Run submission-time checks without touching state.

    Args:
        state: Current form state

    Returns:
        SubmissionCheck describing what would be sent

    Raises:
        ValidationError: If there is no non-empty prompt
    """
    prompts = non_empty_prompts(state.prompts)
    if not prompts:
        raise ValidationError(NO_PROMPTS_MESSAGE)

    characters = selected_characters(state.characters)
    if not characters:
        logger.info("Submission has no character references")

    return SubmissionCheck(prompts=prompts, characters=characters)
