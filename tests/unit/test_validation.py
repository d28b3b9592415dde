"""Unit tests for submission validation."""

import pytest

from roboai.ui.models import FormState
from roboai.ui.validation import NO_PROMPTS_MESSAGE, ValidationError, check_submission


class TestCheckSubmission:
    """Tests for check_submission function."""

    def test_no_prompts(self, form_state: FormState):
        form_state.prompts = ["", "   "]

        with pytest.raises(ValidationError) as exc_info:
            check_submission(form_state)

        assert str(exc_info.value) == NO_PROMPTS_MESSAGE

    def test_collects_non_empty_prompts(self, form_state_with_hero: FormState):
        form_state_with_hero.prompts = ["one", "", "two"]

        check = check_submission(form_state_with_hero)

        assert check.prompts == ["one", "two"]
        assert [c.name for c in check.characters] == ["Hero"]
        assert not check.needs_confirmation

    def test_needs_confirmation_without_references(self, form_state: FormState):
        """Slot 1 is selected by default but has no file."""
        form_state.prompts = ["one"]

        check = check_submission(form_state)

        assert check.characters == []
        assert check.needs_confirmation

    def test_deselected_reference_needs_confirmation(self, form_state_with_hero: FormState):
        form_state_with_hero.prompts = ["one"]
        form_state_with_hero.update_character("1", is_selected=False)

        assert check_submission(form_state_with_hero).needs_confirmation

    def test_long_prompt_accepted(self, form_state_with_hero: FormState):
        """Prompt length is not limited; every non-empty prompt is kept."""
        long_prompt = "x" * 100_001
        form_state_with_hero.prompts = ["fine", long_prompt]

        check = check_submission(form_state_with_hero)

        assert check.prompts == ["fine", long_prompt]

    def test_does_not_modify_state(self, form_state: FormState):
        form_state.prompts = ["one", ""]

        check_submission(form_state)

        assert form_state.prompts == ["one", ""]
        assert form_state.results == []
