"""Reusable UI components for the Robo AI Gradio interface."""

import gradio as gr

from roboai.core.models import CharacterSlot


class CharacterSlotUI:
    """UI block for one character reference slot.

    Each slot has:
    - Inclusion checkbox
    - Editable name
    - Reference thumbnail preview
    - Upload button
    - Attached filename caption
    """

    def __init__(self, slot: CharacterSlot):
        """Initialize a character slot component.

        Args:
            slot: Initial slot values (id, name, selection)
        """
        self.slot_id = slot.slot_id

        with gr.Group():
            with gr.Row():
                self.selected = gr.Checkbox(
                    label="Include", value=slot.is_selected, scale=1, min_width=80
                )
                self.name = gr.Textbox(
                    value=slot.name,
                    placeholder="Character Name",
                    show_label=False,
                    scale=4,
                )
            with gr.Row(equal_height=True):
                self.preview = gr.Image(
                    value=slot.preview,
                    type="pil",
                    interactive=False,
                    show_label=False,
                    height=96,
                    scale=1,
                    min_width=96,
                )
                with gr.Column(scale=3):
                    self.upload = gr.UploadButton(
                        "+ Upload Image",
                        file_types=["image"],
                        type="filepath",
                        size="sm",
                    )
                    self.caption = gr.Markdown("*No image*")


class PromptRowUI:
    """One scene prompt textbox with its remove button."""

    def __init__(self, index: int, visible: bool):
        self.index = index

        with gr.Row(equal_height=True):
            self.text = gr.Textbox(
                show_label=False,
                placeholder=f"Scene {index + 1}: Describe the action...",
                lines=2,
                visible=visible,
                scale=8,
            )
            self.remove = gr.Button("✕", size="sm", visible=False, scale=1, min_width=40)
