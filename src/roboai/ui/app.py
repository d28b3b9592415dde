"""Gradio UI for Robo AI Story Creator."""

import logging

import gradio as gr

from roboai.core.config import config
from roboai.core.model_adapters import model_registry

from .components import CharacterSlotUI, PromptRowUI
from .handlers import (
    add_prompt,
    close_viewer,
    confirm_generation,
    decline_generation,
    download_batch,
    download_selected,
    generate_batch,
    pan_view,
    remove_prompt,
    rename_character,
    reset_view,
    select_result,
    set_aspect_ratio,
    set_custom_aspect_ratio,
    toggle_character,
    update_prompt,
    upload_character_image,
    viewer_gesture,
    zoom_in,
    zoom_out,
)
from .handlers.gallery import PAN_STEP
from .models import ASPECT_RATIO_CHOICES, FormState, default_character_slots
from .rendering import CUSTOM_CSS, EMPTY_BOARD_HTML, VIEWER_HEAD, render_viewer_html
from .state import cleanup_ui_state

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

HELP_MARKDOWN = """
**1. Upload Character References.** Upload clear images for your characters in the
slots provided. Give them names (e.g., "Hero", "Villain") to reference them in your
prompts. Check *Include* to use a character in the current batch.

**2. Choose Aspect Ratio.** Pick 16:9 (Landscape), 1:1 (Square) and so on, or enter a
custom ratio. Unsupported ratios fall back to 1:1.

**3. Write Story Prompts.** Add multiple prompts to create a sequence. Use the exact
character names you set in step 1 (e.g., "Hero running") so the model picks the right
reference image.

**4. Generate & Download.** Click *Generate All Images*; every prompt is processed in
parallel. Click a finished image to zoom and pan, or use *Download Batch* to save them
with numbered, dated filenames.
"""


def _bind(fn, *bound):
    """Prepend fixed arguments to a handler."""
    return lambda *args: fn(*bound, *args)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    app = gr.Blocks(title="Robo AI")

    with app:
        # Session state - one instance per user, released when the session ends
        ui_state = gr.State(
            FormState(aspect_ratio=config.default_aspect_ratio, max_prompts=config.max_prompts),
            delete_callback=cleanup_ui_state,
        )

        gr.Markdown(
            """
            # ⚡ Robo AI
            ### Consistent AI Character Story Creator
            """
        )
        with gr.Accordion("How to use", open=False):
            gr.Markdown(HELP_MARKDOWN)

        with gr.Row():
            with gr.Column(scale=1, min_width=380):
                controls = create_controls(ui_state)
            with gr.Column(scale=2):
                create_results(ui_state, controls)

    return app, CUSTOM_CSS


def create_controls(ui_state) -> dict:
    """Left column: characters, aspect ratio, prompts and the generate action.

    Args:
        ui_state: UI state component

    Returns:
        Generation buttons and the confirmation group, for wiring to outputs
    """
    # 1. Characters
    gr.Markdown("### 1. Characters")
    slot_uis = [CharacterSlotUI(slot) for slot in default_character_slots(config.character_slots)]

    for slot_ui in slot_uis:
        slot_ui.selected.input(
            fn=_bind(toggle_character, slot_ui.slot_id),
            inputs=[slot_ui.selected, ui_state],
            outputs=[ui_state],
        )
        slot_ui.name.input(
            fn=_bind(rename_character, slot_ui.slot_id),
            inputs=[slot_ui.name, ui_state],
            outputs=[ui_state],
        )
        slot_ui.upload.upload(
            fn=_bind(upload_character_image, slot_ui.slot_id),
            inputs=[slot_ui.upload, ui_state],
            outputs=[slot_ui.selected, slot_ui.preview, slot_ui.caption, ui_state],
        )

    # 2. Aspect Ratio
    gr.Markdown("### 2. Aspect Ratio")
    aspect_ratio_dropdown = gr.Dropdown(
        label="Aspect Ratio",
        choices=ASPECT_RATIO_CHOICES,
        value=config.default_aspect_ratio,
    )
    custom_ratio_input = gr.Textbox(
        label="Custom Ratio",
        placeholder="e.g., 21:9",
        visible=False,
        info="Supported: 1:1, 3:4, 4:3, 9:16, 16:9 (others fall back to 1:1)",
    )
    aspect_ratio_dropdown.change(
        fn=set_aspect_ratio,
        inputs=[aspect_ratio_dropdown, ui_state],
        outputs=[custom_ratio_input, ui_state],
    )
    custom_ratio_input.input(
        fn=set_custom_aspect_ratio,
        inputs=[custom_ratio_input, ui_state],
        outputs=[ui_state],
    )

    # 3. Story Prompts
    with gr.Row():
        gr.Markdown("### 3. Story Prompts")
        prompt_count = gr.Markdown(f"1/{config.max_prompts}")

    row_count = config.max_prompts
    prompt_rows = [PromptRowUI(i, visible=(i == 0)) for i in range(row_count)]
    add_prompt_btn = gr.Button("+ Add Scene Prompt", variant="secondary", size="sm")

    row_outputs = (
        [row.text for row in prompt_rows]
        + [row.remove for row in prompt_rows]
        + [prompt_count, add_prompt_btn, ui_state]
    )

    for row in prompt_rows:
        row.text.input(
            fn=_bind(update_prompt, row.index),
            inputs=[row.text, ui_state],
            outputs=[ui_state],
        )
        row.remove.click(
            fn=_bind(remove_prompt, row.index),
            inputs=[ui_state],
            outputs=row_outputs,
        )

    add_prompt_btn.click(
        fn=add_prompt,
        inputs=[ui_state],
        outputs=row_outputs,
    )

    # 4. Action
    generate_btn = gr.Button("Generate All Images", variant="stop", size="lg")

    with gr.Group(visible=False) as confirm_group:
        gr.Markdown("⚠️ **No character reference images selected.** Generate generic images?")
        with gr.Row():
            confirm_btn = gr.Button("Generate without references", variant="primary")
            cancel_btn = gr.Button("Cancel", variant="secondary")

    return {
        "generate_btn": generate_btn,
        "confirm_group": confirm_group,
        "confirm_btn": confirm_btn,
        "cancel_btn": cancel_btn,
    }


def create_results(ui_state, controls):
    """Right column: status, result cards, viewer and downloads.

    Args:
        ui_state: UI state component
        controls: Generation buttons returned by create_controls
    """
    gr.Markdown("## Generated Stories")
    status_output = gr.Markdown("*Your generated storyboards will appear here*")
    board = gr.HTML(EMPTY_BOARD_HTML)

    gallery = gr.Gallery(
        label="Finished images (click to zoom)",
        columns=4,
        height=220,
        object_fit="cover",
        allow_preview=False,
    )

    with gr.Accordion("Zoom View", open=True):
        viewer_html = gr.HTML(render_viewer_html(FormState().viewer, None))
        viewer_event = gr.Textbox(
            elem_id="robo-viewer-event",
            elem_classes=["robo-hidden"],
            show_label=False,
            container=False,
        )
        with gr.Row():
            zoom_out_btn = gr.Button("−", size="sm")
            zoom_label = gr.Markdown("100%")
            zoom_in_btn = gr.Button("+", size="sm")
            reset_btn = gr.Button("Reset", size="sm")
            close_btn = gr.Button("Close", size="sm")
        with gr.Row():
            pan_left_btn = gr.Button("◀", size="sm")
            pan_up_btn = gr.Button("▲", size="sm")
            pan_down_btn = gr.Button("▼", size="sm")
            pan_right_btn = gr.Button("▶", size="sm")

    with gr.Row():
        download_selected_btn = gr.Button("Download Selected", variant="secondary")
        download_batch_btn = gr.Button("Download Batch", variant="secondary", interactive=False)
    download_files = gr.File(label="Downloads", file_count="multiple", interactive=False)
    download_info = gr.Markdown("")

    # Generation events
    generation_outputs = [
        status_output,
        board,
        gallery,
        controls["confirm_group"],
        download_batch_btn,
        ui_state,
    ]

    # New submissions replace the visible batch without waiting for the old one
    controls["generate_btn"].click(
        fn=generate_batch,
        inputs=[ui_state],
        outputs=generation_outputs,
        concurrency_limit=None,
    )
    controls["confirm_btn"].click(
        fn=confirm_generation,
        inputs=[ui_state],
        outputs=generation_outputs,
        concurrency_limit=None,
    )
    controls["cancel_btn"].click(
        fn=decline_generation,
        inputs=[ui_state],
        outputs=generation_outputs,
    )

    # Viewer events
    viewer_outputs = [viewer_html, zoom_label, ui_state]
    gallery.select(fn=select_result, inputs=[ui_state], outputs=viewer_outputs)
    zoom_in_btn.click(fn=zoom_in, inputs=[ui_state], outputs=viewer_outputs)
    zoom_out_btn.click(fn=zoom_out, inputs=[ui_state], outputs=viewer_outputs)
    reset_btn.click(fn=reset_view, inputs=[ui_state], outputs=viewer_outputs)
    close_btn.click(fn=close_viewer, inputs=[ui_state], outputs=viewer_outputs)
    # Every drag and wheel notch counts, so none are coalesced
    viewer_event.input(
        fn=viewer_gesture,
        inputs=[viewer_event, ui_state],
        outputs=viewer_outputs,
        trigger_mode="multiple",
    )
    for button, (dx, dy) in [
        (pan_left_btn, (-PAN_STEP, 0.0)),
        (pan_right_btn, (PAN_STEP, 0.0)),
        (pan_up_btn, (0.0, -PAN_STEP)),
        (pan_down_btn, (0.0, PAN_STEP)),
    ]:
        button.click(
            fn=_bind(pan_view, dx, dy),
            inputs=[ui_state],
            outputs=viewer_outputs,
        )

    # Download events
    download_selected_btn.click(
        fn=download_selected,
        inputs=[ui_state],
        outputs=[download_files, download_info, ui_state],
    )
    download_batch_btn.click(
        fn=download_batch,
        inputs=[ui_state],
        outputs=[download_files, download_info, ui_state],
    )


def main():
    """Main entry point for the application."""
    logger.info("Starting Robo AI Story Creator...")
    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")
    logger.info(f"Available model adapters: {model_registry.list_available()}")
    logger.info(f"Default adapter: {model_registry.get_adapter_info(config.default_model_adapter)}")

    if not config.api_key:
        logger.warning("No API key configured; set ROBOAI_API_KEY, API_KEY or GEMINI_API_KEY")

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
        head=VIEWER_HEAD,
        allowed_paths=[str(config.downloads_dir)],
    )


if __name__ == "__main__":
    main()
