"""HTML rendering for result cards and the pan/zoom viewer."""

import base64
import html
import io

from PIL import Image

from roboai.core.downloads import format_download_date
from roboai.core.models import GenerationResult, ResultStatus
from roboai.core.viewer import ViewerState

THUMBNAIL_SIZE = (512, 512)

EMPTY_BOARD_HTML = """
<div class="robo-empty">
  <p><strong>Ready to create your story?</strong></p>
  <p>Set up your characters and prompts, then hit Generate.</p>
</div>
"""

CUSTOM_CSS = """
.robo-board { display: grid; grid-template-columns: repeat(auto-fill, minmax(260px, 1fr)); gap: 16px; }
.robo-card { border: 1px solid #374151; border-radius: 10px; overflow: hidden; background: #1e293b; }
.robo-card .robo-frame { position: relative; aspect-ratio: 16 / 9; background: #111827;
  display: flex; align-items: center; justify-content: center; }
.robo-card .robo-frame img { width: 100%; height: 100%; object-fit: cover; }
.robo-card .robo-badge { position: absolute; top: 8px; right: 8px; padding: 2px 6px;
  background: rgba(0,0,0,.5); border-radius: 4px; font-family: monospace; font-size: 11px; color: #fff; }
.robo-card .robo-body { padding: 12px; font-size: 13px; color: #d1d5db; }
.robo-card .robo-footer { margin-top: 8px; font-family: monospace; font-size: 11px; color: #6b7280;
  display: flex; justify-content: space-between; }
.robo-pending { color: #9ca3af; font-size: 12px; }
.robo-error { color: #f87171; font-size: 12px; padding: 12px; text-align: center; }
.robo-empty { border: 2px dashed #374151; border-radius: 16px; padding: 48px; text-align: center; color: #9ca3af; }
.robo-viewer { height: 520px; overflow: hidden; background: #000; display: flex;
  align-items: center; justify-content: center; border-radius: 8px; }
.robo-viewer img { max-width: 100%; max-height: 100%; object-fit: contain; transition: transform 75ms linear;
  cursor: grab; touch-action: none; }
.robo-hidden { display: none !important; }
"""

# Pointer drags and wheel notches over the viewer are forwarded to the server
# through the hidden #robo-viewer-event textbox as JSON payloads.
VIEWER_HEAD = """
<script>
(() => {
  let drag = null;
  const send = (payload) => {
    const box = document.querySelector("#robo-viewer-event textarea");
    if (!box) return;
    box.value = JSON.stringify({ ...payload, t: Date.now() });
    box.dispatchEvent(new Event("input", { bubbles: true }));
  };
  const transform = (img, dx, dy) => {
    const { x, y, scale } = img.dataset;
    return `translate(${+x + dx}px, ${+y + dy}px) scale(${scale})`;
  };
  document.addEventListener("pointerdown", (e) => {
    const img = e.target.closest && e.target.closest(".robo-viewer img");
    if (!img) return;
    e.preventDefault();
    drag = { img, x0: e.clientX, y0: e.clientY };
    img.style.cursor = "grabbing";
  });
  document.addEventListener("pointermove", (e) => {
    if (!drag) return;
    drag.img.style.transform = transform(drag.img, e.clientX - drag.x0, e.clientY - drag.y0);
  });
  document.addEventListener("pointerup", (e) => {
    if (!drag) return;
    drag.img.style.cursor = "";
    send({ type: "drag", x0: drag.x0, y0: drag.y0, x1: e.clientX, y1: e.clientY });
    drag = null;
  });
  document.addEventListener("wheel", (e) => {
    if (!(e.target.closest && e.target.closest(".robo-viewer img"))) return;
    e.preventDefault();
    send({ type: "wheel", delta_y: e.deltaY });
  }, { passive: false });
})();
</script>
"""


def image_to_data_url(image: Image.Image, max_size: tuple[int, int] | None = THUMBNAIL_SIZE) -> str:
    """Encode an image as an inline PNG data URL, optionally downscaled."""
    if max_size is not None:
        image = image.copy()
        image.thumbnail(max_size)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def _render_frame(result: GenerationResult) -> str:
    if result.status is ResultStatus.PENDING:
        return f'<span class="robo-pending">Dreaming up scene {result.index}...</span>'
    if result.status is ResultStatus.FAILED:
        return f'<div class="robo-error">⚠ {html.escape(result.error or "Failed")}</div>'
    if result.image is not None:
        return f'<img src="{image_to_data_url(result.image)}" alt="{html.escape(result.prompt)}"/>'
    return ""


def render_result_card(result: GenerationResult) -> str:
    footer = ""
    if result.has_image:
        footer = (
            '<div class="robo-footer">'
            f"<span>{format_download_date(result.created_at.date())}</span>"
            "<span>Generative AI</span></div>"
        )

    return (
        f'<div class="robo-card" id="{html.escape(result.result_id)}">'
        f'<div class="robo-frame">{_render_frame(result)}'
        f'<span class="robo-badge">{result.index:03d}</span></div>'
        f'<div class="robo-body"><p>{html.escape(result.prompt)}</p>{footer}</div>'
        "</div>"
    )


def render_results_html(results: list[GenerationResult]) -> str:
    """Render one card per result in index order."""
    if not results:
        return EMPTY_BOARD_HTML

    cards = "".join(render_result_card(result) for result in sorted(results, key=lambda r: r.index))
    return f'<div class="robo-board">{cards}</div>'


def render_viewer_html(viewer: ViewerState, image: Image.Image | None) -> str:
    """Render the viewed image with the viewer's current transform."""
    if image is None:
        return '<div class="robo-viewer"><span class="robo-pending">Select an image to zoom</span></div>'

    return (
        '<div class="robo-viewer">'
        f'<img src="{image_to_data_url(image, max_size=None)}" alt="Zoom view" '
        f'data-x="{viewer.x:g}" data-y="{viewer.y:g}" data-scale="{viewer.scale:g}" '
        f'style="transform: {viewer.css_transform()}" draggable="false"/>'
        "</div>"
    )


def render_status(state_results: list[GenerationResult], is_generating: bool) -> str:
    """Summary line shown above the result board."""
    if not state_results:
        return "*Your generated storyboards will appear here*"

    done = sum(1 for r in state_results if r.has_image)
    failed = sum(1 for r in state_results if r.error is not None)
    total = len(state_results)
    if is_generating:
        return f"⏳ **Generating...** {done + failed}/{total} finished"
    if failed:
        return f"✅ **Batch complete:** {done} succeeded, {failed} failed"
    return f"✅ **Batch complete:** {done} images"
