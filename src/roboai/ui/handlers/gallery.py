"""Result gallery, viewer and download handlers."""

import json
import logging
import shutil
import tempfile
from pathlib import Path

import gradio as gr

from roboai.core.config import config
from roboai.core.downloads import save_batch, save_result
from roboai.core.models import GenerationResult

from ..models import FormState
from ..rendering import render_viewer_html
from ..state import initialize_ui_state

logger = logging.getLogger(__name__)

PAN_STEP = 50.0


def _viewed_result(state: FormState) -> GenerationResult | None:
    if state.viewer.image_ref is None:
        return None
    for result in state.results:
        if result.result_id == state.viewer.image_ref and result.has_image:
            return result
    return None


def _viewer_outputs(state: FormState) -> tuple[str, str, FormState]:
    result = _viewed_result(state)
    image = result.image if result is not None else None
    return render_viewer_html(state.viewer, image), state.viewer.zoom_percent, state


def _download_dir(state: FormState) -> Path:
    """Fresh folder for this download, replacing the session's previous one."""
    if state.download_dir is not None:
        shutil.rmtree(state.download_dir, ignore_errors=True)
    state.download_dir = Path(tempfile.mkdtemp(prefix="download-", dir=config.downloads_dir))
    return state.download_dir


def open_result(index: int, state: FormState) -> tuple[str, str, FormState]:
    """Open the index-th finished image in the viewer.

    Args:
        index: Position within the gallery of finished images
        state: Form state

    Returns:
        Tuple of (viewer_html, zoom_label, updated_state)
    """
    state = initialize_ui_state(state)
    completed = state.completed_results()

    if not 0 <= index < len(completed):
        state.viewer.close()
    else:
        state.viewer.open(completed[index].result_id)

    return _viewer_outputs(state)


def select_result(evt: gr.SelectData, state: FormState) -> tuple[str, str, FormState]:
    """Gallery select event: open the clicked image in the viewer."""
    return open_result(evt.index, state)


def zoom_in(state: FormState) -> tuple[str, str, FormState]:
    state = initialize_ui_state(state)
    state.viewer.zoom_in()
    return _viewer_outputs(state)


def zoom_out(state: FormState) -> tuple[str, str, FormState]:
    state = initialize_ui_state(state)
    state.viewer.zoom_out()
    return _viewer_outputs(state)


def reset_view(state: FormState) -> tuple[str, str, FormState]:
    state = initialize_ui_state(state)
    state.viewer.reset()
    return _viewer_outputs(state)


def pan_view(dx: float, dy: float, state: FormState) -> tuple[str, str, FormState]:
    """Move the viewed image by (dx, dy) pixels."""
    state = initialize_ui_state(state)
    state.viewer.pan_by(dx, dy)
    return _viewer_outputs(state)


def close_viewer(state: FormState) -> tuple[str, str, FormState]:
    state = initialize_ui_state(state)
    state.viewer.close()
    return _viewer_outputs(state)


def viewer_gesture(payload: str, state: FormState) -> tuple[str, str, FormState]:
    """Apply a pointer gesture reported by the viewer's browser script.

    Args:
        payload: JSON object, either ``{"type": "drag", "x0", "y0", "x1", "y1"}``
            for a completed drag or ``{"type": "wheel", "delta_y"}`` for one
            wheel notch
        state: Form state

    Returns:
        Tuple of (viewer_html, zoom_label, updated_state)
    """
    state = initialize_ui_state(state)
    if not payload or not state.viewer.is_open:
        return _viewer_outputs(state)

    try:
        event = json.loads(payload)
        kind = event["type"]
        if kind == "drag":
            x0, y0, x1, y1 = (float(event[k]) for k in ("x0", "y0", "x1", "y1"))
            state.viewer.begin_drag(x0, y0)
            state.viewer.drag_to(x1, y1)
            state.viewer.end_drag()
        elif kind == "wheel":
            state.viewer.wheel(float(event["delta_y"]))
        else:
            logger.warning(f"Ignoring unknown viewer gesture: {kind!r}")
    except (ValueError, KeyError, TypeError) as e:
        logger.warning(f"Ignoring malformed viewer gesture {payload!r}: {e}")

    return _viewer_outputs(state)


def download_selected(state: FormState) -> tuple[list[str], str, FormState]:
    """Write the image open in the viewer for download.

    Returns:
        Tuple of (file_paths, info_markdown, updated_state)
    """
    state = initialize_ui_state(state)
    result = _viewed_result(state)
    if result is None:
        return [], "*Select a finished image first*", state

    try:
        path = save_result(result, _download_dir(state))
        return [str(path)], f"✅ Ready: `{path.name}`", state
    except Exception as e:
        logger.error(f"Error saving image {result.index}: {e}", exc_info=True)
        return [], f"❌ Could not save image: `{e}`", state


def download_batch(state: FormState) -> tuple[list[str], str, FormState]:
    """Write every finished image of the visible batch for download.

    Returns:
        Tuple of (file_paths, info_markdown, updated_state)
    """
    state = initialize_ui_state(state)
    if not state.completed_results():
        return [], "*No finished images to download*", state

    try:
        paths = save_batch(state.results, _download_dir(state))
        return [str(p) for p in paths], f"✅ {len(paths)} images ready to download", state
    except Exception as e:
        logger.error(f"Error saving batch: {e}", exc_info=True)
        return [], f"❌ Could not save images: `{e}`", state
