"""Pan and zoom model for the full-screen image viewer."""

from dataclasses import dataclass

MIN_SCALE = 0.5
MAX_SCALE = 5.0
BUTTON_STEP = 0.5
WHEEL_STEP = 0.1


def clamp_scale(scale: float) -> float:
    return min(max(MIN_SCALE, scale), MAX_SCALE)


@dataclass
class ViewerState:
    """Scale and offset of the image currently open in the viewer.

    Scale is always kept within [MIN_SCALE, MAX_SCALE]. Switching the viewed
    image resets scale to 1.0 and position to the origin.
    """

    image_ref: str | None = None
    scale: float = 1.0
    x: float = 0.0
    y: float = 0.0
    is_dragging: bool = False
    drag_origin_x: float = 0.0
    drag_origin_y: float = 0.0

    @property
    def is_open(self) -> bool:
        return self.image_ref is not None

    @property
    def zoom_percent(self) -> str:
        return f"{round(self.scale * 100)}%"

    def open(self, image_ref: str) -> None:
        self.image_ref = image_ref
        self.reset()

    def close(self) -> None:
        self.image_ref = None
        self.reset()

    def reset(self) -> None:
        self.scale = 1.0
        self.x = 0.0
        self.y = 0.0
        self.is_dragging = False

    def zoom_in(self) -> float:
        self.scale = clamp_scale(self.scale + BUTTON_STEP)
        return self.scale

    def zoom_out(self) -> float:
        self.scale = clamp_scale(self.scale - BUTTON_STEP)
        return self.scale

    def wheel(self, delta_y: float) -> float:
        """Zoom by one wheel notch; scrolling down (positive delta) zooms out."""
        if delta_y > 0:
            self.scale = clamp_scale(self.scale - WHEEL_STEP)
        elif delta_y < 0:
            self.scale = clamp_scale(self.scale + WHEEL_STEP)
        return self.scale

    # Drag-to-pan: the grab point stays under the pointer
    def begin_drag(self, pointer_x: float, pointer_y: float) -> None:
        self.is_dragging = True
        self.drag_origin_x = pointer_x - self.x
        self.drag_origin_y = pointer_y - self.y

    def drag_to(self, pointer_x: float, pointer_y: float) -> None:
        if not self.is_dragging:
            return
        self.x = pointer_x - self.drag_origin_x
        self.y = pointer_y - self.drag_origin_y

    def end_drag(self) -> None:
        self.is_dragging = False

    def pan_by(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    def css_transform(self) -> str:
        return f"translate({self.x:g}px, {self.y:g}px) scale({self.scale:g})"
