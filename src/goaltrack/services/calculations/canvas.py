"""Pan and zoom state of the goal canvas viewport."""

from dataclasses import dataclass, field

from goaltrack.services.calculations.goal_layout import CARD_HEIGHT, CARD_WIDTH, HORIZONTAL_GAP

MIN_SCALE = 0.2
MAX_SCALE = 2.0
WHEEL_ZOOM_OUT = 0.9
WHEEL_ZOOM_IN = 1.1
BUTTON_ZOOM_IN = 1.2
BUTTON_ZOOM_OUT = 0.8
CLICK_THRESHOLD_MS = 200


def clamp_scale(scale: float) -> float:
    return min(max(scale, MIN_SCALE), MAX_SCALE)


@dataclass
class Transform:
    scale: float = 1.0
    x: float = 0.0
    y: float = 0.0


@dataclass
class CanvasView:
    """Viewport transform driven by wheel, button and drag input."""

    transform: Transform = field(default_factory=Transform)
    dragging: bool = False
    start_x: float = 0.0
    start_y: float = 0.0
    drag_started_ms: float = 0.0

    @staticmethod
    def centered(viewport_width: float, viewport_height: float) -> Transform:
        # Centre between the action and strategy columns
        return Transform(
            scale=1.0,
            x=viewport_width / 2 - (CARD_WIDTH * 2 + HORIZONTAL_GAP * 1.5),
            y=viewport_height / 2 - CARD_HEIGHT,
        )

    @classmethod
    def for_viewport(cls, viewport_width: float, viewport_height: float) -> "CanvasView":
        return cls(transform=cls.centered(viewport_width, viewport_height))

    def reset(self, viewport_width: float, viewport_height: float) -> None:
        self.transform = self.centered(viewport_width, viewport_height)

    def wheel(self, delta_x: float, delta_y: float, ctrl: bool = False) -> None:
        """Ctrl+wheel zooms, a plain wheel pans by the negated deltas."""
        t = self.transform
        if ctrl:
            factor = WHEEL_ZOOM_OUT if delta_y > 0 else WHEEL_ZOOM_IN
            t.scale = clamp_scale(t.scale * factor)
        else:
            t.x -= delta_x
            t.y -= delta_y

    def zoom_in(self) -> None:
        self.transform.scale = clamp_scale(self.transform.scale * BUTTON_ZOOM_IN)

    def zoom_out(self) -> None:
        self.transform.scale = clamp_scale(self.transform.scale * BUTTON_ZOOM_OUT)

    def press(self, client_x: float, client_y: float, at_ms: float, button: int = 0) -> None:
        # Left and middle buttons start a drag
        if button not in (0, 1):
            return
        self.dragging = True
        self.start_x = client_x - self.transform.x
        self.start_y = client_y - self.transform.y
        self.drag_started_ms = at_ms

    def move(self, client_x: float, client_y: float) -> None:
        if self.dragging:
            self.transform.x = client_x - self.start_x
            self.transform.y = client_y - self.start_y

    def release(self, at_ms: float) -> bool:
        """End the drag; True when it was short enough to count as a click."""
        self.dragging = False
        return at_ms - self.drag_started_ms < CLICK_THRESHOLD_MS

    def focus(self) -> None:
        """Reset to the identity transform, used when a goal card is opened."""
        self.transform = Transform()
