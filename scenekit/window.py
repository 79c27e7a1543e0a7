"""On-screen window with an OpenGL 3.3 core context, and the frame timer."""

from __future__ import annotations

import dataclasses
import time
from dataclasses import dataclass
from typing import Any, Optional

from .color import Color
from .logger import get_logger

_log = get_logger("scenekit")

_ESCAPE = 0xFF1B
_TIMER_START = time.monotonic()
_current: Optional["Window"] = None


def get_time() -> float:
    """Return the number of seconds since the timer was started."""
    return time.monotonic() - _TIMER_START


def current_window() -> "Window":
    """Return the most recently created open window."""
    if _current is None:
        raise RuntimeError("no window has been created")
    return _current


@dataclass
class WindowSettings:
    """How a window should be constructed."""

    width: int = 640
    height: int = 480
    title: str = ""
    fullscreen: bool = False
    clear_color: Optional[Color] = None


def _create_native(settings: WindowSettings) -> tuple[Any, WindowSettings]:
    import pyglet
    from pyglet import gl

    config = gl.Config(
        double_buffer=True,
        depth_size=24,
        sample_buffers=1,
        samples=4,
        major_version=3,
        minor_version=3,
        forward_compatible=True,
        debug=True,
    )

    screen = None
    if settings.fullscreen:
        _log.debug("Get primary monitor to create fullscreen window.")
        try:
            display_module = pyglet.display
        except AttributeError:
            display_module = pyglet.canvas
        screen = display_module.get_display().get_default_screen()
        _log.debug("Checking available video modes:")
        modes = screen.get_modes()
        for mode in modes:
            _log.debug(f"-- {mode}")
        if not modes:
            raise RuntimeError("No video modes available for fullscreen window.")
        ideal = modes[-1]
        settings = dataclasses.replace(settings, width=ideal.width, height=ideal.height)

    _log.info("Creating new window")
    try:
        native = pyglet.window.Window(
            width=settings.width,
            height=settings.height,
            caption=settings.title,
            fullscreen=settings.fullscreen,
            screen=screen,
            config=config,
            vsync=True,
        )
    except Exception as exc:
        raise RuntimeError(f"Could not create window: {exc}") from exc
    native.switch_to()
    return native, settings


class Window:
    """A window that the renderer draws into.

    A ready-made native window object may be passed in; otherwise one is
    created with pyglet. Pressing Escape or closing the window marks it
    as should-close rather than destroying it.
    """

    def __init__(self, settings: WindowSettings, native: Any = None):
        global _current
        if native is None:
            native, settings = _create_native(settings)
        self.settings = settings
        self._native = native
        self._should_close = False
        native.push_handlers(on_key_press=self._on_key_press, on_close=self._on_close)
        _current = self

    def _on_key_press(self, symbol: int, modifiers: int) -> bool:
        if symbol == _ESCAPE:
            self._should_close = True
            return True
        return False

    def _on_close(self) -> bool:
        self._should_close = True
        return True

    @property
    def native(self) -> Any:
        return self._native

    @property
    def width(self) -> int:
        """Width of the window in pixels."""
        return self._native.get_size()[0]

    @property
    def height(self) -> int:
        """Height of the window in pixels."""
        return self._native.get_size()[1]

    def should_close(self) -> bool:
        """Whether a request to close this window has been received."""
        return self._should_close

    def swap(self) -> None:
        """Swap buffers and process pending events."""
        self._native.flip()
        self._native.dispatch_events()

    def set_title(self, title: str) -> None:
        self.settings.title = title
        self._native.set_caption(title)

    def close(self) -> None:
        """Close the window and release its context."""
        global _current
        self._native.close()
        if _current is self:
            _current = None

    def __enter__(self) -> "Window":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()