"""
Input devices for the scene.

The window feeds raw pygame events in; the scene polls the keyboard for
edge-triggered presses and subscribes to pointer presses.
"""

from typing import Callable
import logging

logger = logging.getLogger(__name__)


class KeyInput:
    """
    Keyboard state with edge-triggered queries.

    ``just_down(key)`` is True once per physical press: it is consumed by
    the first query and stays False while the key is held.
    """

    def __init__(self) -> None:
        self._held: set[int] = set()
        self._pending: set[int] = set()

    def is_down(self, key: int) -> bool:
        return key in self._held

    def just_down(self, key: int) -> bool:
        """Check and consume a fresh press of ``key``."""
        if key in self._pending:
            self._pending.discard(key)
            return True
        return False

    def _press(self, key: int) -> None:
        """Called by the window on KEYDOWN."""
        if key not in self._held:
            self._held.add(key)
            self._pending.add(key)

    def _release(self, key: int) -> None:
        """Called by the window on KEYUP."""
        self._held.discard(key)
        self._pending.discard(key)


class PointerInput:
    """Mouse/touch press source with callback subscriptions."""

    def __init__(self) -> None:
        self._pressed = False
        self._press_callbacks: list[Callable[[float, float], None]] = []

    def is_pressed(self) -> bool:
        return self._pressed

    def on_press(self, callback: Callable[[float, float], None]) -> Callable[[], None]:
        self._press_callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._press_callbacks:
                self._press_callbacks.remove(callback)

        return unsubscribe

    def _press(self, x: float, y: float) -> None:
        """Called by the window when the primary button goes down."""
        if self._pressed:
            return
        self._pressed = True
        for callback in self._press_callbacks:
            try:
                callback(x, y)
            except Exception as e:
                logger.error(f"Error in pointer callback: {e}")

    def _release(self) -> None:
        self._pressed = False
