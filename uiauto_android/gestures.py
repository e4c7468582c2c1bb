# uiauto_android/gestures.py
"""
@file gestures.py
@brief Input primitives (tap, swipe, key event, text) with classified outcomes.
"""

from __future__ import annotations

from typing import Callable

from .channel import CommandChannel, ConsoleOutputReceiver, DeviceData
from .element import Element, Point
from .exceptions import (ElementNotFoundError, InvalidKeyEventError,
                         InvalidTextError, UIAutoError)
from .outcome import Outcome, classify


class GestureIssuer:
    """
    Sends `input` commands and turns their console output into exceptions.

    Every primitive follows the same template: format the command, run it,
    classify the output. A remote fault raises RemoteFaultError; a generic
    error raises the primitive's own error type.
    """

    def __init__(self, channel: CommandChannel, device: DeviceData):
        self.channel = channel
        self.device = device

    def run(self, command: str) -> Outcome:
        """Execute a command and classify its output without raising."""
        receiver = ConsoleOutputReceiver()
        self.channel.execute(self.device, command, receiver)
        return classify(str(receiver))

    def _issue(self, command: str, error_factory: Callable[[], UIAutoError]) -> None:
        self.run(command).raise_for(error_factory)

    # -------------------------
    # Tap
    # -------------------------

    def click(self, point: Point) -> None:
        """Tap at a point."""
        self.click_at(point.x, point.y)

    def click_at(self, x: int, y: int) -> None:
        """Tap at coordinates."""
        self._issue(f"input tap {x} {y}", ElementNotFoundError)

    # -------------------------
    # Swipe
    # -------------------------

    def swipe_elements(self, first: Element, second: Element, speed: int) -> None:
        """Swipe from the center of one element to the center of another."""
        self.swipe_points(first.center, second.center, speed)

    def swipe_points(self, first: Point, second: Point, speed: int) -> None:
        """Swipe between two points over `speed` milliseconds."""
        self.swipe_at(first.x, first.y, second.x, second.y, speed)

    def swipe_at(self, x1: int, y1: int, x2: int, y2: int, speed: int) -> None:
        """Swipe from [x1, y1] to [x2, y2] over `speed` milliseconds."""
        self._issue(f"input swipe {x1} {y1} {x2} {y2} {speed}", ElementNotFoundError)

    # -------------------------
    # Keyboard
    # -------------------------

    def send_key_event(self, key: str) -> None:
        """
        Send a key event, e.g. "KEYCODE_HOME" or "3".
        See https://developer.android.com/reference/android/view/KeyEvent
        """
        self._issue(f"input keyevent {key}", InvalidKeyEventError)

    def send_text(self, text: str) -> None:
        """
        Type text through the input method.

        The text is passed verbatim; the stock input tool cannot type some
        non-Latin scripts (e.g. Cyrillic).
        """
        self._issue(f"input text {text}", InvalidTextError)

    # -------------------------
    # App lifecycle (unclassified)
    # -------------------------

    def start_app(self, package_name: str) -> None:
        self.channel.execute(self.device, f"monkey -p {package_name} 1", ConsoleOutputReceiver())

    def stop_app(self, package_name: str) -> None:
        self.channel.execute(self.device, f"am force-stop {package_name}", ConsoleOutputReceiver())
