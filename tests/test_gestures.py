# tests/test_gestures.py
"""
Tests for input primitives and their error mapping.
"""

import pytest

from uiauto_android.element import Element, Point, Rect
from uiauto_android.exceptions import (ElementNotFoundError, InvalidKeyEventError,
                                       InvalidTextError, RemoteFaultError,
                                       TransportError)
from uiauto_android.gestures import GestureIssuer
from uiauto_android.outcome import GenericError, RemoteFault, Success

SECURITY_FAULT = (
    "java.lang.SecurityException: Injecting to another application requires INJECT_EVENTS permission\n"
    "\tat android.os.Parcel.createException(Parcel.java:2071)\n"
    "\tat android.os.Parcel.readException(Parcel.java:2039)\n"
)


def _element(x, y, w, h):
    return Element(bounds=Rect(x, y, w, h), attributes={})


class TestCommands:
    """Tests for the command strings sent to the device."""

    def test_click_point(self, channel, device):
        """Should tap at the point."""
        GestureIssuer(channel, device).click(Point(100, 200))
        assert channel.commands == ["input tap 100 200"]

    def test_click_at(self, channel, device):
        """Should tap at raw coordinates."""
        GestureIssuer(channel, device).click_at(5, 7)
        assert channel.commands == ["input tap 5 7"]

    def test_swipe_at(self, channel, device):
        """Should send start, end and duration."""
        GestureIssuer(channel, device).swipe_at(10, 20, 30, 40, 500)
        assert channel.commands == ["input swipe 10 20 30 40 500"]

    def test_swipe_points(self, channel, device):
        """Should swipe between two points."""
        GestureIssuer(channel, device).swipe_points(Point(1, 2), Point(3, 4), 100)
        assert channel.commands == ["input swipe 1 2 3 4 100"]

    def test_swipe_elements_uses_centers(self, channel, device):
        """Should swipe from center to center."""
        first = _element(0, 0, 100, 100)
        second = _element(0, 1000, 200, 50)
        GestureIssuer(channel, device).swipe_elements(first, second, 300)
        assert channel.commands == ["input swipe 50 50 100 1025 300"]

    def test_key_event(self, channel, device):
        """Should send the key verbatim."""
        GestureIssuer(channel, device).send_key_event("KEYCODE_HOME")
        assert channel.commands == ["input keyevent KEYCODE_HOME"]

    def test_text(self, channel, device):
        """Should pass the text verbatim."""
        GestureIssuer(channel, device).send_text("hello")
        assert channel.commands == ["input text hello"]

    def test_start_and_stop_app(self, channel, device):
        """Should launch through monkey and stop through am."""
        issuer = GestureIssuer(channel, device)
        issuer.start_app("com.android.settings")
        issuer.stop_app("com.android.settings")
        assert channel.commands == [
            "monkey -p com.android.settings 1",
            "am force-stop com.android.settings",
        ]


class TestErrorMapping:
    """Tests for turning console output into exceptions."""

    def test_tap_generic_error(self, make_channel, device):
        """Should raise ElementNotFoundError for a rejected tap."""
        channel = make_channel({"input tap 1 2": "Error: Invalid arguments for command: tap"})
        with pytest.raises(ElementNotFoundError) as exc_info:
            GestureIssuer(channel, device).click_at(1, 2)
        assert "Coordinates of element is invalid" in str(exc_info.value)

    def test_swipe_generic_error(self, make_channel, device):
        """Should raise ElementNotFoundError for a rejected swipe."""
        channel = make_channel({"input swipe 1 2 3 4 5": "error"})
        with pytest.raises(ElementNotFoundError):
            GestureIssuer(channel, device).swipe_at(1, 2, 3, 4, 5)

    def test_key_event_generic_error(self, make_channel, device):
        """Should raise InvalidKeyEventError for a rejected key."""
        channel = make_channel({"input keyevent BOGUS": "Error: Unknown keycode: BOGUS"})
        with pytest.raises(InvalidKeyEventError) as exc_info:
            GestureIssuer(channel, device).send_key_event("BOGUS")
        assert "KeyEvent is invalid" in str(exc_info.value)

    def test_text_generic_error(self, make_channel, device):
        """Should raise InvalidTextError for rejected text."""
        channel = make_channel({"input text x": "ERROR"})
        with pytest.raises(InvalidTextError):
            GestureIssuer(channel, device).send_text("x")

    @pytest.mark.parametrize("call", [
        lambda g: g.click_at(1, 2),
        lambda g: g.send_key_event("KEYCODE_HOME"),
        lambda g: g.send_text("x"),
    ])
    def test_remote_fault_raises_remote_fault_error(self, make_channel, device, call):
        """Should raise RemoteFaultError whatever the primitive."""
        channel = make_channel({
            "input tap 1 2": SECURITY_FAULT,
            "input keyevent KEYCODE_HOME": SECURITY_FAULT,
            "input text x": SECURITY_FAULT,
        })
        with pytest.raises(RemoteFaultError) as exc_info:
            call(GestureIssuer(channel, device))
        assert exc_info.value.kind == "SecurityException"
        assert "INJECT_EVENTS" in exc_info.value.message
        assert "Parcel.createException" in exc_info.value.stack_trace

    def test_warning_output_is_success(self, make_channel, device):
        """Should not raise for output without the error keyword."""
        channel = make_channel({"input tap 1 2": "Warning: slow device"})
        GestureIssuer(channel, device).click_at(1, 2)

    def test_app_lifecycle_is_unclassified(self, make_channel, device):
        """Should not raise even when start/stop output mentions errors."""
        channel = make_channel({
            "monkey -p com.missing 1": "** No activities found to run, monkey aborted.\nError",
            "am force-stop com.missing": "java.lang.IllegalArgumentException: Unknown package",
        })
        issuer = GestureIssuer(channel, device)
        issuer.start_app("com.missing")
        issuer.stop_app("com.missing")

    def test_transport_error_propagates(self, make_channel, device):
        """Should not wrap transport faults."""
        channel = make_channel({"input tap 1 2": TransportError("input tap 1 2", details="device offline")})
        with pytest.raises(TransportError):
            GestureIssuer(channel, device).click_at(1, 2)


class TestRun:
    """Tests for GestureIssuer.run()."""

    def test_returns_outcome_without_raising(self, make_channel, device):
        """Should classify output without raising."""
        channel = make_channel({
            "ok": "",
            "bad": "error",
            "fault": SECURITY_FAULT,
        })
        issuer = GestureIssuer(channel, device)
        assert isinstance(issuer.run("ok"), Success)
        assert isinstance(issuer.run("bad"), GenericError)
        assert isinstance(issuer.run("fault"), RemoteFault)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
