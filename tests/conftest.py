# tests/conftest.py
"""
Shared fixtures: a scripted command channel and sample hierarchy dumps.
"""

import pytest

from uiauto_android.channel import CommandChannel, DeviceData


SETTINGS_XML = (
    "<?xml version='1.0' encoding='UTF-8' standalone='yes' ?>"
    '<hierarchy rotation="0">'
    '<node index="0" text="" resource-id="" class="android.widget.FrameLayout" '
    'package="com.android.settings" content-desc="" bounds="[0,0][1080,1920]">'
    '<node index="0" text="Wi-Fi" resource-id="android:id/title" class="android.widget.TextView" '
    'package="com.android.settings" content-desc="" bounds="[42,234][200,290]" />'
    '<node index="1" text="Bluetooth" resource-id="android:id/title" class="android.widget.TextView" '
    'package="com.android.settings" content-desc="bt" bounds="[42,334][260,390]" />'
    "</node>"
    "</hierarchy>"
)


class FakeChannel(CommandChannel):
    """
    Command channel replaying canned console output.

    responses maps a command to:
      - a string (returned on every call),
      - a list (one item consumed per call, the last one repeats),
      - an exception instance (raised),
      - a callable taking the command and returning one of the above.
    Unknown commands produce no output.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.commands = []

    def execute(self, device, command, receiver):
        self.commands.append(command)
        response = self.responses.get(command, "")
        if isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]
        if callable(response) and not isinstance(response, BaseException):
            response = response(command)
        if isinstance(response, BaseException):
            raise response
        receiver.add_output(response)
        receiver.flush()


@pytest.fixture
def device():
    return DeviceData(serial="emulator-5554")


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def settings_xml():
    return SETTINGS_XML


@pytest.fixture
def make_channel():
    """Factory for FakeChannel instances with scripted responses."""
    return FakeChannel
