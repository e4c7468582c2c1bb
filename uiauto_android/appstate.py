# uiauto_android/appstate.py
"""
@file appstate.py
@brief Foreground/background/stopped probe for installed apps.
"""

from __future__ import annotations

from enum import Enum

from .channel import CommandChannel, ConsoleOutputReceiver, DeviceData


class AppStatus(Enum):
    """Run state of an app on the device."""
    FOREGROUND = "foreground"
    BACKGROUND = "background"
    STOPPED = "stopped"


class AppStateProbe:
    """Derives AppStatus from the activity stack and the process table."""

    def __init__(self, channel: CommandChannel, device: DeviceData):
        self.channel = channel
        self.device = device

    def _run(self, command: str) -> str:
        receiver = ConsoleOutputReceiver(trim_lines=True)
        self.channel.execute(self.device, command, receiver)
        return str(receiver)

    def is_app_in_foreground(self, package_name: str) -> bool:
        """True if the resumed activity belongs to package_name."""
        output = self._run("dumpsys activity activities | grep mResumedActivity")
        return package_name in output

    def is_app_running(self, package_name: str) -> bool:
        """True if `pidof` reports a positive pid for package_name."""
        tokens = self._run(f"pidof {package_name}").split()
        if not tokens:
            return False
        try:
            pid = int(tokens[0])
        except ValueError:
            return False
        return pid > 0

    def get_app_status(self, package_name: str) -> AppStatus:
        if self.is_app_in_foreground(package_name):
            return AppStatus.FOREGROUND
        if self.is_app_running(package_name):
            return AppStatus.BACKGROUND
        return AppStatus.STOPPED
