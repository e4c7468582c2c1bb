# uiauto_android/device.py
"""
@file device.py
@brief DeviceClient: UI lookup, input and app state for one device.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Pattern, Union

from .appstate import AppStateProbe, AppStatus
from .channel import AdbShellChannel, CommandChannel, DeviceData
from .config import ClientConfig
from .element import Element, Point
from .exceptions import ValidationError
from .gestures import GestureIssuer
from .hierarchy import DEFAULT_QUERY, HierarchyTree
from .locator import ElementLocator
from .snapshot import SnapshotCapture
from .waits import Duration, wait_until


class DeviceClient:
    """
    Automation client bound to one device and one command channel.

    Both references are fixed at construction and never change. The client
    keeps no other state between calls: every lookup captures a new snapshot.
    """

    def __init__(
        self,
        channel: CommandChannel,
        device: DeviceData,
        *,
        default_timeout: Duration = 0.0,
        polling_interval: float = 0.2,
        xml_pattern: Union[str, Pattern[str], None] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        @param channel Command channel used for every device command
        @param device Target device; must carry a serial number
        @param default_timeout Lookup retry budget used when a call passes no timeout
        @param polling_interval Pause between lookup attempts (seconds)
        @param xml_pattern Regex used to cut XML out of noisy dump output
        @throws ValidationError if channel/device is missing or the serial is empty
        """
        if channel is None:
            raise ValidationError("channel must not be None")
        if device is None:
            raise ValidationError("device must not be None")
        if not device.serial:
            raise ValidationError("You must specify a serial number for the device")

        self._channel = channel
        self._device = device
        self.default_timeout = default_timeout
        self.log = logger or logging.getLogger("uiauto_android")

        self.capture = SnapshotCapture(channel, device, xml_pattern=xml_pattern)
        self.locator = ElementLocator(self.capture, polling_interval=polling_interval, logger=self.log)
        self.gestures = GestureIssuer(channel, device)
        self.probe = AppStateProbe(channel, device)

    @classmethod
    def from_config(cls, config: ClientConfig, channel: Optional[CommandChannel] = None) -> "DeviceClient":
        """Build a client (with an adb channel unless one is given) from configuration."""
        if channel is None:
            channel = AdbShellChannel(
                adb_path=config.adb.path,
                host=config.adb.host,
                port=config.adb.port,
                command_timeout=config.adb.command_timeout,
            )
        return cls(
            channel,
            DeviceData(serial=config.serial or ""),
            default_timeout=config.locator.default_timeout,
            polling_interval=config.locator.polling_interval,
            xml_pattern=config.locator.xml_pattern,
        )

    @property
    def channel(self) -> CommandChannel:
        return self._channel

    @property
    def device(self) -> DeviceData:
        return self._device

    def __iter__(self) -> Iterator:
        # channel, device = client
        return iter((self._channel, self._device))

    # -------------------------
    # Hierarchy
    # -------------------------

    def dump_screen_string(self) -> str:
        return self.capture.dump_screen_string()

    def dump_screen(self) -> Optional[HierarchyTree]:
        return self.capture.dump_screen()

    def _timeout(self, timeout: Duration) -> Duration:
        return self.default_timeout if timeout is None else timeout

    def find_element(self, query: str = DEFAULT_QUERY, timeout: Duration = None) -> Optional[Element]:
        return self.locator.find_element(query, self._timeout(timeout))

    def find_elements(self, query: str = DEFAULT_QUERY, timeout: Duration = None) -> List[Element]:
        return self.locator.find_elements(query, self._timeout(timeout))

    # -------------------------
    # Input
    # -------------------------

    def click(self, point: Point) -> None:
        self.gestures.click(point)

    def click_at(self, x: int, y: int) -> None:
        self.gestures.click_at(x, y)

    def swipe_elements(self, first: Element, second: Element, speed: int) -> None:
        self.gestures.swipe_elements(first, second, speed)

    def swipe_points(self, first: Point, second: Point, speed: int) -> None:
        self.gestures.swipe_points(first, second, speed)

    def swipe_at(self, x1: int, y1: int, x2: int, y2: int, speed: int) -> None:
        self.gestures.swipe_at(x1, y1, x2, y2, speed)

    def send_key_event(self, key: str) -> None:
        self.gestures.send_key_event(key)

    def send_text(self, text: str) -> None:
        self.gestures.send_text(text)

    # -------------------------
    # Apps
    # -------------------------

    def start_app(self, package_name: str) -> None:
        self.gestures.start_app(package_name)

    def stop_app(self, package_name: str) -> None:
        self.gestures.stop_app(package_name)

    def is_app_running(self, package_name: str) -> bool:
        return self.probe.is_app_running(package_name)

    def is_app_in_foreground(self, package_name: str) -> bool:
        return self.probe.is_app_in_foreground(package_name)

    def get_app_status(self, package_name: str) -> AppStatus:
        return self.probe.get_app_status(package_name)

    def wait_for_app_status(
        self,
        package_name: str,
        status: AppStatus,
        timeout: Duration,
        interval: Optional[float] = None,
    ) -> AppStatus:
        """
        Poll until the app reaches status.

        @throws TimeoutError if the status is not reached within timeout
        """
        interval = self.locator.polling_interval if interval is None else interval
        wait_until(
            lambda: self.get_app_status(package_name) == status,
            timeout=timeout,
            interval=interval,
            description=f"{package_name} to be {status.value}",
            exceptions=(),
        )
        return status
