# uiauto_android/__init__.py
"""
UIAuto Android - UI lookup and input automation over the adb shell.

This package provides:
- DeviceClient: hierarchy dumps, XPath element lookup with retry, input gestures, app state
- Outcome classification of free-text console output
- Channels: CommandChannel interface and the adb-backed AdbShellChannel
- Config: YAML client configuration
- Exceptions: Common exception types
"""

from uiauto_android.appstate import AppStateProbe, AppStatus
from uiauto_android.channel import (AdbShellChannel, CommandChannel,
                                    ConsoleOutputReceiver, DeviceData)
from uiauto_android.config import ClientConfig, load_config
from uiauto_android.device import DeviceClient
from uiauto_android.element import Element, Point, Rect
from uiauto_android.exceptions import (
    UIAutoError,
    ConfigError,
    ValidationError,
    InvalidQueryError,
    TimeoutError,
    TransportError,
    CaptureError,
    HierarchyParseError,
    RemoteFaultError,
    ElementNotFoundError,
    InvalidKeyEventError,
    InvalidTextError,
)
from uiauto_android.hierarchy import HierarchyTree, parse_hierarchy
from uiauto_android.locator import ElementLocator
from uiauto_android.outcome import (GenericError, Outcome, OutcomeKind,
                                    RemoteFault, Success, classify)
from uiauto_android.snapshot import SnapshotCapture

__all__ = [
    "DeviceClient",
    "DeviceData",
    "CommandChannel",
    "AdbShellChannel",
    "ConsoleOutputReceiver",
    "SnapshotCapture",
    "HierarchyTree",
    "parse_hierarchy",
    "ElementLocator",
    "Element",
    "Point",
    "Rect",
    "AppStateProbe",
    "AppStatus",
    "Outcome",
    "OutcomeKind",
    "Success",
    "RemoteFault",
    "GenericError",
    "classify",
    "ClientConfig",
    "load_config",
    "UIAutoError",
    "ConfigError",
    "ValidationError",
    "InvalidQueryError",
    "TimeoutError",
    "TransportError",
    "CaptureError",
    "HierarchyParseError",
    "RemoteFaultError",
    "ElementNotFoundError",
    "InvalidKeyEventError",
    "InvalidTextError",
]

__version__ = "1.0.0"
