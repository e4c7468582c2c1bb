# uiauto_android/channel.py
"""
@file channel.py
@brief Command channel abstraction and the adb shell implementation.

A command channel executes a shell command string on a device and streams
the console text into a receiver. The automation core only depends on the
CommandChannel interface; AdbShellChannel is the stock implementation
backed by the adb executable.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import TransportError

# adb prints these on stderr when the transport itself failed
_TRANSPORT_ERROR_MARKERS = (
    "error: device",
    "error: no devices",
    "error: closed",
    "error: protocol fault",
    "adb: device",
    "adb: no devices",
    "cannot connect to daemon",
)


@dataclass(frozen=True)
class DeviceData:
    """
    @brief Opaque handle of a device reachable through a command channel.
    """
    serial: str
    state: str = "device"
    model: str = ""


class ConsoleOutputReceiver:
    """
    Collects console text written by a command channel.

    str(receiver) returns the accumulated output after the command completed.
    """

    def __init__(self, trim_lines: bool = False):
        self.trim_lines = trim_lines
        self._lines: List[str] = []
        self._flushed = False

    def add_output(self, text: str) -> None:
        """Append a chunk of console text (may contain several lines)."""
        if not text:
            return
        for line in text.splitlines():
            self._lines.append(line.strip() if self.trim_lines else line)

    def flush(self) -> None:
        self._flushed = True

    @property
    def flushed(self) -> bool:
        return self._flushed

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def __str__(self) -> str:
        return "".join(line + "\n" for line in self._lines)


class CommandChannel(ABC):
    """
    Abstract command channel.

    Implementations must write all console output of the command into the
    receiver and call receiver.flush() when done. Communication failures
    are raised as TransportError.
    """

    @abstractmethod
    def execute(self, device: DeviceData, command: str, receiver: ConsoleOutputReceiver) -> None:
        """
        Execute a shell command on the device.

        Args:
            device: Target device
            command: Shell command line
            receiver: Sink for console output
        """
        pass


def resolve_adb(adb_path: Optional[str] = None) -> str:
    """
    Locate the adb executable.

    Order: explicit path, PATH lookup, ANDROID_HOME / ANDROID_SDK_ROOT platform-tools.
    Falls back to plain "adb" so the OS reports a missing binary on first use.
    """
    if adb_path:
        return adb_path
    found = shutil.which("adb")
    if found:
        return found
    android_home = os.environ.get("ANDROID_HOME") or os.environ.get("ANDROID_SDK_ROOT")
    if android_home:
        for name in ("adb", "adb.exe"):
            candidate = os.path.join(android_home, "platform-tools", name)
            if os.path.exists(candidate):
                return candidate
    return "adb"


class AdbShellChannel(CommandChannel):
    """
    Runs commands through `adb [-H host] [-P port] -s <serial> shell <command>`.
    """

    def __init__(
        self,
        adb_path: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        command_timeout: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        self.adb_path = resolve_adb(adb_path)
        self.host = host
        self.port = port
        self.command_timeout = float(command_timeout)
        self.log = logger or logging.getLogger("uiauto_android")

    def build_argv(self, device: DeviceData, command: str) -> List[str]:
        argv = [self.adb_path]
        if self.host:
            argv += ["-H", self.host]
        if self.port:
            argv += ["-P", str(self.port)]
        argv += ["-s", device.serial, "shell", command]
        return argv

    def execute(self, device: DeviceData, command: str, receiver: ConsoleOutputReceiver) -> None:
        argv = self.build_argv(device, command)
        self.log.debug("adb shell [%s]: %s", device.serial, command)

        try:
            proc = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.command_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise TransportError(command, details=f"timed out after {self.command_timeout}s", cause=e) from e
        except OSError as e:
            raise TransportError(command, details=f"cannot run {self.adb_path}", cause=e) from e

        stderr = proc.stderr or ""
        if proc.returncode != 0 and any(m in stderr.lower() for m in _TRANSPORT_ERROR_MARKERS):
            raise TransportError(command, details=stderr.strip())

        receiver.add_output(proc.stdout or "")
        receiver.add_output(stderr)
        receiver.flush()
        self.log.debug("adb shell [%s] exit=%s", device.serial, proc.returncode)
