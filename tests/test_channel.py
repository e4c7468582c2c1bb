# tests/test_channel.py
"""
Tests for the console receiver and the adb shell channel.
"""

import subprocess

import pytest

from uiauto_android.channel import (AdbShellChannel, ConsoleOutputReceiver,
                                    DeviceData, resolve_adb)
from uiauto_android.exceptions import TransportError


class TestConsoleOutputReceiver:
    """Tests for ConsoleOutputReceiver."""

    def test_collects_lines(self):
        """Should keep lines in order and end each with a newline."""
        receiver = ConsoleOutputReceiver()
        receiver.add_output("first\nsecond")
        receiver.add_output("third\n")
        assert receiver.lines == ["first", "second", "third"]
        assert str(receiver) == "first\nsecond\nthird\n"

    def test_normalizes_crlf(self):
        """Should split on any line ending."""
        receiver = ConsoleOutputReceiver()
        receiver.add_output("a\r\nb\r\n")
        assert receiver.lines == ["a", "b"]

    def test_trim_lines(self):
        """Should strip each line when asked to."""
        receiver = ConsoleOutputReceiver(trim_lines=True)
        receiver.add_output("   4242  \n")
        assert str(receiver) == "4242\n"

    def test_empty(self):
        """Should render nothing without output."""
        receiver = ConsoleOutputReceiver()
        receiver.add_output("")
        receiver.add_output(None)
        assert str(receiver) == ""
        assert not receiver.flushed
        receiver.flush()
        assert receiver.flushed


class TestResolveAdb:
    """Tests for resolve_adb()."""

    def test_explicit_path(self):
        """Should prefer the explicit path."""
        assert resolve_adb("/opt/adb") == "/opt/adb"

    def test_path_lookup(self, monkeypatch):
        """Should use the executable found on PATH."""
        monkeypatch.setattr("uiauto_android.channel.shutil.which", lambda name: "/usr/bin/adb")
        assert resolve_adb() == "/usr/bin/adb"

    def test_android_home(self, monkeypatch, tmp_path):
        """Should look into platform-tools of the SDK."""
        tools = tmp_path / "platform-tools"
        tools.mkdir()
        (tools / "adb").write_text("")
        monkeypatch.setattr("uiauto_android.channel.shutil.which", lambda name: None)
        monkeypatch.setenv("ANDROID_HOME", str(tmp_path))
        assert resolve_adb() == str(tools / "adb")

    def test_fallback(self, monkeypatch):
        """Should fall back to the bare executable name."""
        monkeypatch.setattr("uiauto_android.channel.shutil.which", lambda name: None)
        monkeypatch.delenv("ANDROID_HOME", raising=False)
        monkeypatch.delenv("ANDROID_SDK_ROOT", raising=False)
        assert resolve_adb() == "adb"


class TestAdbShellChannel:
    """Tests for AdbShellChannel."""

    @pytest.fixture
    def device(self):
        return DeviceData(serial="emulator-5554")

    def _fake_run(self, monkeypatch, returncode=0, stdout="", stderr="", exc=None):
        calls = []

        def fake_run(argv, **kwargs):
            calls.append((argv, kwargs))
            if exc is not None:
                raise exc
            return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)

        monkeypatch.setattr("uiauto_android.channel.subprocess.run", fake_run)
        return calls

    def test_build_argv(self, device):
        """Should target the serial and pass the command as one argument."""
        channel = AdbShellChannel(adb_path="/opt/adb")
        assert channel.build_argv(device, "input tap 1 2") == [
            "/opt/adb", "-s", "emulator-5554", "shell", "input tap 1 2",
        ]

    def test_build_argv_with_server(self, device):
        """Should add the server host and port."""
        channel = AdbShellChannel(adb_path="adb", host="10.0.0.2", port=5038)
        assert channel.build_argv(device, "ls") == [
            "adb", "-H", "10.0.0.2", "-P", "5038", "-s", "emulator-5554", "shell", "ls",
        ]

    def test_execute_writes_output(self, monkeypatch, device):
        """Should stream stdout into the receiver and flush it."""
        calls = self._fake_run(monkeypatch, stdout="line one\nline two\n")
        channel = AdbShellChannel(adb_path="adb", command_timeout=5)
        receiver = ConsoleOutputReceiver()

        channel.execute(device, "echo", receiver)

        assert str(receiver) == "line one\nline two\n"
        assert receiver.flushed
        assert calls[0][1]["timeout"] == 5.0

    def test_command_error_is_output(self, monkeypatch, device):
        """Should hand command failures to the receiver, not raise."""
        self._fake_run(monkeypatch, returncode=1, stderr="Error: Unknown command: bogus\n")
        receiver = ConsoleOutputReceiver()
        AdbShellChannel(adb_path="adb").execute(device, "input bogus", receiver)
        assert "Unknown command" in str(receiver)

    def test_device_offline(self, monkeypatch, device):
        """Should raise TransportError when adb reports a missing device."""
        self._fake_run(monkeypatch, returncode=1, stderr="adb: device 'emulator-5554' not found\n")
        with pytest.raises(TransportError) as exc_info:
            AdbShellChannel(adb_path="adb").execute(device, "ls", ConsoleOutputReceiver())
        assert "not found" in exc_info.value.details
        assert exc_info.value.command == "ls"

    def test_timeout(self, monkeypatch, device):
        """Should raise TransportError when adb hangs."""
        self._fake_run(monkeypatch, exc=subprocess.TimeoutExpired(cmd="adb", timeout=1))
        with pytest.raises(TransportError) as exc_info:
            AdbShellChannel(adb_path="adb", command_timeout=1).execute(device, "ls", ConsoleOutputReceiver())
        assert isinstance(exc_info.value.cause, subprocess.TimeoutExpired)

    def test_missing_executable(self, monkeypatch, device):
        """Should raise TransportError when adb cannot be started."""
        self._fake_run(monkeypatch, exc=FileNotFoundError(2, "No such file or directory"))
        with pytest.raises(TransportError):
            AdbShellChannel(adb_path="/missing/adb").execute(device, "ls", ConsoleOutputReceiver())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
