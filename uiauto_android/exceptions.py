# uiauto_android/exceptions.py
"""
@file exceptions.py
@brief Exception hierarchy for Android device automation.
"""

from __future__ import annotations

from typing import Optional


class UIAutoError(Exception):
    """Base exception for the framework."""
    pass


class ConfigError(UIAutoError):
    """Raised when YAML configuration is invalid."""
    pass


class ValidationError(UIAutoError, ValueError):
    """Raised when a client is constructed with invalid arguments."""
    pass


class InvalidQueryError(UIAutoError):
    """Raised when a path query cannot be evaluated."""

    def __init__(self, query: str, details: Optional[str] = None):
        self.query = query
        self.details = details
        msg = f"Invalid path query '{query}'"
        if details:
            msg += f": {details}"
        super().__init__(msg)


class TimeoutError(UIAutoError):
    """
    Raised when a wait/retry times out.

    Attributes:
        original_exception: The last exception that was raised before timeout
        description: Human-readable description of what was being waited for
        timeout: The timeout value in seconds
        attempt_count: Number of attempts made (if applicable)
        elapsed_time: Actual elapsed time in seconds (if applicable)
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.original_exception: Optional[BaseException] = None
        self.description: Optional[str] = None
        self.timeout: Optional[float] = None
        self.attempt_count: Optional[int] = None
        self.elapsed_time: Optional[float] = None

    def __str__(self) -> str:
        base_msg = super().__str__()

        details = []
        if self.original_exception is not None:
            details.append(f"Original exception: {type(self.original_exception).__name__}")
        if self.attempt_count is not None:
            details.append(f"Attempts: {self.attempt_count}")
        if self.elapsed_time is not None:
            details.append(f"Elapsed: {self.elapsed_time:.2f}s")

        if details:
            return f"{base_msg} [{', '.join(details)}]"
        return base_msg


class TransportError(UIAutoError):
    """
    Raised when the command channel cannot talk to the device.

    The core never retries these; they surface to the caller unchanged.
    """

    def __init__(
        self,
        command: str,
        details: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        self.command = command
        self.details = details
        self.cause = cause
        super().__init__(self.__str__())

    def __str__(self) -> str:
        base = f"TransportError: command='{self.command}'"
        if self.details:
            base += f" details='{self.details}'"
        if self.cause:
            base += f" cause='{type(self.cause).__name__}: {self.cause}'"
        return base


class CaptureError(UIAutoError):
    """Raised when dump output is non-empty but contains no recognizable XML."""

    def __init__(self, output: str):
        self.output = output
        super().__init__(f"An error occurred while receiving xml: {output}")


class HierarchyParseError(UIAutoError):
    """Raised when a hierarchy snapshot is not well-formed XML."""

    def __init__(self, details: str, cause: Optional[BaseException] = None):
        self.details = details
        self.cause = cause
        super().__init__(f"Malformed hierarchy snapshot: {details}")


class RemoteFaultError(UIAutoError):
    """
    Raised when the remote runtime reports an uncaught fault.

    Attributes:
        kind: Fault type name without the namespace prefix (e.g. "SecurityException")
        message: Fault message
        stack_trace: Remaining console lines following the fault header
    """

    def __init__(self, kind: str, message: str, stack_trace: str = ""):
        self.kind = kind
        self.message = message
        self.stack_trace = stack_trace
        super().__init__(f"{kind}: {message}" if kind else message)


class ElementNotFoundError(UIAutoError):
    """Raised when a gesture targets coordinates the device rejects."""

    def __init__(self, message: str = "Coordinates of element is invalid"):
        super().__init__(message)


class InvalidKeyEventError(UIAutoError):
    """Raised when the device rejects a key event."""

    def __init__(self, message: str = "KeyEvent is invalid"):
        super().__init__(message)


class InvalidTextError(UIAutoError):
    """Raised when the device rejects a text input command."""

    def __init__(self, message: str = "Text is invalid"):
        super().__init__(message)
