# uiauto_android/outcome.py
"""
@file outcome.py
@brief Classification of free-text console output into tagged outcomes.

The remote input tool reports failures as human-readable text. This module
turns that text into one of three results so callers can branch on the tag:

- Success:      no fault marker, no error keyword
- RemoteFault:  uncaught fault from the remote runtime ("java.lang." prefix)
- GenericError: the error keyword appears anywhere (case-insensitive)

The structured fault is checked first: its message may contain the keyword.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union

from .exceptions import RemoteFaultError, UIAutoError

REMOTE_FAULT_PREFIX = "java.lang."
ERROR_KEYWORD = "error"
UNKNOWN_ERROR = "An unknown error occurred."

_FAULT_HEADER_RE = re.compile(r"^java\.lang\.([\w.$]+):?\s*(.*)$")


class OutcomeKind(Enum):
    """Tag for classified command outcomes."""
    SUCCESS = "success"
    REMOTE_FAULT = "remote_fault"
    GENERIC_ERROR = "generic_error"


@dataclass(frozen=True)
class Success:
    tag = OutcomeKind.SUCCESS

    @property
    def ok(self) -> bool:
        return True

    def raise_for(self, error_factory: Callable[[], UIAutoError]) -> None:
        return None


@dataclass(frozen=True)
class RemoteFault:
    """Structured fault raised by the remote runtime."""
    kind: str
    message: str
    stack_trace: str = ""

    tag = OutcomeKind.REMOTE_FAULT

    @property
    def ok(self) -> bool:
        return False

    def to_exception(self) -> RemoteFaultError:
        return RemoteFaultError(self.kind, self.message, self.stack_trace)

    def raise_for(self, error_factory: Callable[[], UIAutoError]) -> None:
        raise self.to_exception()


@dataclass(frozen=True)
class GenericError:
    """Error keyword present without the structured fault prefix."""
    description: str

    tag = OutcomeKind.GENERIC_ERROR

    @property
    def ok(self) -> bool:
        return False

    def raise_for(self, error_factory: Callable[[], UIAutoError]) -> None:
        raise error_factory()


Outcome = Union[Success, RemoteFault, GenericError]


def parse_remote_fault(text: str) -> RemoteFault:
    """
    Parse a remote fault report into type name, message and stack trace.

    @param text Console output starting with the fault prefix
    @return RemoteFault; lines other than the first fault header are kept as the stack trace
    """
    type_name = ""
    message = ""
    header_found = False
    trace_lines = []

    for line in text.splitlines():
        if not line.strip():
            continue
        if not header_found and line.lower().startswith(REMOTE_FAULT_PREFIX):
            m = _FAULT_HEADER_RE.match(line.strip())
            if m:
                type_name = m.group(1)
                message = m.group(2).strip()
                header_found = True
                continue
        trace_lines.append(line.rstrip())

    return RemoteFault(
        kind=type_name,
        message=message or UNKNOWN_ERROR,
        stack_trace="\n".join(trace_lines),
    )


def classify(raw_text: str) -> Outcome:
    """
    Classify console output of a remote command.

    @param raw_text Raw console text (may be None or empty)
    @return Success, RemoteFault or GenericError
    """
    text = (raw_text or "").strip()

    if text.startswith(REMOTE_FAULT_PREFIX):
        return parse_remote_fault(text)
    if ERROR_KEYWORD in text.lower():
        return GenericError(description=text)
    return Success()
