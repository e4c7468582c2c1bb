# uiauto_android/snapshot.py
"""
@file snapshot.py
@brief Capture of UI hierarchy snapshots through `uiautomator dump`.
"""

from __future__ import annotations

import re
from typing import Optional, Pattern, Sequence, Union

from .channel import CommandChannel, ConsoleOutputReceiver, DeviceData
from .hierarchy import HierarchyTree, parse_hierarchy
from .exceptions import CaptureError

DUMP_COMMAND = "uiautomator dump /dev/tty"

XML_PROLOG = "<?xml"

# Exact literals printed by uiautomator around the dump ("hierchary" sic).
NOISE_STRINGS = (
    "Events injected: 1\r\n",
    "Events injected: 1\n",
    "UI hierchary dumped to: /dev/tty",
)

# uiautomator writes the document on one line; the match ends at that line.
DEFAULT_XML_PATTERN = r"<\?xml.*"


def compile_xml_pattern(pattern: Union[str, Pattern[str], None]) -> Pattern[str]:
    """
    Compile an extraction pattern without flags.

    Patterns for multi-line dumps can enable DOTALL inline, e.g. "(?s)<\\?xml.*".
    """
    if pattern is None:
        pattern = DEFAULT_XML_PATTERN
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def strip_noise(text: str, noise: Sequence[str] = NOISE_STRINGS) -> str:
    for item in noise:
        text = text.replace(item, "")
    return text.strip()


def extract_xml(text: str, pattern: Optional[Pattern[str]] = None) -> str:
    """
    Extract the XML document from sanitized dump output.

    @param text Dump output with noise already removed
    @param pattern Regex locating an embedded XML fragment
    @return "" for empty output, the text itself when it starts with the XML
            prolog, otherwise the matched fragment
    @throws CaptureError when the text is non-empty and holds no XML
    """
    if not text or text.startswith(XML_PROLOG):
        return text

    m = (pattern or compile_xml_pattern(None)).search(text)
    if not m:
        raise CaptureError(text)
    return m.group(0)


class SnapshotCapture:
    """
    Issues the hierarchy dump command and sanitizes its output.

    Every call runs a fresh dump; nothing is cached.
    """

    def __init__(
        self,
        channel: CommandChannel,
        device: DeviceData,
        xml_pattern: Union[str, Pattern[str], None] = None,
        noise: Sequence[str] = NOISE_STRINGS,
    ):
        self.channel = channel
        self.device = device
        self.xml_pattern = compile_xml_pattern(xml_pattern)
        self.noise = tuple(noise)

    def dump_screen_string(self) -> str:
        """
        Capture the current hierarchy as XML text.

        @return XML text, or "" when the device printed nothing useful
        @throws CaptureError if the output is non-empty but contains no XML
        """
        receiver = ConsoleOutputReceiver()
        self.channel.execute(self.device, DUMP_COMMAND, receiver)
        return extract_xml(strip_noise(str(receiver), self.noise), self.xml_pattern)

    def dump_screen(self) -> Optional[HierarchyTree]:
        """
        Capture and parse the current hierarchy.

        @return HierarchyTree, or None when the dump was empty
        @throws CaptureError, HierarchyParseError
        """
        xml = self.dump_screen_string()
        if not xml:
            return None
        return parse_hierarchy(xml)
