# uiauto_android/element.py
"""
@file element.py
@brief Located UI element reduced to the data gestures need.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

_BOUNDS_RE = re.compile(r"^\s*\[(-?\d+),(-?\d+)\]\[(-?\d+),(-?\d+)\]\s*$")


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Rect:
    """
    @brief Screen rectangle in device pixels.
    """
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, left: int, top: int, right: int, bottom: int) -> "Rect":
        return cls(left, top, right - left, bottom - top)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width // 2, self.y + self.height // 2)


def parse_bounds(value: Optional[str]) -> Optional[Rect]:
    """
    Parse a uiautomator bounds attribute ("[x1,y1][x2,y2]").

    @return Rect, or None if the value is missing or malformed
    """
    if not value:
        return None
    m = _BOUNDS_RE.match(value)
    if not m:
        return None
    left, top, right, bottom = (int(g) for g in m.groups())
    return Rect.from_corners(left, top, right, bottom)


@dataclass(frozen=True)
class Element:
    """
    @brief Element found in a hierarchy snapshot.

    Holds a copy of the node's attributes and its bounds; it keeps no
    reference to the tree it was read from.
    """
    bounds: Rect
    attributes: Dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_node(cls, node: Any) -> Optional["Element"]:
        """
        Build an element from a parsed hierarchy node.

        @param node lxml element
        @return Element, or None when the node has no usable bounds
        """
        attributes = {str(k): str(v) for k, v in node.attrib.items()}
        bounds = parse_bounds(attributes.get("bounds"))
        if bounds is None:
            return None
        return cls(bounds=bounds, attributes=attributes)

    @property
    def center(self) -> Point:
        return self.bounds.center

    @property
    def text(self) -> str:
        return self.attributes.get("text", "")

    @property
    def class_name(self) -> str:
        return self.attributes.get("class", "")

    @property
    def resource_id(self) -> str:
        return self.attributes.get("resource-id", "")

    @property
    def content_desc(self) -> str:
        return self.attributes.get("content-desc", "")

    @property
    def package(self) -> str:
        return self.attributes.get("package", "")

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(name, default)
