# uiauto_android/locator.py
"""
@file locator.py
@brief Path-query element lookup with bounded retry over fresh snapshots.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .element import Element
from .exceptions import CaptureError, HierarchyParseError
from .hierarchy import DEFAULT_QUERY, HierarchyTree
from .snapshot import SnapshotCapture
from .waits import Duration, poll_until


class ElementLocator:
    """
    Resolves XPath queries against the device hierarchy.

    Each attempt captures and parses a new snapshot. Capture and parse
    failures inside the loop count as "no match yet" since a dump can be
    caught mid-write; invalid queries and transport errors propagate.
    """

    def __init__(
        self,
        capture: SnapshotCapture,
        polling_interval: float = 0.2,
        logger: Optional[logging.Logger] = None,
    ):
        self.capture = capture
        self.polling_interval = float(polling_interval)
        self.log = logger or logging.getLogger("uiauto_android")

    def _snapshot(self) -> Optional[HierarchyTree]:
        try:
            return self.capture.dump_screen()
        except (CaptureError, HierarchyParseError) as e:
            self.log.debug("Ignoring unusable snapshot: %s", e)
            return None

    def find_element(self, query: str = DEFAULT_QUERY, timeout: Duration = 0.0) -> Optional[Element]:
        """
        Find the first element matching query.

        @param query XPath expression (default "hierarchy/node")
        @param timeout Retry budget; 0 performs a single attempt
        @return Element, or None if nothing matched in time
        """

        def attempt() -> Optional[Element]:
            tree = self._snapshot()
            if tree is None:
                return None
            node = tree.select_one(query)
            if node is None:
                return None
            return Element.from_node(node)

        return poll_until(
            attempt,
            timeout=timeout,
            interval=self.polling_interval,
            description=f"element '{query}'",
        )

    def find_elements(self, query: str = DEFAULT_QUERY, timeout: Duration = 0.0) -> List[Element]:
        """
        Find all elements matching query.

        Polling stops at the first snapshot where the query matches; the
        returned list is built from that snapshot only. Nodes without bounds
        are skipped.

        @param query XPath expression (default "hierarchy/node")
        @param timeout Retry budget; 0 performs a single attempt
        @return Elements in document order (empty if nothing matched in time)
        """

        def attempt() -> Optional[List[Element]]:
            tree = self._snapshot()
            if tree is None:
                return None
            nodes = tree.select(query)
            if not nodes:
                return None
            elements = []
            for node in nodes:
                element = Element.from_node(node)
                if element is not None:
                    elements.append(element)
            return elements

        # any matching snapshot ends polling, even if no node carried bounds
        result = poll_until(
            attempt,
            timeout=timeout,
            interval=self.polling_interval,
            description=f"elements '{query}'",
            accept=lambda found: found is not None,
        )
        return result if result is not None else []
