# uiauto_android/hierarchy.py
"""
@file hierarchy.py
@brief Parsing of hierarchy snapshots and XPath evaluation over them.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional

from lxml import etree

from .exceptions import HierarchyParseError, InvalidQueryError

DEFAULT_QUERY = "hierarchy/node"

_FUNCTION_CALL_RE = re.compile(r"^([A-Za-z_][\w.-]*(?::[A-Za-z_][\w.-]*)?)\s*\(")
_NODE_TYPE_TESTS = ("node", "text", "comment", "processing-instruction")


def _new_parser() -> etree.XMLParser:
    return etree.XMLParser(
        recover=False,
        resolve_entities=False,
        no_network=True,
        remove_blank_text=False,
    )


def _anchor(query: str) -> str:
    # Relative location paths are evaluated from the document node, so that
    # "hierarchy/node" addresses children of the <hierarchy> root.
    # Function calls, literals, numbers and variables are left untouched.
    q = query.strip()
    if not q or not (q[0].isalpha() or q[0] in "_*@."):
        return q
    if q[0] == "." and q[1:2].isdigit():
        return q
    m = _FUNCTION_CALL_RE.match(q)
    if m and m.group(1) not in _NODE_TYPE_TESTS:
        return q
    return "/" + q


class HierarchyTree:
    """
    Parsed UI hierarchy of one snapshot.

    Instances are created by parse_hierarchy() and never modified afterwards.
    """

    def __init__(self, document: Any):
        self._doc = document

    @property
    def root(self) -> Any:
        return self._doc.getroot()

    def select(self, query: str = DEFAULT_QUERY) -> List[Any]:
        """
        Evaluate an XPath query.

        @param query XPath expression; relative paths start at the document node
        @return Matching element nodes in document order (non-element results are dropped)
        @throws InvalidQueryError if the expression cannot be compiled or evaluated
        """
        if not query or not query.strip():
            raise InvalidQueryError(str(query), "query is empty")
        try:
            result = self._doc.xpath(_anchor(query))
        except etree.XPathError as e:
            raise InvalidQueryError(query, str(e)) from e

        if not isinstance(result, list):
            return []
        return [n for n in result if etree.iselement(n) and isinstance(n.tag, str)]

    def select_one(self, query: str = DEFAULT_QUERY) -> Optional[Any]:
        nodes = self.select(query)
        return nodes[0] if nodes else None


def parse_hierarchy(snapshot: str) -> HierarchyTree:
    """
    Parse a sanitized snapshot into a HierarchyTree.

    @param snapshot Non-empty XML text
    @return HierarchyTree
    @throws HierarchyParseError for empty input or malformed markup
    """
    if not snapshot or not snapshot.strip():
        raise HierarchyParseError("snapshot is empty")

    try:
        root = etree.fromstring(snapshot.encode("utf-8"), parser=_new_parser())
    except etree.XMLSyntaxError as e:
        raise HierarchyParseError(str(e), cause=e) from e

    return HierarchyTree(root.getroottree())
