"""
The uniform document Node Model.

Normalizers convert host documents into these trees; rules walk them.
"""

from .links import (
    AnnotatedText,
    LinkAnnotated,
    LinkSpan,
    scan_link_spans,
    scan_node_links,
    unique_by_url,
)
from .traversal import (
    find_all,
    has_tag,
    is_heading,
    iter_nodes,
    row_cells,
    table_rows,
    text_content,
)
from .types import Element, Node, ParentNode, Root, Text, element

__all__ = [
    "AnnotatedText",
    "Element",
    "LinkAnnotated",
    "LinkSpan",
    "Node",
    "ParentNode",
    "Root",
    "Text",
    "element",
    "find_all",
    "has_tag",
    "is_heading",
    "iter_nodes",
    "row_cells",
    "scan_link_spans",
    "scan_node_links",
    "table_rows",
    "text_content",
    "unique_by_url",
]
