"""
Depth-first traversal over the Node Model.

Rules search for images, tables and headings at any depth. They all go
through :func:`iter_nodes`, an explicit-stack pre-order walk, so deep
trees never hit the recursion limit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from ..constants import CELL_TAGS, HEADING_TAGS, ROW_CONTAINER_TAGS
from .types import Element, Node, Text

NodePredicate = Callable[[Node], bool]


def iter_nodes(
    node: Node,
    predicate: NodePredicate | None = None,
    include_self: bool = True,
) -> Iterator[Node]:
    """Yield nodes under ``node`` in document (pre-)order.

    Args:
        node: Node to start from
        predicate: Only yield nodes for which this returns True
        include_self: Whether ``node`` itself is a candidate

    Yields:
        Matching nodes, parents before their children, siblings in order
    """
    stack: list[Node] = [node]
    first = True
    while stack:
        current = stack.pop()
        if (include_self or not first) and (predicate is None or predicate(current)):
            yield current
        first = False
        children = getattr(current, "children", ())
        stack.extend(reversed(children))


def has_tag(*tag_names: str) -> NodePredicate:
    """Build a predicate matching elements with any of the given tags."""
    wanted = frozenset(tag_names)

    def predicate(node: Node) -> bool:
        return isinstance(node, Element) and node.tag_name in wanted

    return predicate


def is_heading(node: Node) -> bool:
    return isinstance(node, Element) and node.tag_name in HEADING_TAGS


def find_all(node: Node, *tag_names: str) -> list[Element]:
    """Find every descendant element with one of the given tags, in document order."""
    predicate = has_tag(*tag_names)
    return [
        n for n in iter_nodes(node, include_self=False) if isinstance(n, Element) and predicate(n)
    ]


def text_content(node: Node) -> str:
    """Concatenate all text under a node in reading order."""
    return "".join(n.value for n in iter_nodes(node) if isinstance(n, Text))


def table_rows(table: Element) -> list[Element]:
    """Get the rows of a table, looking through tbody/thead/tfoot wrappers.

    Rows of nested tables are not included.
    """
    rows: list[Element] = []
    for child in table.children:
        if not isinstance(child, Element):
            continue
        if child.tag_name == "tr":
            rows.append(child)
        elif child.tag_name in ROW_CONTAINER_TAGS:
            rows.extend(
                row for row in child.children if isinstance(row, Element) and row.tag_name == "tr"
            )
    return rows


def row_cells(row: Element) -> list[Element]:
    """Get the cells (td/th) of a table row."""
    return [
        cell for cell in row.children if isinstance(cell, Element) and cell.tag_name in CELL_TAGS
    ]
