"""
Pass-through adapter for trees that are already HTML-shaped.

Hosts that convert documents themselves can hand over a hast-style
mapping (``{"type": "root", "children": [...]}``). This module validates
the shape and rebuilds it as Node Model objects. Node types the model
does not represent (comments, doctypes, raw nodes) are skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..tree.types import Element, Node, Root, Text

logger = logging.getLogger(__name__)


def _properties(raw: Any) -> dict[str, str]:
    """Coerce hast properties to string attributes.

    List values (``className``) are space-joined; ``None``/``False``
    properties are dropped and ``True`` becomes an empty string.
    """
    attributes: dict[str, str] = {}
    if not isinstance(raw, Mapping):
        return attributes
    for name, value in raw.items():
        if value is None or value is False:
            continue
        if value is True:
            attributes[name] = ""
        elif isinstance(value, list | tuple):
            attributes[name] = " ".join(str(v) for v in value)
        else:
            attributes[name] = str(value)
    return attributes


def _convert(node: Mapping[str, Any]) -> Node | None:
    node_type = node.get("type")
    if node_type == "text":
        return Text(str(node.get("value") or ""))
    if node_type == "element":
        tag_name = node.get("tagName")
        if not tag_name:
            logger.debug("Skipping element without tagName")
            return None
        return Element(str(tag_name), _properties(node.get("properties")), _children(node))
    logger.debug("Skipping hast node of type %r", node_type)
    return None


def _children(node: Mapping[str, Any]) -> tuple[Node, ...]:
    children: list[Node] = []
    for child in node.get("children") or []:
        if not isinstance(child, Mapping):
            continue
        converted = _convert(child)
        if converted is not None:
            children.append(converted)
    return tuple(children)


def normalize_hast(tree: Mapping[str, Any]) -> Root:
    """Convert a hast-style mapping into a Node Model tree.

    A mapping whose type is ``element`` or ``text`` is wrapped in a root.

    Args:
        tree: hast root (or single node) as plain dicts/lists

    Returns:
        Root of the normalized tree

    Example:
        >>> img = {"type": "element", "tagName": "img", "properties": {"alt": ""}}
        >>> normalize_hast({"type": "root", "children": [img]}).children[0].get("alt")
        ''
    """
    if not isinstance(tree, Mapping):
        return Root()
    if tree.get("type") == "root":
        return Root(_children(tree))
    converted = _convert(tree)
    return Root((converted,) if converted is not None else ())


def to_hast(root: Root) -> dict[str, Any]:
    """Convert a Node Model tree back to a hast-style mapping."""
    return root.to_dict()
