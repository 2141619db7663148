"""
Core types for the uniform document Node Model.

Every normalizer produces a tree of these nodes and every rule consumes
one. The shape follows the hast convention (root / element / text) so a
tree converted from HTML, a Google Docs export or a .docx package looks
the same to the rules.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union


@dataclass(frozen=True)
class Text:
    """A leaf holding a run of character data.

    Attributes:
        value: The text content
    """

    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": "text", "value": self.value}


@dataclass(frozen=True)
class Element:
    """A tagged node with attributes and ordered children.

    Children order is reading order. Attribute keys are unique; an
    attribute that is absent is distinct from one set to an empty string,
    which matters for ``img`` alt text.

    Attributes:
        tag_name: Lower-case tag (``p``, ``h1``..``h6``, ``table``, ``img``, ``a``, ...)
        attributes: Read-only mapping of attribute names to values
        children: Child nodes in reading order

    Example:
        >>> link = Element("a", {"href": "#intro"}, [Text("Intro")])
        >>> link.get("href")
        '#intro'
        >>> link.get("title") is None
        True
    """

    tag_name: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        # Freeze the containers so a rule cannot mutate the tree it inspects
        object.__setattr__(self, "tag_name", self.tag_name.lower())
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "children", tuple(self.children))

    def get(self, name: str) -> str | None:
        """Get an attribute value, or None when the attribute is absent."""
        return self.attributes.get(name)

    def has(self, name: str) -> bool:
        """Check whether an attribute is present (even if empty)."""
        return name in self.attributes

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "element",
            "tagName": self.tag_name,
            "properties": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return (
            self.tag_name == other.tag_name
            and dict(self.attributes) == dict(other.attributes)
            and self.children == other.children
        )

    def __hash__(self) -> int:
        return hash((self.tag_name, tuple(sorted(self.attributes.items())), self.children))


@dataclass(frozen=True)
class Root:
    """The top of a normalized document tree.

    Attributes:
        children: Top-level block nodes in reading order
    """

    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    def to_dict(self) -> dict[str, Any]:
        return {"type": "root", "children": [child.to_dict() for child in self.children]}


Node = Union[Root, Element, Text]
ParentNode = Union[Root, Element]


def element(
    tag_name: str,
    attributes: Mapping[str, str] | None = None,
    children: Iterable[Node] = (),
) -> Element:
    """Build an Element, accepting any iterable of children.

    Example:
        >>> element("p", children=[Text("Hello")]).tag_name
        'p'
    """
    return Element(tag_name, attributes or {}, tuple(children))
