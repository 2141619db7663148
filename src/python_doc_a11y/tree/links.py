"""
Link span scanning.

A tab control is a run of characters that all link to the same target.
Hosts split one visible link into several runs whenever formatting
changes (a bold word inside a link, for example), so the scanner works
per character offset and merges adjacent offsets that share a target
back into one maximal span.

Two inputs are supported:

- Host text objects that expose a per-offset link lookup
  (``get_text()`` / ``get_link_url(offset)``), such as a live document API.
- Subtrees of the Node Model, flattened by :meth:`AnnotatedText.from_node`
  with each character tagged by its nearest enclosing ``a[href]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ..constants import BLOCK_TAGS
from .types import Element, Node, Text


@runtime_checkable
class LinkAnnotated(Protocol):
    """Text with a link target lookup for every character offset."""

    def get_text(self) -> str: ...

    def get_link_url(self, offset: int) -> str | None: ...


@dataclass(frozen=True)
class LinkSpan:
    """A maximal run of consecutive characters sharing one link target.

    Attributes:
        url: The link target
        text: The literal text covered by the span
        start_offset: Offset of the first character
        end_offset: Offset one past the last character
    """

    url: str
    text: str
    start_offset: int
    end_offset: int


@dataclass
class AnnotatedText:
    """Flattened text with one link target (or None) per character.

    Satisfies :class:`LinkAnnotated`, so it scans the same way as host
    text objects.

    Example:
        >>> from python_doc_a11y.tree import Text, element
        >>> p = element("p", children=[element("a", {"href": "#a"}, [Text("A")]), Text(" | ")])
        >>> AnnotatedText.from_node(p).get_link_url(0)
        '#a'
    """

    text: str = ""
    links: list[str | None] = field(default_factory=list)

    def get_text(self) -> str:
        return self.text

    def get_link_url(self, offset: int) -> str | None:
        if 0 <= offset < len(self.links):
            return self.links[offset]
        return None

    @classmethod
    def from_node(cls, node: Node) -> AnnotatedText:
        """Flatten a subtree into annotated text.

        Block-level elements (paragraphs, headings, cells, list items) are
        separated by an unlinked newline so spans never merge across them.
        """
        chars: list[str] = []
        links: list[str | None] = []

        def break_line() -> None:
            if chars and not chars[-1].endswith("\n"):
                chars.append("\n")
                links.append(None)

        # Explicit stack of (node, active href); None entries mark block ends
        stack: list[tuple[Node, str | None] | None] = [(node, None)]
        while stack:
            item = stack.pop()
            if item is None:
                break_line()
                continue

            current, href = item
            if isinstance(current, Text):
                chars.append(current.value)
                links.extend([href] * len(current.value))
                continue

            if isinstance(current, Element):
                if current.tag_name == "a" and current.get("href"):
                    href = current.get("href")
                if current.tag_name in BLOCK_TAGS:
                    break_line()
                    stack.append(None)
            stack.extend((child, href) for child in reversed(current.children))

        text = "".join(chars)
        return cls(text=text, links=links)


def scan_link_spans(source: LinkAnnotated) -> list[LinkSpan]:
    """Extract every maximal same-target link span, in offset order.

    Spans are not deduplicated; two separate spans pointing at the same
    URL are both reported.

    Args:
        source: Text exposing a per-offset link lookup

    Returns:
        List of LinkSpan objects ordered by start offset
    """
    text = source.get_text() or ""
    spans: list[LinkSpan] = []

    start = 0
    length = len(text)
    while start < length:
        url = source.get_link_url(start)
        if not url:
            start += 1
            continue

        end = start + 1
        while end < length and source.get_link_url(end) == url:
            end += 1

        spans.append(LinkSpan(url=url, text=text[start:end], start_offset=start, end_offset=end))
        start = end

    return spans


def scan_node_links(node: Node) -> list[LinkSpan]:
    """Scan a Node Model subtree for link spans."""
    return scan_link_spans(AnnotatedText.from_node(node))


def unique_by_url(spans: list[LinkSpan]) -> list[LinkSpan]:
    """Keep the first span for each URL, preserving first-occurrence order."""
    seen: set[str] = set()
    unique: list[LinkSpan] = []
    for span in spans:
        if span.url not in seen:
            seen.add(span.url)
            unique.append(span)
    return unique
