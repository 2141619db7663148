"""
Normalizer for Google Docs structured-content exports.

Converts the JSON returned by the Docs API (``documents.get``) into the
Node Model:

- paragraph -> ``p``, or ``h1``..``h6`` for ``HEADING_N`` named styles
- table -> ``table > tbody > tr > td``, cell content normalized recursively
- textRun -> ``Text`` wrapped by ``strong``/``em``/``u`` and finally ``a``
- inlineObjectElement -> ``img``

Structural elements and paragraph elements of any other kind (section
breaks, tables of contents, horizontal rules, ...) are skipped.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from ..constants import PLACEHOLDER_ALT
from ..tree.types import Element, Node, Root, Text

logger = logging.getLogger(__name__)

_HEADING_STYLE = re.compile(r"^HEADING_([1-6])$")


class GoogleDocsNormalizer:
    """Converts one Docs API document into a Node Model tree.

    The document's ``inlineObjects`` map is used to resolve images to
    their alt text and content URI. Objects that cannot be resolved become
    placeholder images rather than errors.

    Attributes:
        doc: The Docs API document resource
        placeholder_alt: Alt text given to images that cannot be resolved

    Example:
        >>> doc = {"body": {"content": [{"paragraph": {"elements": [
        ...     {"textRun": {"content": "Hello\\n"}}]}}]}}
        >>> GoogleDocsNormalizer(doc).normalize().children[0].tag_name
        'p'
    """

    def __init__(self, doc: Mapping[str, Any], placeholder_alt: str = PLACEHOLDER_ALT) -> None:
        self.doc = doc or {}
        self.placeholder_alt = placeholder_alt
        self._inline_objects = _mapping(self.doc.get("inlineObjects"))

    def normalize(self) -> Root:
        """Build the tree for the document body.

        Returns:
            Root node; empty when the document has no body content
        """
        body = _mapping(self.doc.get("body"))
        return Root(self._blocks(body.get("content")))

    def _blocks(self, content: Any) -> list[Node]:
        nodes: list[Node] = []
        for structural_element in _items(content):
            nodes.extend(self._structural_element(structural_element))
        return nodes

    def _structural_element(self, structural_element: Any) -> list[Node]:
        if not isinstance(structural_element, Mapping):
            logger.debug("Skipping malformed structural element %r", structural_element)
            return []
        if isinstance(structural_element.get("paragraph"), Mapping):
            return [self._paragraph(structural_element["paragraph"])]
        if isinstance(structural_element.get("table"), Mapping):
            return [self._table(structural_element["table"])]
        logger.debug(
            "Skipping structural element with keys %s", sorted(map(str, structural_element))
        )
        return []

    def _paragraph(self, paragraph: Mapping[str, Any]) -> Element:
        style = _mapping(paragraph.get("paragraphStyle"))
        tag_name = "p"
        named_style = style.get("namedStyleType")
        match = _HEADING_STYLE.match(named_style) if isinstance(named_style, str) else None
        if match:
            tag_name = f"h{match.group(1)}"

        attributes: dict[str, str] = {}
        if isinstance(style.get("headingId"), str) and style["headingId"]:
            attributes["id"] = style["headingId"]

        children: list[Node] = []
        for paragraph_element in _items(paragraph.get("elements")):
            children.extend(self._paragraph_element(paragraph_element))

        return Element(tag_name, attributes, tuple(children))

    def _table(self, table: Mapping[str, Any]) -> Element:
        rows: list[Node] = []
        for table_row in _items(table.get("tableRows")):
            if not isinstance(table_row, Mapping):
                logger.debug("Skipping malformed table row %r", table_row)
                continue
            cells: list[Node] = []
            for table_cell in _items(table_row.get("tableCells")):
                if not isinstance(table_cell, Mapping):
                    logger.debug("Skipping malformed table cell %r", table_cell)
                    continue
                content = self._blocks(table_cell.get("content"))
                cells.append(Element("td", {}, tuple(content)))
            rows.append(Element("tr", {}, tuple(cells)))
        return Element("table", {}, (Element("tbody", {}, tuple(rows)),))

    def _paragraph_element(self, paragraph_element: Any) -> list[Node]:
        if not isinstance(paragraph_element, Mapping):
            logger.debug("Skipping malformed paragraph element %r", paragraph_element)
            return []
        if isinstance(paragraph_element.get("textRun"), Mapping):
            return self._text_run(paragraph_element["textRun"])
        if isinstance(paragraph_element.get("inlineObjectElement"), Mapping):
            return [self._inline_object(paragraph_element["inlineObjectElement"])]
        logger.debug(
            "Skipping paragraph element with keys %s", sorted(map(str, paragraph_element))
        )
        return []

    def _text_run(self, text_run: Mapping[str, Any]) -> list[Node]:
        content = text_run.get("content")
        if not isinstance(content, str) or not content or content == "\n":
            return []

        node: Node = Text(content)
        text_style = _mapping(text_run.get("textStyle"))

        # Wrapping order is fixed: bold innermost, link outermost
        if text_style.get("bold"):
            node = Element("strong", {}, (node,))
        if text_style.get("italic"):
            node = Element("em", {}, (node,))
        if text_style.get("underline"):
            node = Element("u", {}, (node,))

        href = link_target(text_style.get("link"))
        if href is not None:
            node = Element("a", {"href": href}, (node,))

        return [node]

    def _inline_object(self, inline_object_element: Mapping[str, Any]) -> Element:
        object_id = inline_object_element.get("inlineObjectId")
        embedded = self._embedded_object(object_id) if isinstance(object_id, str) else None
        if embedded is None:
            logger.debug("Inline object %r could not be resolved, using placeholder", object_id)
            return Element("img", {"src": "", "alt": self.placeholder_alt})

        image_properties = _mapping(embedded.get("imageProperties"))
        attributes = {
            "src": image_properties.get("contentUri") or image_properties.get("sourceUri") or ""
        }
        # The API omits description/title when no alt text was entered
        alt = embedded.get("description")
        if alt is None:
            alt = embedded.get("title")
        if alt is not None:
            attributes["alt"] = str(alt)
        return Element("img", attributes)

    def _embedded_object(self, object_id: str) -> Mapping[str, Any] | None:
        inline_object = self._inline_objects.get(object_id)
        if not isinstance(inline_object, Mapping):
            return None
        properties = _mapping(inline_object.get("inlineObjectProperties"))
        embedded = properties.get("embeddedObject")
        return embedded if isinstance(embedded, Mapping) else None


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _items(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list | tuple) else []


def link_target(link: Mapping[str, Any] | None) -> str | None:
    """Resolve a Docs ``Link`` to an href.

    External links use their URL; links to a heading or bookmark inside the
    document become a ``#<id>`` fragment.
    """
    if not isinstance(link, Mapping) or not link:
        return None
    if link.get("url"):
        return str(link["url"])
    for key in ("headingId", "bookmarkId"):
        if link.get(key):
            return f"#{link[key]}"
    # Tab-aware exports nest the target as {"heading": {"id": ...}}
    for key in ("heading", "bookmark"):
        target = link.get(key)
        if isinstance(target, Mapping) and target.get("id"):
            return f"#{target['id']}"
    return None


def normalize_gdoc(doc: Mapping[str, Any], placeholder_alt: str = PLACEHOLDER_ALT) -> Root:
    """Convert a Google Docs structured-content export into a Node Model tree.

    Args:
        doc: Docs API document resource (parsed JSON)
        placeholder_alt: Alt text for inline objects that cannot be resolved

    Returns:
        Root of the normalized tree
    """
    return GoogleDocsNormalizer(doc, placeholder_alt=placeholder_alt).normalize()
