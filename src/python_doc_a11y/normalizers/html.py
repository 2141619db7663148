"""
Normalizer for HTML markup.

The word-processor add-in converts the binary document to HTML before
checking it. This module parses that markup with lxml and rebuilds it as
a Node Model tree: tags are lower-cased, attributes copied verbatim, and
each element's ``tail`` text becomes the following sibling ``Text``.
Comments and processing instructions are dropped.
"""

from __future__ import annotations

import logging
import re

from lxml import etree
from lxml import html as lxml_html

from ..tree.types import Element, Node, Root, Text

logger = logging.getLogger(__name__)

# Elements whose content is never document text
_IGNORED_TAGS = frozenset({"script", "style", "head", "title", "meta", "link"})

# Markup that starts like a whole document rather than a fragment
_FULL_DOCUMENT = re.compile(r"^\s*<(?:html|!doctype)", re.IGNORECASE)


def _convert_children(parent: etree._Element) -> tuple[Node, ...]:
    children: list[Node] = []
    if parent.text:
        children.append(Text(parent.text))
    for child in parent:
        converted = _convert(child)
        if converted is not None:
            children.append(converted)
        if child.tail:
            children.append(Text(child.tail))
    return tuple(children)


def _convert(el: etree._Element) -> Element | None:
    # Comments and processing instructions have a callable tag
    if not isinstance(el.tag, str):
        return None
    tag_name = el.tag.lower()
    if tag_name in _IGNORED_TAGS:
        logger.debug("Skipping <%s> element", tag_name)
        return None
    return Element(tag_name, dict(el.attrib), _convert_children(el))


def normalize_html(markup: str | bytes) -> Root:
    """Convert HTML markup into a Node Model tree.

    Both full documents and fragments are accepted; for full documents the
    ``<body>`` content becomes the root's children, and a document without
    a body yields an empty root.

    Args:
        markup: HTML text

    Returns:
        Root of the normalized tree; empty for empty markup

    Example:
        >>> root = normalize_html('<p>Hi <img src="a.png"></p>')
        >>> root.children[0].children[1].has("alt")
        False
    """
    if isinstance(markup, bytes):
        markup = markup.decode("utf-8", errors="replace")
    if not markup or not markup.strip():
        return Root()

    if not _FULL_DOCUMENT.match(markup):
        container = lxml_html.fragment_fromstring(markup, create_parent="div")
        return Root(_convert_children(container))

    try:
        document = lxml_html.document_fromstring(markup)
    except (etree.ParserError, etree.XMLSyntaxError):
        logger.debug("HTML document has no content")
        return Root()
    body = document.find("body")
    if body is None:
        logger.debug("HTML document has no <body>")
        return Root()
    return Root(_convert_children(body))
