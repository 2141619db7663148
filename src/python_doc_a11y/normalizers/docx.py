"""
Normalizer for Word (.docx) packages.

Reads the WordprocessingML body straight from the OOXML ZIP package and
converts it into the Node Model, following the same conventions as the
HTML conversion the word-processor add-in relies on:

- ``w:p`` -> ``p``, or ``h1``..``h6`` for "Heading N" paragraph styles
- ``w:tbl`` -> ``table > tbody > tr > td``
- ``w:r`` text -> ``Text`` wrapped by ``strong``/``em``/``u``
- ``w:hyperlink`` -> ``a`` (``w:anchor`` becomes ``#anchor``, ``r:id`` the
  relationship target)
- ``w:drawing`` -> ``img`` with ``alt`` from ``wp:docPr/@descr``

Content controls (``w:sdt``) and tracked insertions are unwrapped;
deletions and anything unrecognized are skipped.
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from pathlib import Path
from typing import BinaryIO

from lxml import etree

from ..constants import (
    DOCUMENT_PART,
    DOCUMENT_RELS_PART,
    PACKAGE_RELATIONSHIPS_NAMESPACE,
    STYLES_PART,
    a,
    r,
    w,
    wp,
)
from ..errors import DocumentLoadError
from ..tree.types import Element, Node, Root, Text

logger = logging.getLogger(__name__)

_HEADING_STYLE = re.compile(r"^heading\s*([1-6])$", re.IGNORECASE)

# Run property values that switch a toggle property off
_FALSE_VALUES = frozenset({"0", "false", "off", "none"})

# Bookmarks Word adds on its own
_HIDDEN_BOOKMARKS = frozenset({"_GoBack"})

# Inline wrappers whose children are ordinary paragraph content
_TRANSPARENT_INLINE = frozenset({w("ins"), w("smartTag"), w("customXml"), w("fldSimple")})

DocxSource = str | Path | bytes | BinaryIO


class DocxNormalizer:
    """Converts the main document part of a .docx package into a Node Model tree.

    Attributes:
        body: The ``w:body`` element
        styles: Mapping of style IDs to style names
        relationships: Mapping of relationship IDs to targets

    Example:
        >>> normalizer = DocxNormalizer.open("report.docx")
        >>> root = normalizer.normalize()
    """

    def __init__(
        self,
        body: etree._Element,
        styles: dict[str, str] | None = None,
        relationships: dict[str, str] | None = None,
    ) -> None:
        self.body = body
        self.styles = styles or {}
        self.relationships = relationships or {}

    @classmethod
    def open(cls, source: DocxSource) -> DocxNormalizer:
        """Read a .docx package from a path, bytes or file-like object.

        Raises:
            DocumentLoadError: If the source is not a readable .docx package
        """
        path: str | Path | None = None
        if isinstance(source, str | Path):
            path = source
            if not Path(source).exists():
                raise DocumentLoadError("file does not exist", path)
        elif isinstance(source, bytes):
            source = io.BytesIO(source)

        try:
            with zipfile.ZipFile(source) as package:
                names = set(package.namelist())
                if DOCUMENT_PART not in names:
                    raise DocumentLoadError(f"package has no {DOCUMENT_PART}", path)
                document = etree.fromstring(package.read(DOCUMENT_PART))
                styles = (
                    _read_styles(etree.fromstring(package.read(STYLES_PART)))
                    if STYLES_PART in names
                    else {}
                )
                relationships = (
                    _read_relationships(etree.fromstring(package.read(DOCUMENT_RELS_PART)))
                    if DOCUMENT_RELS_PART in names
                    else {}
                )
        except zipfile.BadZipFile as e:
            raise DocumentLoadError("not a valid .docx (ZIP) file", path) from e
        except etree.XMLSyntaxError as e:
            raise DocumentLoadError(f"malformed XML: {e}", path) from e

        body = document.find(w("body"))
        if body is None:
            body = etree.Element(w("body"))
        return cls(body, styles, relationships)

    def normalize(self) -> Root:
        return Root(self._blocks(self.body))

    # ------------------------------------------------------------------
    # Block level
    # ------------------------------------------------------------------

    def _blocks(self, container: etree._Element) -> list[Node]:
        nodes: list[Node] = []
        for child in container:
            if child.tag == w("p"):
                nodes.append(self._paragraph(child))
            elif child.tag == w("tbl"):
                nodes.append(self._table(child))
            elif child.tag == w("sdt"):
                content = child.find(w("sdtContent"))
                if content is not None:
                    nodes.extend(self._blocks(content))
            else:
                logger.debug("Skipping block element %s", etree.QName(child).localname)
        return nodes

    def _paragraph(self, paragraph: etree._Element) -> Element:
        tag_name = "p"
        style_id = paragraph.find(f"{w('pPr')}/{w('pStyle')}")
        if style_id is not None:
            level = self._heading_level(style_id.get(w("val"), ""))
            if level:
                tag_name = f"h{level}"

        attributes: dict[str, str] = {}
        if tag_name != "p":
            for bookmark in paragraph.iter(w("bookmarkStart")):
                name = bookmark.get(w("name"))
                if name and name not in _HIDDEN_BOOKMARKS:
                    attributes["id"] = name
                    break

        return Element(tag_name, attributes, tuple(self._inline(paragraph)))

    def _heading_level(self, style_id: str) -> int | None:
        for candidate in (self.styles.get(style_id), style_id):
            if candidate:
                match = _HEADING_STYLE.match(candidate.strip())
                if match:
                    return int(match.group(1))
        return None

    def _table(self, table: etree._Element) -> Element:
        rows: list[Node] = []
        for row in table.findall(w("tr")):
            cells = tuple(
                Element("td", {}, tuple(self._blocks(cell))) for cell in row.findall(w("tc"))
            )
            rows.append(Element("tr", {}, cells))
        return Element("table", {}, (Element("tbody", {}, tuple(rows)),))

    # ------------------------------------------------------------------
    # Inline level
    # ------------------------------------------------------------------

    def _inline(self, container: etree._Element) -> list[Node]:
        nodes: list[Node] = []
        for child in container:
            if child.tag == w("r"):
                nodes.extend(self._run(child))
            elif child.tag == w("hyperlink"):
                nodes.extend(self._hyperlink(child))
            elif child.tag in _TRANSPARENT_INLINE:
                nodes.extend(self._inline(child))
            elif child.tag == w("sdt"):
                content = child.find(w("sdtContent"))
                if content is not None:
                    nodes.extend(self._inline(content))
        return nodes

    def _hyperlink(self, hyperlink: etree._Element) -> list[Node]:
        children = self._inline(hyperlink)
        href = self._hyperlink_target(hyperlink)
        if href is None:
            return children
        return [Element("a", {"href": href}, tuple(children))]

    def _hyperlink_target(self, hyperlink: etree._Element) -> str | None:
        anchor = hyperlink.get(w("anchor"))
        rel_id = hyperlink.get(r("id"))
        target = self.relationships.get(rel_id) if rel_id else None
        if target is not None:
            return f"{target}#{anchor}" if anchor else target
        if anchor:
            return f"#{anchor}"
        return None

    def _run(self, run: etree._Element) -> list[Node]:
        nodes: list[Node] = []
        pending: list[str] = []

        def flush() -> None:
            text = "".join(pending)
            pending.clear()
            if text:
                nodes.append(self._format_text(run, text))

        for child in run:
            if child.tag == w("t"):
                pending.append(child.text or "")
            elif child.tag == w("tab"):
                pending.append("\t")
            elif child.tag in (w("br"), w("cr")):
                pending.append("\n")
            elif child.tag == w("drawing"):
                flush()
                nodes.extend(self._drawing(child))
        flush()
        return nodes

    def _format_text(self, run: etree._Element, text: str) -> Node:
        node: Node = Text(text)
        properties = run.find(w("rPr"))
        if properties is None:
            return node
        if _toggle(properties, "b"):
            node = Element("strong", {}, (node,))
        if _toggle(properties, "i"):
            node = Element("em", {}, (node,))
        if _toggle(properties, "u"):
            node = Element("u", {}, (node,))
        return node

    def _drawing(self, drawing: etree._Element) -> list[Node]:
        images: list[Node] = []
        for frame in drawing:
            if frame.tag not in (wp("inline"), wp("anchor")):
                continue
            attributes: dict[str, str] = {"src": ""}
            blip = next(frame.iter(a("blip")), None)
            if blip is not None:
                embed = blip.get(r("embed")) or blip.get(r("link"))
                attributes["src"] = self.relationships.get(embed, "") if embed else ""
            doc_pr = frame.find(wp("docPr"))
            # descr is absent when no alt text was ever entered
            if doc_pr is not None and doc_pr.get("descr") is not None:
                attributes["alt"] = doc_pr.get("descr")
            images.append(Element("img", attributes))
        return images


def _toggle(properties: etree._Element, name: str) -> bool:
    prop = properties.find(w(name))
    if prop is None:
        return False
    return prop.get(w("val"), "true").lower() not in _FALSE_VALUES


def _read_styles(styles_root: etree._Element) -> dict[str, str]:
    styles: dict[str, str] = {}
    for style in styles_root.iter(w("style")):
        style_id = style.get(w("styleId"))
        name = style.find(w("name"))
        if style_id and name is not None and name.get(w("val")):
            styles[style_id] = name.get(w("val"))
    return styles


def _read_relationships(rels_root: etree._Element) -> dict[str, str]:
    relationships: dict[str, str] = {}
    for rel in rels_root.iter(f"{{{PACKAGE_RELATIONSHIPS_NAMESPACE}}}Relationship"):
        rel_id = rel.get("Id")
        target = rel.get("Target")
        if rel_id and target is not None:
            relationships[rel_id] = target
    return relationships


def normalize_docx(source: DocxSource) -> Root:
    """Convert a .docx package into a Node Model tree.

    Args:
        source: Path, raw bytes or binary file object of the .docx

    Returns:
        Root of the normalized tree

    Raises:
        DocumentLoadError: If the package cannot be read
    """
    return DocxNormalizer.open(source).normalize()
