"""
Normalizers that convert host document representations into the Node Model.

Each host format has its own module; :func:`normalize` picks one based on
the shape of the input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..constants import PLACEHOLDER_ALT, ZIP_SIGNATURE
from ..tree.types import Root
from .docx import DocxNormalizer, normalize_docx
from .gdocs import GoogleDocsNormalizer, normalize_gdoc
from .hast import normalize_hast, to_hast
from .html import normalize_html

__all__ = [
    "DocxNormalizer",
    "GoogleDocsNormalizer",
    "normalize",
    "normalize_docx",
    "normalize_gdoc",
    "normalize_hast",
    "normalize_html",
    "to_hast",
]


def normalize(document: Any, placeholder_alt: str = PLACEHOLDER_ALT) -> Root:
    """Convert any supported host document into a Node Model tree.

    Dispatch rules:

    - a :class:`Root` is returned unchanged
    - a mapping with ``type`` of ``root``/``element``/``text`` is a hast tree
    - any other mapping is a Google Docs structured-content export
    - ``bytes`` starting with the ZIP signature are a .docx package
    - other ``str``/``bytes`` are HTML markup

    Args:
        document: The host document
        placeholder_alt: Alt text for Docs inline objects that cannot be resolved

    Returns:
        Root of the normalized tree

    Raises:
        TypeError: If the input is none of the supported shapes
    """
    if isinstance(document, Root):
        return document
    if isinstance(document, Mapping):
        if document.get("type") in ("root", "element", "text"):
            return normalize_hast(document)
        return normalize_gdoc(document, placeholder_alt=placeholder_alt)
    if isinstance(document, bytes) and document.startswith(ZIP_SIGNATURE):
        return normalize_docx(document)
    if isinstance(document, str | bytes):
        return normalize_html(document)
    raise TypeError(f"Unsupported document type: {type(document).__name__}")
