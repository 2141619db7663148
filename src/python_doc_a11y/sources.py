"""
Document sources: reading host documents from disk.

The checker itself works on documents handed to it. This module is the
file-based source used by the CLI: it reads a file and returns the raw
host representation for :func:`~python_doc_a11y.normalizers.normalize`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .constants import ZIP_SIGNATURE
from .errors import DocumentLoadError

logger = logging.getLogger(__name__)

JSON_SUFFIXES = frozenset({".json"})
HTML_SUFFIXES = frozenset({".html", ".htm", ".xhtml"})
DOCX_SUFFIXES = frozenset({".docx", ".docm"})

SUPPORTED_SUFFIXES = JSON_SUFFIXES | HTML_SUFFIXES | DOCX_SUFFIXES


def load_document(path: str | Path) -> Any:
    """Read a document file into its host representation.

    - ``.json``: parsed JSON (a Google Docs export or a hast tree)
    - ``.html``/``.htm``: markup as text
    - ``.docx``: raw package bytes, which must start with the ZIP signature

    Args:
        path: Path to the document

    Returns:
        The parsed JSON mapping, HTML string or .docx bytes

    Raises:
        DocumentLoadError: If the file is missing, unsupported or unreadable
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise DocumentLoadError("file does not exist", file_path)

    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        supported = ", ".join(sorted(SUPPORTED_SUFFIXES))
        raise DocumentLoadError(
            f"unsupported file type '{suffix}' (expected {supported})", file_path
        )

    logger.debug("Loading %s as %s", file_path, suffix)
    try:
        if suffix in JSON_SUFFIXES:
            with open(file_path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise DocumentLoadError("JSON document must be an object", file_path)
            return data
        if suffix in HTML_SUFFIXES:
            return file_path.read_text(encoding="utf-8", errors="replace")
        package = file_path.read_bytes()
        # normalize() only recognizes a package by its signature
        if not package.startswith(ZIP_SIGNATURE):
            raise DocumentLoadError("not a valid .docx (ZIP) file", file_path)
        return package
    except json.JSONDecodeError as e:
        raise DocumentLoadError(f"invalid JSON: {e}", file_path) from e
    except OSError as e:
        raise DocumentLoadError(str(e), file_path) from e
