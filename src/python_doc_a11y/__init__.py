"""
python_doc_a11y - Accessibility checks for word-processing documents.

Documents from different hosts (Google Docs exports, HTML, .docx) are
normalized into one element/text tree, and a registry of rules walks that
tree to report missing image descriptions and malformed "Tabs" blocks.

Example:
    >>> from python_doc_a11y import check_document
    >>> from pathlib import Path
    >>> for record in check_document(Path("handbook.docx")):
    ...     print(record)
"""

__version__ = "0.1.0"
__all__ = [
    "AnnotatedText",
    "CheckConfig",
    "ConfigError",
    "DocA11yError",
    "DocumentLoadError",
    "Element",
    "LinkSpan",
    "RULES",
    "ResultRecord",
    "Root",
    "Status",
    "TabsPolicy",
    "Text",
    "build_rules",
    "check_document",
    "check_image_alt_text",
    "check_tabs",
    "load_config",
    "load_document",
    "normalize",
    "normalize_docx",
    "normalize_gdoc",
    "normalize_hast",
    "normalize_html",
    "run_rules",
    "run_rules_async",
    "scan_link_spans",
    "slugify",
]

# Import configuration
from .config import CheckConfig, TabsPolicy, load_config
from .errors import ConfigError, DocA11yError, DocumentLoadError

# Import normalizers
from .normalizers import (
    normalize,
    normalize_docx,
    normalize_gdoc,
    normalize_hast,
    normalize_html,
)

# Import result types
from .results import ResultRecord, Status

# Import rules and runner
from .rules import RULES, build_rules, check_image_alt_text, check_tabs
from .runner import check_document, run_rules, run_rules_async
from .slug import slugify
from .sources import load_document

# Import Node Model
from .tree import AnnotatedText, Element, LinkSpan, Root, Text, scan_link_spans
