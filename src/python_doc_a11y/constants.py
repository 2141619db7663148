"""
Centralized constants for markup tags, OOXML namespaces and other magic values.

Import from here so the normalizers and rules agree on tag names and
placeholder values.
"""

# =============================================================================
# Node Model tags
# =============================================================================

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

# Tags that start a new line of text; link spans never cross them
BLOCK_TAGS = frozenset(
    {
        "p",
        "div",
        "li",
        "ul",
        "ol",
        "table",
        "tbody",
        "thead",
        "tfoot",
        "tr",
        "td",
        "th",
        "blockquote",
        "pre",
        "br",
    }
    | HEADING_TAGS
)

ROW_CONTAINER_TAGS = frozenset({"tbody", "thead", "tfoot"})
CELL_TAGS = frozenset({"td", "th"})


# =============================================================================
# Rule defaults
# =============================================================================

# Label cell text that marks a table as a Tabs block
DEFAULT_TABS_LABEL = "tabs"

# Alt text used when an inline object cannot be resolved to an image
PLACEHOLDER_ALT = "Image placeholder"

# Literal alt text that marks an image as decorative
DECORATIVE_ALT_MARKER = '""'


# =============================================================================
# Word Processing Namespaces
# =============================================================================

WORD_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

# DrawingML main namespace
A_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/main"

# Word Processing Drawing namespace (inline/anchor positioning)
WP_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"

PACKAGE_RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/relationships"

OFFICE_RELATIONSHIPS_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
)

DOCUMENT_PART = "word/document.xml"
STYLES_PART = "word/styles.xml"
DOCUMENT_RELS_PART = "word/_rels/document.xml.rels"

# Local file header signature of a ZIP (and so .docx) package
ZIP_SIGNATURE = b"PK\x03\x04"


# =============================================================================
# Helper Functions for Qualified Names
# =============================================================================


def w(tag: str) -> str:
    """Create a fully qualified WordprocessingML tag name.

    Args:
        tag: The local tag name (e.g., "p", "r", "t")

    Returns:
        Fully qualified tag name with namespace

    Example:
        >>> w("p")
        '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}p'
    """
    return f"{{{WORD_NAMESPACE}}}{tag}"


def a(tag: str) -> str:
    """Create a fully qualified DrawingML tag name."""
    return f"{{{A_NAMESPACE}}}{tag}"


def wp(tag: str) -> str:
    """Create a fully qualified Word Processing Drawing tag name."""
    return f"{{{WP_NAMESPACE}}}{tag}"


def r(tag: str) -> str:
    """Create a fully qualified Office relationships attribute name.

    Example:
        >>> r("id")
        '{http://schemas.openxmlformats.org/officeDocument/2006/relationships}id'
    """
    return f"{{{OFFICE_RELATIONSHIPS_NAMESPACE}}}{tag}"
