"""
Slug generation for heading anchors.

Tab controls link to ``#anchor`` fragments; a heading's anchor is derived
from its text with :func:`slugify`, e.g. "My Awesome Heading" becomes
"my-awesome-heading".
"""

import re

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9_-]+")
_REPEATED_DASHES = re.compile(r"-{2,}")


def slugify(text: str | None) -> str:
    """Convert text to a URL-safe anchor identifier.

    The transform lowercases and trims the text, replaces whitespace runs
    with ``-``, drops every character outside ``[a-z0-9_-]`` and collapses
    repeated dashes. It is idempotent.

    Args:
        text: Text to convert (None is treated as empty)

    Returns:
        The slug, or an empty string for empty input

    Example:
        >>> slugify("  Tab One   Content ")
        'tab-one-content'
        >>> slugify("Q&A -- Part 2")
        'qa-part-2'
    """
    if not text:
        return ""
    slug = str(text).lower().strip()
    slug = _WHITESPACE.sub("-", slug)
    slug = _NON_SLUG_CHARS.sub("", slug)
    return _REPEATED_DASHES.sub("-", slug)
