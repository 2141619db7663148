"""
Rule that checks every image for alternative text.

Images are numbered 1, 2, ... in document order, counting images nested
inside tables. An image with no ``alt`` attribute is an error; one whose
alt text is blank is a warning. Authors mark an image as decorative by
setting its alt text to the literal ``""``.
"""

from __future__ import annotations

from ..config import CheckConfig
from ..constants import DECORATIVE_ALT_MARKER
from ..results import ResultRecord
from ..tree import Node, find_all

SUCCESS_MESSAGE = "All images have alternative text."


def check_image_alt_text(tree: Node, config: CheckConfig | None = None) -> list[ResultRecord]:
    """Check alt text on every image in a document.

    Args:
        tree: Root of a normalized document
        config: Check settings (unused; accepted for a uniform rule signature)

    Returns:
        One record per image with a problem, or a single success record when
        all images are fine; empty when the document has no images
    """
    images = find_all(tree, "img")
    if not images:
        return []

    results: list[ResultRecord] = []
    for position, image in enumerate(images, start=1):
        alt_text = image.get("alt")
        if alt_text is None:
            results.append(ResultRecord.error(f"Image {position} is missing alternative text."))
        elif not alt_text.strip():
            results.append(
                ResultRecord.warning(
                    f"Image {position} appears to be missing a meaningful description. "
                    f"For decorative images, please set the alt text to {DECORATIVE_ALT_MARKER}."
                )
            )

    if not results:
        return [ResultRecord.success(SUCCESS_MESSAGE)]
    return results
