"""
Rule that validates the structure of "Tabs" blocks.

A Tabs block is a table whose first cell reads "tabs". Its second row
holds the tab controls (links) and every later row is a tab panel::

    | Tabs                                   |
    | [Tab One](#tab-one) | [Tab Two](#tab-two) |
    | ## Tab One ...                         |
    | ## Tab Two ...                         |

Depending on :class:`~python_doc_a11y.config.TabsPolicy`, each control must
either link to the slug of a heading inside the panels (``anchor``) or the
number of controls must match the number of panel rows (``row-count``).
"""

from __future__ import annotations

import logging

from ..config import CheckConfig, TabsPolicy
from ..results import ResultRecord
from ..slug import slugify
from ..tree import (
    Element,
    LinkSpan,
    Node,
    find_all,
    is_heading,
    iter_nodes,
    row_cells,
    scan_node_links,
    table_rows,
    text_content,
    unique_by_url,
)

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = 'All "Tabs" blocks have validly linked controls and panels.'
NO_CONTROL_ROW_MESSAGE = 'A "Tabs" block was found, but it has no second row for tab controls.'
NO_LINKS_MESSAGE = (
    'A "Tabs" block was found, but the second row contains no links to act as tab controls.'
)

# Rows before the first panel: label row and control row
_HEADER_ROWS = 2


def is_tabs_block(table: Element, label: str = "tabs") -> bool:
    """Check whether a table is a Tabs block.

    The first cell of the first row, trimmed and case-folded, must equal
    ``label``.
    """
    rows = table_rows(table)
    if not rows:
        return False
    cells = row_cells(rows[0])
    if not cells:
        return False
    return text_content(cells[0]).strip().casefold() == label.casefold()


def tab_controls(control_row: Element) -> list[LinkSpan]:
    """Collect the distinct links of a control row, in first-occurrence order."""
    spans: list[LinkSpan] = []
    for cell in row_cells(control_row):
        spans.extend(scan_node_links(cell))
    return unique_by_url(spans)


def panel_anchors(panel_rows: list[Element]) -> set[str]:
    """Collect the anchors of every heading inside the panel rows.

    A heading's anchor is the slug of its text; an explicit ``id`` supplied
    by the host is accepted as well.
    """
    anchors: set[str] = set()
    for row in panel_rows:
        for heading in iter_nodes(row, is_heading):
            anchors.add(slugify(text_content(heading)))
            heading_id = heading.get("id")  # type: ignore[union-attr]
            if heading_id:
                anchors.add(heading_id)
    anchors.discard("")
    return anchors


def _display_text(control: LinkSpan) -> str:
    return control.text.strip()


def _check_anchors(controls: list[LinkSpan], panel_rows: list[Element]) -> list[ResultRecord]:
    results: list[ResultRecord] = []
    anchors = panel_anchors(panel_rows)
    for control in controls:
        if not control.url.startswith("#"):
            results.append(
                ResultRecord.error(
                    f'The tab control "{_display_text(control)}" does not link to a valid '
                    f'anchor (it links to "{control.url}").'
                )
            )
            continue
        anchor = control.url[1:]
        if anchor not in anchors:
            results.append(
                ResultRecord.error(
                    f'The tab control "{_display_text(control)}" links to an anchor '
                    f'"#{anchor}" that does not match any heading inside the tab panels.'
                )
            )
    return results


def _check_row_count(controls: list[LinkSpan], panel_rows: list[Element]) -> list[ResultRecord]:
    if len(controls) == len(panel_rows):
        return []
    return [
        ResultRecord.error(
            f"The number of tab controls ({len(controls)}) does not match "
            f"the number of tab panels ({len(panel_rows)})."
        )
    ]


def validate_tabs_block(
    table: Element, policy: TabsPolicy = TabsPolicy.ANCHOR
) -> list[ResultRecord]:
    """Validate a single Tabs block.

    Args:
        table: A table already known to be a Tabs block
        policy: Which consistency check to apply to controls and panels

    Returns:
        Result records for this block; empty when the block is valid
    """
    rows = table_rows(table)
    if len(rows) < _HEADER_ROWS:
        return [ResultRecord.error(NO_CONTROL_ROW_MESSAGE)]

    controls = tab_controls(rows[1])
    if not controls:
        return [ResultRecord.warning(NO_LINKS_MESSAGE)]

    panel_rows = rows[_HEADER_ROWS:]
    if policy is TabsPolicy.ROW_COUNT:
        return _check_row_count(controls, panel_rows)
    return _check_anchors(controls, panel_rows)


def check_tabs(tree: Node, config: CheckConfig | None = None) -> list[ResultRecord]:
    """Validate every Tabs block in a document.

    Blocks are validated independently; a failure while validating one
    block is reported as an error for that block and the remaining blocks
    are still checked. A single trailing success record is emitted only
    when at least one Tabs block exists and no block reported anything.

    Args:
        tree: Root of a normalized document
        config: Check settings (defaults when None)

    Returns:
        Result records; empty when the document has no Tabs blocks
    """
    config = config or CheckConfig()
    tables = find_all(tree, "table")
    blocks = [table for table in tables if is_tabs_block(table, config.tabs_label)]
    if not blocks:
        return []

    logger.debug(
        "Validating %d Tabs block(s) with %s policy", len(blocks), config.tabs_policy.value
    )

    results: list[ResultRecord] = []
    for index, block in enumerate(blocks, start=1):
        try:
            results.extend(validate_tabs_block(block, config.tabs_policy))
        except Exception as e:
            logger.warning("Failed to validate Tabs block %d", index, exc_info=True)
            results.append(
                ResultRecord.error(
                    f"A critical error occurred while validating Tabs block {index}: {e}"
                )
            )

    if not results:
        results.append(ResultRecord.success(SUCCESS_MESSAGE))
    return results
