"""
Rule runner.

Runs the registered rules over one normalized document, in registration
order, and concatenates their records. A rule that raises never stops the
others: its failure becomes a single error record.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from .config import CheckConfig
from .normalizers import normalize
from .results import ResultRecord, record_from_mapping
from .rules import Rule, build_rules
from .sources import SUPPORTED_SUFFIXES, load_document
from .tree import Node

logger = logging.getLogger(__name__)

CRITICAL_ERROR_PREFIX = "A critical error occurred while running a rule:"


def _rule_name(rule: Rule) -> str:
    return getattr(rule, "__name__", None) or repr(rule)


def _as_records(result: Iterable[Any] | None) -> list[ResultRecord]:
    if result is None:
        return []
    records: list[ResultRecord] = []
    for item in result:
        if isinstance(item, ResultRecord):
            records.append(item)
        elif isinstance(item, Mapping):
            records.append(record_from_mapping(item))
        else:
            raise TypeError(f"Rule returned {type(item).__name__}, expected ResultRecord")
    return records


def _failure_record(rule: Rule, error: BaseException) -> ResultRecord:
    logger.warning("Rule %s failed", _rule_name(rule), exc_info=error)
    return ResultRecord.error(f"{CRITICAL_ERROR_PREFIX} {error}")


def _resolve_sync(result: Any) -> Any:
    """Resolve a rule result that turned out to be awaitable."""
    if not inspect.isawaitable(result):
        return result
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        if inspect.iscoroutine(result):
            result.close()
        raise RuntimeError("asynchronous rule cannot run inside an event loop; use run_rules_async")

    async def wait() -> Any:
        return await result

    return asyncio.run(wait())


def run_rules(
    tree: Node,
    rules: Sequence[Rule] | None = None,
    config: CheckConfig | None = None,
) -> list[ResultRecord]:
    """Run rules over a normalized document.

    Args:
        tree: Root of the normalized document
        rules: Rules to run, in order (defaults to the registry bound to ``config``)
        config: Check settings used when ``rules`` is None

    Returns:
        All records, ordered by rule and then by emission order

    Example:
        >>> from python_doc_a11y.tree import Root
        >>> run_rules(Root())
        []
    """
    if rules is None:
        rules = build_rules(config)

    results: list[ResultRecord] = []
    for rule in rules:
        logger.debug("Running rule %s", _rule_name(rule))
        try:
            results.extend(_as_records(_resolve_sync(rule(tree))))
        except Exception as e:
            results.append(_failure_record(rule, e))
    return results


async def run_rules_async(
    tree: Node,
    rules: Sequence[Rule] | None = None,
    config: CheckConfig | None = None,
) -> list[ResultRecord]:
    """Run rules over a normalized document, awaiting asynchronous rules.

    Rules still run one after another; this only lets a rule suspend while
    it waits on an external collaborator.
    """
    if rules is None:
        rules = build_rules(config)

    results: list[ResultRecord] = []
    for rule in rules:
        logger.debug("Running rule %s", _rule_name(rule))
        try:
            result = rule(tree)
            if inspect.isawaitable(result):
                result = await result
            results.extend(_as_records(result))
        except Exception as e:
            results.append(_failure_record(rule, e))
    return results


def _is_file_name(document: Any) -> bool:
    if not isinstance(document, str) or "<" in document or "\n" in document:
        return False
    return Path(document).suffix.lower() in SUPPORTED_SUFFIXES


def check_document(document: Any, config: CheckConfig | None = None) -> list[ResultRecord]:
    """Normalize a host document and run every enabled rule over it.

    A ``str`` is read as a file name when it has no markup, sits on one
    line and ends in a supported suffix (``"handbook.docx"``); any other
    string is HTML markup.

    Args:
        document: A path to a document file, or any input accepted by
            :func:`~python_doc_a11y.normalizers.normalize`
        config: Check settings

    Returns:
        Ordered result records

    Raises:
        DocumentLoadError: If ``document`` is a path that cannot be loaded
    """
    config = config or CheckConfig()
    if isinstance(document, Path) or _is_file_name(document):
        document = load_document(document)
    tree = normalize(document, placeholder_alt=config.placeholder_alt)
    return run_rules(tree, config=config)
