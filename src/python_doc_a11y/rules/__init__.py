"""
The central registry of accessibility rules.

To add a rule, write a function ``rule(tree, config=None) -> list[ResultRecord]``
and register it in ``RULE_REGISTRY`` under a stable name. Rules run in
registration order and must not keep state between invocations.
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable, Sequence

from ..config import CheckConfig
from ..errors import ConfigError
from ..results import ResultRecord
from ..tree import Node
from .images import check_image_alt_text
from .tabs import check_tabs

RuleResult = Sequence[ResultRecord] | Awaitable[Sequence[ResultRecord]]
Rule = Callable[[Node], RuleResult]

RULE_REGISTRY: dict[str, Callable[..., RuleResult]] = {
    "tabs": check_tabs,
    "image-alt-text": check_image_alt_text,
}

# All registered rules, in the order they run
RULES: tuple[Callable[..., RuleResult], ...] = tuple(RULE_REGISTRY.values())


def build_rules(config: CheckConfig | None = None) -> list[Rule]:
    """Bind a configuration to the registered rules.

    Args:
        config: Check settings; ``enabled_rules`` selects which rules run

    Returns:
        Rules taking only the tree, in registry order

    Raises:
        ConfigError: If ``enabled_rules`` names an unknown rule
    """
    config = config or CheckConfig()
    names = list(RULE_REGISTRY)
    if config.enabled_rules is not None:
        unknown = [name for name in config.enabled_rules if name not in RULE_REGISTRY]
        if unknown:
            known = ", ".join(RULE_REGISTRY)
            raise ConfigError(
                "Unknown rules in enabled_rules",
                errors=[f"unknown rule '{name}' (known: {known})" for name in unknown],
            )
        names = [name for name in names if name in config.enabled_rules]

    rules: list[Rule] = []
    for name in names:
        rule = functools.partial(RULE_REGISTRY[name], config=config)
        functools.update_wrapper(rule, RULE_REGISTRY[name])
        rules.append(rule)
    return rules


__all__ = [
    "RULES",
    "RULE_REGISTRY",
    "Rule",
    "build_rules",
    "check_image_alt_text",
    "check_tabs",
]
