"""
Configuration for accessibility checks.

Settings live in a :class:`CheckConfig` dataclass. They can also be read
from a YAML or JSON file::

    tabs_policy: row-count
    tabs_label: tabs
    placeholder_alt: Image placeholder
    enabled_rules:
      - tabs
      - image-alt-text
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .constants import DEFAULT_TABS_LABEL, PLACEHOLDER_ALT
from .errors import ConfigError

logger = logging.getLogger(__name__)


class TabsPolicy(Enum):
    """How the Tabs rule decides whether controls and panels agree.

    ANCHOR: every control must link to ``#slug`` of a heading inside the panels
    ROW_COUNT: the number of distinct controls must equal the number of panel rows
    """

    ANCHOR = "anchor"
    ROW_COUNT = "row-count"


@dataclass(frozen=True)
class CheckConfig:
    """Settings shared by the rule runner and the rules.

    Attributes:
        tabs_policy: Validation policy for Tabs blocks
        tabs_label: Text of the first cell that marks a table as a Tabs block
        placeholder_alt: Alt text for images whose source cannot be resolved
        enabled_rules: Names of rules to run, in registry order (None runs all)
    """

    tabs_policy: TabsPolicy = TabsPolicy.ANCHOR
    tabs_label: str = DEFAULT_TABS_LABEL
    placeholder_alt: str = PLACEHOLDER_ALT
    enabled_rules: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        """Coerce string values and validate fields."""
        if isinstance(self.tabs_policy, str):
            try:
                object.__setattr__(self, "tabs_policy", TabsPolicy(self.tabs_policy))
            except ValueError:
                valid = tuple(p.value for p in TabsPolicy)
                raise ValueError(
                    f"tabs_policy must be one of {valid}, got '{self.tabs_policy}'"
                ) from None
        if not self.tabs_label or not self.tabs_label.strip():
            raise ValueError("tabs_label cannot be empty")
        object.__setattr__(self, "tabs_label", self.tabs_label.strip().casefold())
        if isinstance(self.enabled_rules, str):
            object.__setattr__(self, "enabled_rules", (self.enabled_rules,))
        elif self.enabled_rules is not None:
            object.__setattr__(self, "enabled_rules", tuple(self.enabled_rules))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CheckConfig:
        """Build a config from a plain mapping, rejecting unknown keys.

        Raises:
            ConfigError: If the mapping has unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        # Accept dashed keys as written in YAML files
        normalized = {str(key).replace("-", "_"): value for key, value in data.items()}
        unknown = sorted(set(normalized) - known)
        if unknown:
            raise ConfigError(
                "Unknown configuration keys", errors=[f"unknown key '{k}'" for k in unknown]
            )
        try:
            return cls(**normalized)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: str | Path) -> CheckConfig:
    """Load a CheckConfig from a YAML or JSON file.

    The format is chosen by file extension (``.json`` is JSON, anything
    else is parsed as YAML). An empty file yields the defaults.

    Args:
        path: Path to the configuration file

    Returns:
        The loaded configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file cannot be parsed or has invalid content
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            if file_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML file: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse JSON file: {e}") from e

    if data is None:
        logger.debug("Config file %s is empty, using defaults", file_path)
        return CheckConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a dictionary/object")

    return CheckConfig.from_dict(data)
