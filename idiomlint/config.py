"""
Configuration management for the idiomlint engine.

This module provides configuration loading with sensible defaults for
rule enablement, severities, matcher parameters and run limits.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .types import SEVERITIES

logger = logging.getLogger(__name__)

CONFIG_NAMES = [".idiomlint.yml", ".idiomlint.yaml", "idiomlint.yml", "idiomlint.yaml"]


@dataclass
class RuleConfig:
    """Per-rule configuration.

    Attributes:
        enabled: Whether the rule runs at all
        severity: Severity override ("info", "warning", "error"), None keeps the default
        params: Free-form parameters read by the rule's matcher
        exclude: Path globs where this rule's findings are discarded
    """
    enabled: bool = True
    severity: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)
    exclude: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.severity is not None and self.severity not in SEVERITIES:
            raise ConfigError(
                f"Invalid severity '{self.severity}'; expected one of {', '.join(SEVERITIES)}"
            )


@dataclass
class EngineConfig:
    """Configuration for the idiomlint engine."""

    # Rule id -> per-rule settings; rules not listed run with their defaults
    rules: Dict[str, RuleConfig] = field(default_factory=dict)

    # Limits
    max_findings_per_unit: int = 500

    # Worker pool size for multi-unit runs
    jobs: int = 1

    # Per-unit traversal deadline in seconds (None disables it)
    timeout_seconds: Optional[float] = None

    # Path globs for units that are skipped entirely
    exclude: List[str] = field(default_factory=list)

    # Whether Engine.analyze also resolves and applies autocorrections
    autocorrect: bool = False

    def rule(self, rule_id: str) -> RuleConfig:
        """Get the configuration of a rule, falling back to defaults."""
        return self.rules.get(rule_id) or RuleConfig()


def _rule_config_from_dict(rule_id: str, raw: Any) -> RuleConfig:
    if isinstance(raw, bool):
        # Shorthand: "style.negated_if: false"
        return RuleConfig(enabled=raw)
    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration for rule '{rule_id}' must be a mapping or a boolean")

    known = {"enabled", "severity", "params", "exclude"}
    unexpected = set(raw) - known
    if unexpected:
        raise ConfigError(
            f"Unexpected keys for rule '{rule_id}': {', '.join(sorted(unexpected))}"
        )
    params = raw.get("params") or {}
    if not isinstance(params, dict):
        raise ConfigError(f"'params' for rule '{rule_id}' must be a mapping")
    return RuleConfig(
        enabled=bool(raw.get("enabled", True)),
        severity=raw.get("severity"),
        params=dict(params),
        exclude=list(raw.get("exclude") or []),
    )


def config_from_dict(data: Dict[str, Any]) -> EngineConfig:
    """
    Build an EngineConfig from a plain dictionary (e.g. parsed YAML).

    Args:
        data: Mapping with optional keys "rules", "max_findings_per_unit",
            "jobs", "timeout_seconds", "exclude" and "autocorrect"

    Returns:
        EngineConfig instance

    Raises:
        ConfigError: if the mapping has the wrong shape
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    rules_raw = data.get("rules") or {}
    if not isinstance(rules_raw, dict):
        raise ConfigError("'rules' must be a mapping of rule id to settings")

    try:
        return EngineConfig(
            rules={rule_id: _rule_config_from_dict(rule_id, raw) for rule_id, raw in rules_raw.items()},
            max_findings_per_unit=int(data.get("max_findings_per_unit", 500)),
            jobs=max(1, int(data.get("jobs", 1))),
            timeout_seconds=(
                float(data["timeout_seconds"]) if data.get("timeout_seconds") is not None else None
            ),
            exclude=list(data.get("exclude") or []),
            autocorrect=bool(data.get("autocorrect", False)),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}") from e


def load_config(config_path: Optional[str] = None) -> EngineConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (YAML). If None or missing, uses defaults.

    Returns:
        EngineConfig instance

    Raises:
        ConfigError: if the file exists but cannot be parsed
    """
    if not config_path or not os.path.exists(config_path):
        logger.debug("No configuration file at %s, using defaults", config_path)
        return EngineConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            file_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {config_path}: {e}") from e

    return config_from_dict(file_config)


def find_config_file(start_path: str = ".") -> Optional[str]:
    """
    Find configuration file by walking up the directory tree.

    Looks for .idiomlint.yml, .idiomlint.yaml, idiomlint.yml and
    idiomlint.yaml, in that order, in each directory.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to config file or None if not found
    """
    current_path = os.path.abspath(start_path)

    while True:
        for config_name in CONFIG_NAMES:
            config_path = os.path.join(current_path, config_name)
            if os.path.exists(config_path):
                return config_path

        parent_path = os.path.dirname(current_path)
        if parent_path == current_path:
            # Reached the root directory
            break
        current_path = parent_path

    return None
