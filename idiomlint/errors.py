"""
Exception types for the idiomlint engine.

Only configuration and registration errors escape the engine. Per-unit and
per-rule failures are recovered locally and surface as RunResult statuses
(parse_unavailable, cancelled) or Finding kinds (rule_crashed,
autocorrect_skipped).
"""


class IdiomlintError(Exception):
    """Base class for all engine errors."""


class DuplicateRuleError(IdiomlintError):
    """A rule with the same identifier is already registered."""

    def __init__(self, rule_id: str):
        super().__init__(f"Rule '{rule_id}' is already registered")
        self.rule_id = rule_id


class UnknownRuleError(IdiomlintError):
    """Configuration names rule identifiers that are not registered."""

    def __init__(self, rule_ids):
        self.rule_ids = sorted(rule_ids)
        super().__init__(f"Unknown rule(s) in configuration: {', '.join(self.rule_ids)}")


class ConfigError(IdiomlintError):
    """Configuration is malformed (bad YAML, bad severity, wrong types)."""


class TraversalCancelled(IdiomlintError):
    """Raised inside the traversal when a unit's deadline has expired."""
