"""
Registry for rules.

This module provides a central registry to register and discover rules,
and to resolve a configuration into the read-only set of active rules that
the traversal engine dispatches on.
"""

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import EngineConfig
from .errors import DuplicateRuleError, UnknownRuleError
from .types import Rule

logger = logging.getLogger(__name__)

BUILTIN_RULE_PACKAGES = ["idiomlint.rules"]


@dataclass(frozen=True)
class ActiveRule:
    """A rule annotated with its effective configuration."""
    rule: Rule
    severity: str
    params: Mapping[str, Any]
    order: int

    @property
    def id(self) -> str:
        return self.rule.meta.id


class ResolvedRules:
    """The effective, ordered set of active rules for one run.

    Built once before any unit is analyzed and shared read-only between
    workers. Rules are grouped by subscribed node kind so that dispatch is a
    single dictionary lookup per node.
    """

    def __init__(self, active: List[ActiveRule]):
        self._active: Tuple[ActiveRule, ...] = tuple(active)
        by_kind: Dict[str, List[ActiveRule]] = {}
        for item in self._active:
            for kind in item.rule.meta.kinds:
                by_kind.setdefault(kind, []).append(item)
        self._by_kind = MappingProxyType({kind: tuple(items) for kind, items in by_kind.items()})

    @property
    def active(self) -> Tuple[ActiveRule, ...]:
        return self._active

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(item.id for item in self._active)

    def for_kind(self, kind: str) -> Tuple[ActiveRule, ...]:
        """Active rules subscribed to a node kind, in registration order."""
        return self._by_kind.get(kind, ())

    def get(self, rule_id: str) -> Optional[ActiveRule]:
        for item in self._active:
            if item.id == rule_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self._active)

    def __iter__(self):
        return iter(self._active)


class Registry:
    """Central registry for rules."""

    def __init__(self):
        self._rules: List[Rule] = []
        self._rule_index: Dict[str, Rule] = {}  # id -> rule

    def register_rule(self, rule: Rule) -> None:
        """Register a rule in the registry.

        Raises:
            DuplicateRuleError: if a rule with the same id is already registered
        """
        rule_id = rule.meta.id
        if rule_id in self._rule_index:
            raise DuplicateRuleError(rule_id)

        self._rules.append(rule)
        self._rule_index[rule_id] = rule

    register = register_rule

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        """Get rule by id."""
        return self._rule_index.get(rule_id)

    def get_all_rules(self) -> List[Rule]:
        """Get all registered rules in registration order."""
        return self._rules.copy()

    def get_rule_ids(self) -> List[str]:
        """Get all registered rule IDs."""
        return list(self._rule_index.keys())

    def resolve(self, config: Optional[EngineConfig] = None) -> ResolvedRules:
        """
        Resolve a configuration into the active rule set.

        Args:
            config: Engine configuration; None means every rule with its defaults

        Returns:
            ResolvedRules with disabled rules removed and severity/params applied

        Raises:
            UnknownRuleError: if the configuration names unregistered rules
        """
        config = config or EngineConfig()

        unknown = set(config.rules) - set(self._rule_index)
        if unknown:
            raise UnknownRuleError(unknown)

        active = []
        for order, rule in enumerate(self._rules):
            rule_config = config.rule(rule.meta.id)
            if not rule_config.enabled:
                continue

            params = dict(rule.meta.default_params)
            params.update(rule_config.params)
            active.append(ActiveRule(
                rule=rule,
                severity=rule_config.severity or rule.meta.severity,
                params=MappingProxyType(params),
                order=order,
            ))

        logger.debug("Resolved %d of %d registered rules", len(active), len(self._rules))
        return ResolvedRules(active)

    def discover_rules(self, entry_packages: List[str]) -> int:
        """
        Auto-discover and register rules from packages.

        Every submodule of each package is imported and its ``RULES`` list is
        registered in order. Modules are walked in name order so registration
        order is stable across runs.

        Args:
            entry_packages: List of package names to discover from

        Returns:
            Number of rules discovered and registered
        """
        initial_count = len(self._rules)

        for package_name in entry_packages:
            package = importlib.import_module(package_name)
            self._extract_rules_from_module(package)

            if not hasattr(package, '__path__'):
                continue
            modules = sorted(
                modname for _, modname, _ in pkgutil.walk_packages(package.__path__, package.__name__ + ".")
            )
            for modname in modules:
                try:
                    module = importlib.import_module(modname)
                except Exception:
                    logger.exception("Failed to import rule module %s", modname)
                    raise
                self._extract_rules_from_module(module)

        return len(self._rules) - initial_count

    def _extract_rules_from_module(self, module) -> None:
        """Register the RULES list of a module, instantiating classes."""
        for rule in getattr(module, 'RULES', None) or []:
            # If it's a class, instantiate it
            self.register_rule(rule() if isinstance(rule, type) else rule)

    def clear(self) -> None:
        """Clear all registered rules (mainly for testing)."""
        self._rules.clear()
        self._rule_index.clear()


# Global registry instance, populated with the built-in rules on first use
_global_registry: Optional[Registry] = None


def get_registry() -> Registry:
    """Get the global registry instance, discovering built-in rules once."""
    global _global_registry
    if _global_registry is None:
        registry = Registry()
        registry.discover_rules(BUILTIN_RULE_PACKAGES)
        _global_registry = registry
    return _global_registry


def register_rule(rule: Rule) -> None:
    """Register a rule in the global registry."""
    get_registry().register_rule(rule)


def get_rule(rule_id: str) -> Optional[Rule]:
    """Get rule by id from the global registry."""
    return get_registry().get_rule(rule_id)


def get_all_rules() -> List[Rule]:
    """Get all registered rules from the global registry."""
    return get_registry().get_all_rules()
