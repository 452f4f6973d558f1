"""
idiomlint rule engine package.

This package provides a grammar-agnostic style rule engine over immutable
syntax trees, with built-in rules for Ruby source parsed by Tree-sitter.
"""

from .types import (
    Node, SyntaxTree, Edit, Finding, FindingKind, RuleMeta, Rule, Suppression,
    CorrectionResult, RunResult, RunStatus, Severity, SEVERITIES
)

from .errors import (
    IdiomlintError, DuplicateRuleError, UnknownRuleError, ConfigError, TraversalCancelled
)

from .registry import (
    Registry, ResolvedRules, ActiveRule, get_registry, register_rule, get_rule, get_all_rules
)

from .config import (
    EngineConfig, RuleConfig, config_from_dict, load_config, find_config_file
)

from .traversal import Deadline, NodeContext, walk

from .runner import Engine, Unit, analyze_tree, exit_code

__all__ = [
    # Types
    "Node", "SyntaxTree", "Edit", "Finding", "FindingKind", "RuleMeta", "Rule", "Suppression",
    "CorrectionResult", "RunResult", "RunStatus", "Severity", "SEVERITIES",

    # Errors
    "IdiomlintError", "DuplicateRuleError", "UnknownRuleError", "ConfigError", "TraversalCancelled",

    # Registry
    "Registry", "ResolvedRules", "ActiveRule", "get_registry", "register_rule", "get_rule",
    "get_all_rules",

    # Config
    "EngineConfig", "RuleConfig", "config_from_dict", "load_config", "find_config_file",

    # Engine
    "Deadline", "NodeContext", "walk", "Engine", "Unit", "analyze_tree", "exit_code",
]
