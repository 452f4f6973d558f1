"""
Suppression system for idiomlint rules.

Inline markers are trailing comment tokens:

    x = a and b  # idiomlint: ignore[style.boolean_keyword_operators]
    # idiomlint: ignore-file[style.line_length, style.redundant_*]

Markers are read from the comment tokens of the parsed tree, never by
scanning raw source text. Configuration adds per-rule path exclusions.
"""

import fnmatch
import re
from typing import List, Optional, Tuple

from .config import EngineConfig
from .types import Node, Suppression, SyntaxTree

MARKER_PATTERN = re.compile(r'#\s*idiomlint:\s*(ignore(?:-file)?)\s*\[\s*([^\]]*)\]', re.IGNORECASE)


def rule_matches(rule_id: str, pattern: str) -> bool:
    """Check if a rule ID matches a suppression pattern (exact or glob)."""
    return rule_id == pattern or fnmatch.fnmatchcase(rule_id, pattern)


def parse_marker(comment: Node) -> List[Suppression]:
    """Extract the suppressions declared by one comment token."""
    suppressions = []
    for match in MARKER_PATTERN.finditer(comment.text or ""):
        directive, pattern_list = match.group(1).lower(), match.group(2)
        for pattern in pattern_list.split(','):
            pattern = pattern.strip()
            if not pattern:
                continue
            if directive == "ignore-file":
                suppressions.append(Suppression(pattern, 1, None, "file"))
            else:
                suppressions.append(Suppression(pattern, comment.start_line, comment.end_line, "inline"))
    return suppressions


def inline_suppressions(tree: SyntaxTree) -> List[Suppression]:
    """All suppressions declared by comment tokens of the tree."""
    suppressions = []
    for token in tree.tokens:
        if token.kind == "comment":
            suppressions.extend(parse_marker(token))
    return suppressions


def config_suppressions(file: str, config: EngineConfig) -> List[Suppression]:
    """Whole-unit suppressions for rules whose ``exclude`` globs match the file."""
    return [
        Suppression(rule_id, 1, None, "config")
        for rule_id, rule_config in sorted(config.rules.items())
        if any(fnmatch.fnmatch(file, pattern) for pattern in rule_config.exclude)
    ]


def build_suppressions(tree: SyntaxTree, file: str = "",
                       config: Optional[EngineConfig] = None) -> List[Suppression]:
    """Inline and configuration suppressions for one unit."""
    suppressions = inline_suppressions(tree)
    if config is not None and file:
        suppressions.extend(config_suppressions(file, config))
    return suppressions


def is_excluded(file: str, config: EngineConfig) -> bool:
    """Whether the unit is excluded from analysis entirely."""
    return bool(file) and any(fnmatch.fnmatch(file, pattern) for pattern in config.exclude)


def malformed_markers(tree: SyntaxTree) -> List[Tuple[int, str]]:
    """
    Validate suppression markers and return any errors.

    Returns:
        List of (line_number, error_message) tuples
    """
    errors = []
    for token in tree.tokens:
        if token.kind != "comment" or not token.text:
            continue
        for match in MARKER_PATTERN.finditer(token.text):
            if not match.group(2).strip():
                errors.append((token.start_line, "Empty suppression pattern"))
        if re.search(r'idiomlint:\s*ignore(?:-file)?\s*\[[^\]]*$', token.text, re.IGNORECASE):
            errors.append((token.start_line, "Unclosed suppression bracket"))
    return errors
