"""
Core types for the idiomlint rule engine.

This module provides the shared dataclasses used across the registry,
traversal engine, rules, collector and autocorrection resolver.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, List, Literal, Mapping, Optional, Protocol, Tuple

from .errors import IdiomlintError


# Type aliases for clarity
Severity = Literal["info", "warning", "error"]
Point = Tuple[int, int]  # (row, column) 0-based, column counted in bytes
NodeRange = Tuple[int, int]  # (start_byte, end_byte) 0-based

SEVERITIES: Tuple[str, ...] = ("info", "warning", "error")


def severity_rank(severity: str) -> int:
    """Return the ordering rank of a severity (info < warning < error)."""
    return SEVERITIES.index(severity)


class FindingKind(str, Enum):
    """What produced a finding."""
    VIOLATION = "violation"
    RULE_CRASHED = "rule_crashed"
    AUTOCORRECT_SKIPPED = "autocorrect_skipped"


class RunStatus(str, Enum):
    """Terminal status of one analyzed unit."""
    OK = "ok"
    CANCELLED = "cancelled"
    PARSE_UNAVAILABLE = "parse_unavailable"


@dataclass(frozen=True, eq=False)
class Node:
    """An immutable element of a parsed tree.

    Nodes compare by identity: two structurally identical sub-expressions at
    different places in the file are different nodes.

    Attributes:
        kind: Grammar node type (e.g. "call", "if", "binary", "(")
        start_byte: Start offset in the UTF-8 encoded source
        end_byte: End offset (exclusive)
        start_point: (row, column) of the start, 0-based
        end_point: (row, column) of the end, 0-based
        children: Child nodes in source order
        text: Raw token text, only set on terminals
        field: Grammar field name of this node in its parent, if any
        named: False for anonymous tokens such as keywords and punctuation
    """
    kind: str
    start_byte: int
    end_byte: int
    start_point: Point = (0, 0)
    end_point: Point = (0, 0)
    children: Tuple["Node", ...] = ()
    text: Optional[str] = None
    field: Optional[str] = None
    named: bool = True

    @property
    def start_line(self) -> int:
        return self.start_point[0] + 1

    @property
    def end_line(self) -> int:
        return self.end_point[0] + 1

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def named_children(self) -> Tuple["Node", ...]:
        return tuple(child for child in self.children if child.named)

    def child_by_field(self, name: str) -> Optional["Node"]:
        """Return the first child tagged with the given grammar field."""
        for child in self.children:
            if child.field == name:
                return child
        return None

    def __repr__(self) -> str:
        if self.text is not None:
            return f"Node({self.kind!r}, {self.start_byte}-{self.end_byte}, text={self.text!r})"
        return f"Node({self.kind!r}, {self.start_byte}-{self.end_byte}, children={len(self.children)})"


class MalformedTreeError(IdiomlintError):
    """Raised by SyntaxTree.validate() when the node invariants do not hold."""


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed unit: the root node plus its tokens in source order.

    Tokens are all terminal nodes of the tree, comments included. They are
    produced once by whoever builds the tree so that token lookups during
    traversal never need a second walk.
    """
    root: Node
    tokens: Tuple[Node, ...]

    @classmethod
    def from_root(cls, root: Node) -> "SyntaxTree":
        """Build a SyntaxTree by collecting the leaves of an existing node tree."""
        tokens: List[Node] = []
        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                tokens.append(node)
            else:
                stack.extend(reversed(node.children))
        return cls(root=root, tokens=tuple(tokens))

    def validate(self) -> None:
        """Check the range invariants of every node.

        Raises:
            MalformedTreeError: if a node has an inverted range, or its
                children overlap, are out of order or escape the parent.
        """
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.start_byte > node.end_byte:
                raise MalformedTreeError(f"{node!r} has an inverted range")
            cursor = node.start_byte
            for child in node.children:
                if child.start_byte < cursor or child.end_byte > node.end_byte:
                    raise MalformedTreeError(
                        f"{child!r} is out of order or outside its parent {node!r}"
                    )
                cursor = child.end_byte
                stack.append(child)


@dataclass(frozen=True)
class Edit:
    """A suggested text replacement of the source bytes [start_byte, end_byte)."""
    start_byte: int
    end_byte: int
    replacement: str

    def overlaps(self, other: "Edit") -> bool:
        """Two edits conflict if their ranges intersect or both insert at one offset."""
        if self.start_byte == other.start_byte:
            return True
        return self.start_byte < other.end_byte and other.start_byte < self.end_byte


@dataclass(frozen=True)
class Finding:
    """A finding represents one rule violation instance."""
    rule: str
    message: str
    severity: Severity
    start_byte: int
    end_byte: int
    start_line: int
    end_line: int
    autofix: Optional[Tuple[Edit, ...]] = None
    kind: FindingKind = FindingKind.VIOLATION
    file: str = ""
    meta: Optional[Mapping[str, Any]] = None

    def _replace(self, **kwargs) -> "Finding":
        """Provide NamedTuple-like _replace method for compatibility."""
        return replace(self, **kwargs)

    @property
    def key(self) -> Tuple[str, int, int, str]:
        """Identity used for de-duplication."""
        return (self.rule, self.start_byte, self.end_byte, self.message)


@dataclass(frozen=True)
class RuleMeta:
    """Metadata about a rule.

    Attributes:
        id: Unique rule identifier (e.g., "style.negated_if")
        description: Human-readable description
        kinds: Node kinds the rule subscribes to
        severity: Default severity, overridable by configuration
        category: Rule category for grouping
        version: Bumped whenever the rule's behaviour changes
        autofix_safety: Whether the rule's autocorrection is safe or suggest-only
        default_params: Parameters the matcher reads, overridable by configuration
    """
    id: str
    description: str
    kinds: Tuple[str, ...]
    severity: Severity = "warning"
    category: str = "style"
    version: str = "1"
    autofix_safety: Literal["safe", "suggest-only", "none"] = "safe"
    default_params: Mapping[str, Any] = field(default_factory=dict)


class Rule(Protocol):
    """Protocol for all rules in the engine.

    Rules are stateless: they read the node and its context and yield
    findings. They must never mutate the tree. A rule may additionally define
    ``autocorrect(finding) -> Sequence[Edit]`` to derive edits for findings
    reported without any.
    """
    meta: RuleMeta

    def match(self, node: Node, ctx: Any) -> Iterable[Finding]:
        ...


@dataclass(frozen=True)
class Suppression:
    """A region where findings of matching rules must be discarded.

    ``rule`` is a rule id or a glob pattern (e.g. "style.*"). Lines are
    1-based and inclusive; ``end_line=None`` extends to the end of the unit.
    """
    rule: str
    start_line: int
    end_line: Optional[int] = None
    source: Literal["inline", "file", "config"] = "inline"

    def covers(self, start_line: int, end_line: int) -> bool:
        """Whether the suppression intersects the given line range."""
        if end_line < self.start_line:
            return False
        return self.end_line is None or start_line <= self.end_line


@dataclass(frozen=True)
class CorrectionResult:
    """Outcome of applying autocorrections to one source text."""
    text: str
    applied: Tuple[Finding, ...] = ()
    skipped: Tuple[Finding, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.applied)


@dataclass(frozen=True)
class RunResult:
    """The engine's terminal output for one analyzed unit."""
    file: str
    status: RunStatus
    findings: Tuple[Finding, ...] = ()
    correction: Optional[CorrectionResult] = None

    @property
    def success(self) -> bool:
        return self.status is RunStatus.OK

    def findings_for(self, rule_id: str) -> Tuple[Finding, ...]:
        return tuple(f for f in self.findings if f.rule == rule_id)

    def max_severity(self) -> Optional[str]:
        """Highest severity among the findings, or None."""
        if not self.findings:
            return None
        return max((f.severity for f in self.findings), key=severity_rank)
