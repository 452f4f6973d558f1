"""
Traversal engine.

One iterative depth-first, pre-order walk per unit. At each node every active
rule subscribed to the node's kind is invoked in registration order with a
NodeContext. Exceptions raised by a rule are converted into a rule_crashed
finding for that rule and node; they never abort the walk.
"""

import bisect
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from .errors import TraversalCancelled
from .registry import ActiveRule, ResolvedRules
from .types import Edit, Finding, FindingKind, Node, SyntaxTree

logger = logging.getLogger(__name__)


class Deadline:
    """Cooperative cancellation for one unit.

    Expires when the monotonic timeout elapses or when the optional event is
    set by another thread.
    """

    def __init__(self, timeout: Optional[float] = None, event: Optional[threading.Event] = None):
        self._expires_at = time.monotonic() + timeout if timeout is not None else None
        self._event = event

    def expired(self) -> bool:
        if self._event is not None and self._event.is_set():
            return True
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def check(self) -> None:
        if self.expired():
            raise TraversalCancelled("deadline expired")


class TokenIndex:
    """Position lookups over the source-ordered tokens of a tree."""

    def __init__(self, tokens: Sequence[Node]):
        self.tokens = tuple(tokens)
        self._starts = [token.start_byte for token in self.tokens]
        self._ends = [token.end_byte for token in self.tokens]

    def preceding(self, node: Node) -> Optional[Node]:
        """Last token that ends at or before the node starts."""
        i = bisect.bisect_right(self._ends, node.start_byte)
        return self.tokens[i - 1] if i > 0 else None

    def following(self, node: Node) -> Optional[Node]:
        """First token that starts at or after the node ends."""
        i = bisect.bisect_left(self._starts, node.end_byte)
        return self.tokens[i] if i < len(self.tokens) else None

    def between(self, start_byte: int, end_byte: int) -> Tuple[Node, ...]:
        """Tokens lying entirely inside [start_byte, end_byte)."""
        lo = bisect.bisect_left(self._starts, start_byte)
        hi = bisect.bisect_right(self._ends, end_byte)
        return tuple(t for t in self.tokens[lo:hi] if t.end_byte <= end_byte)


class NodeContext:
    """What a rule may see around the node it is matching.

    The engine reuses one context per node and rebinds ``active`` before each
    rule invocation, so ``params`` and ``report`` always refer to the rule
    currently running.
    """

    def __init__(self, node: Node, ancestors: Tuple[Node, ...], index: int,
                 tokens: TokenIndex, file: str = ""):
        self.node = node
        self.ancestors = ancestors
        self.index = index
        self.tokens = tokens
        self.file = file
        self.active: Optional[ActiveRule] = None

    @property
    def parent(self) -> Optional[Node]:
        return self.ancestors[-1] if self.ancestors else None

    @property
    def siblings(self) -> Tuple[Node, ...]:
        parent = self.parent
        return parent.children if parent is not None else (self.node,)

    @property
    def prev_sibling(self) -> Optional[Node]:
        return self.siblings[self.index - 1] if self.index > 0 else None

    @property
    def next_sibling(self) -> Optional[Node]:
        siblings = self.siblings
        return siblings[self.index + 1] if self.index + 1 < len(siblings) else None

    @property
    def params(self) -> Mapping[str, Any]:
        return self.active.params if self.active else {}

    def preceding_token(self, node: Optional[Node] = None) -> Optional[Node]:
        return self.tokens.preceding(node or self.node)

    def following_token(self, node: Optional[Node] = None) -> Optional[Node]:
        return self.tokens.following(node or self.node)

    def tokens_between(self, start_byte: int, end_byte: int) -> Tuple[Node, ...]:
        return self.tokens.between(start_byte, end_byte)

    @staticmethod
    def on_same_line(a: Node, b: Node) -> bool:
        """Whether a ends on the line where b starts."""
        return a.end_point[0] == b.start_point[0]

    def report(self, message: str, node: Optional[Node] = None,
               start_byte: Optional[int] = None, end_byte: Optional[int] = None,
               autofix: Optional[Iterable[Edit]] = None, **meta) -> Finding:
        """Build a Finding for the running rule.

        The range defaults to ``node`` (or the context node); explicit byte
        offsets narrow it, with line numbers taken from ``node``.
        """
        target = node or self.node
        return Finding(
            rule=self.active.id,
            message=message,
            severity=self.active.severity,
            start_byte=target.start_byte if start_byte is None else start_byte,
            end_byte=target.end_byte if end_byte is None else end_byte,
            start_line=target.start_line,
            end_line=target.end_line,
            autofix=tuple(autofix) if autofix is not None else None,
            file=self.file,
            meta=meta or None,
        )


@dataclass(frozen=True)
class Traversal:
    """Findings produced by one walk, in traversal order."""
    findings: Tuple[Finding, ...]
    nodes_visited: int
    crashes: int


def _crash_finding(active: ActiveRule, node: Node, error: BaseException, file: str) -> Finding:
    return Finding(
        rule=active.id,
        message=f"RuleCrashed: rule '{active.id}' raised {type(error).__name__}: {error}",
        severity="info",
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        start_line=node.start_line,
        end_line=node.end_line,
        kind=FindingKind.RULE_CRASHED,
        file=file,
        meta={"node_kind": node.kind, "exception": type(error).__name__},
    )


def _run_rule(active: ActiveRule, node: Node, ctx: NodeContext) -> List[Finding]:
    """Invoke one rule on one node, deriving edits through autocorrect()."""
    ctx.active = active
    rule = active.rule
    results = list(rule.match(node, ctx))
    autocorrect = getattr(rule, "autocorrect", None)
    if autocorrect is None:
        return results
    return [
        finding._replace(autofix=tuple(autocorrect(finding))) if finding.autofix is None else finding
        for finding in results
    ]


def walk(tree: SyntaxTree, rules: ResolvedRules, deadline: Optional[Deadline] = None,
         file: str = "") -> Traversal:
    """
    Walk a tree once and collect the findings of every subscribed rule.

    Args:
        tree: The unit's syntax tree
        rules: The resolved active rule set
        deadline: Checked between top-level child visits
        file: Path stamped onto findings

    Returns:
        Traversal with findings in traversal order

    Raises:
        TraversalCancelled: if the deadline expires
    """
    tokens = TokenIndex(tree.tokens)
    findings: List[Finding] = []
    visited = 0
    crashes = 0

    # Stack entries: (node, ancestors, sibling index)
    stack: List[Tuple[Node, Tuple[Node, ...], int]] = [(tree.root, (), 0)]
    while stack:
        node, ancestors, index = stack.pop()
        if deadline is not None and len(ancestors) == 1:
            deadline.check()
        visited += 1

        subscribed = rules.for_kind(node.kind)
        if subscribed:
            ctx = NodeContext(node, ancestors, index, tokens, file)
            for active in subscribed:
                try:
                    findings.extend(_run_rule(active, node, ctx))
                except Exception as e:
                    crashes += 1
                    logger.warning("Rule '%s' crashed on %s at line %d",
                                   active.id, node.kind, node.start_line, exc_info=True)
                    findings.append(_crash_finding(active, node, e, file))

        if node.children:
            child_ancestors = ancestors + (node,)
            for i in range(len(node.children) - 1, -1, -1):
                stack.append((node.children[i], child_ancestors, i))

    return Traversal(findings=tuple(findings), nodes_visited=visited, crashes=crashes)
