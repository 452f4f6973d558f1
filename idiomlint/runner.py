"""
Runner for the idiomlint engine.

This module ties the pieces together: it resolves the rule set once, walks
each unit's tree, collects and filters findings, optionally resolves
autocorrections, and maps a batch of results to a process exit code.
"""

import concurrent.futures
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from . import autocorrect
from .collector import DiagnosticCollector
from .config import EngineConfig
from .errors import TraversalCancelled
from .registry import Registry, ResolvedRules, get_registry
from .suppressions import build_suppressions, is_excluded
from .traversal import Deadline, walk
from .types import (
    CorrectionResult, MalformedTreeError, Node, RunResult, RunStatus, SyntaxTree, severity_rank
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ENGINE_ERROR = 2

Parse = Callable[[str], Optional[SyntaxTree]]


@dataclass(frozen=True)
class Unit:
    """One analyzed input: its parsed tree (None if parsing failed) and source."""
    file: str
    tree: Optional[SyntaxTree]
    source: str = ""


def _as_tree(tree) -> Optional[SyntaxTree]:
    if isinstance(tree, Node):
        return SyntaxTree.from_root(tree)
    return tree


class Engine:
    """Analyzes units against a resolved, read-only rule set.

    The rule set is resolved in the constructor so configuration errors
    (UnknownRuleError, ConfigError) surface before any unit is touched.
    """

    def __init__(self, registry: Optional[Registry] = None, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.registry = registry or get_registry()
        self.rules: ResolvedRules = self.registry.resolve(self.config)

    def analyze(self, unit: Unit, deadline: Optional[Deadline] = None) -> RunResult:
        """
        Analyze a single unit.

        Args:
            unit: The unit to analyze
            deadline: Optional cancellation deadline; defaults to the
                configured per-unit timeout

        Returns:
            RunResult with status ok, cancelled or parse_unavailable
        """
        tree = _as_tree(unit.tree)
        if tree is None:
            logger.info("No syntax tree for %s", unit.file or "<unit>")
            return RunResult(file=unit.file, status=RunStatus.PARSE_UNAVAILABLE)
        try:
            tree.validate()
        except MalformedTreeError as e:
            logger.warning("Malformed syntax tree for %s: %s", unit.file or "<unit>", e)
            return RunResult(file=unit.file, status=RunStatus.PARSE_UNAVAILABLE)

        if is_excluded(unit.file, self.config):
            return RunResult(file=unit.file, status=RunStatus.OK)

        if deadline is None and self.config.timeout_seconds is not None:
            deadline = Deadline(self.config.timeout_seconds)

        try:
            traversal = walk(tree, self.rules, deadline, unit.file)
        except TraversalCancelled:
            logger.info("Analysis of %s cancelled", unit.file or "<unit>")
            return RunResult(file=unit.file, status=RunStatus.CANCELLED)
        logger.debug("Walked %s: %d nodes, %d findings, %d rule crashes", unit.file or "<unit>",
                     traversal.nodes_visited, len(traversal.findings), traversal.crashes)

        collector = DiagnosticCollector(
            build_suppressions(tree, unit.file, self.config),
            limit=self.config.max_findings_per_unit,
        )
        collector.extend(traversal.findings)
        findings = collector.results()

        correction = None
        if self.config.autocorrect:
            correction = autocorrect.resolve(findings, unit.source)
        return RunResult(file=unit.file, status=RunStatus.OK, findings=findings, correction=correction)

    def run(self, units: Sequence[Unit], jobs: Optional[int] = None,
            cancel: Optional[threading.Event] = None) -> List[RunResult]:
        """
        Analyze many units, in parallel when jobs > 1.

        Units share nothing but the resolved rule set, so they are processed
        independently; results come back in input order.

        Args:
            units: Units to analyze
            jobs: Worker pool size; defaults to the configured value
            cancel: Event that cancels every unit still running when set

        Returns:
            One RunResult per unit
        """
        jobs = jobs or self.config.jobs

        def analyze(unit: Unit) -> RunResult:
            # The deadline starts when a worker picks the unit up, not when it is queued
            deadline = None
            if cancel is not None or self.config.timeout_seconds is not None:
                deadline = Deadline(self.config.timeout_seconds, cancel)
            return self.analyze(unit, deadline)

        if jobs <= 1:
            return [analyze(unit) for unit in units]

        with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = [executor.submit(analyze, unit) for unit in units]
            return [future.result() for future in futures]

    def autocorrect(self, source: str, parse: Parse, file: str = "",
                    max_passes: int = 10) -> CorrectionResult:
        """
        Correct a source until no further edit applies.

        Each pass parses the current text, analyzes it and applies the
        accepted edits. Edits skipped for conflicts in one pass get another
        chance on the next one.

        Args:
            source: Source text
            parse: Parser returning a SyntaxTree, or None on failure
            file: Path used for findings and exclusion globs
            max_passes: Upper bound on parse/correct iterations

        Returns:
            CorrectionResult with every applied correction and the skipped
            ones of the final pass
        """
        text = source
        applied = []
        skipped = ()
        for _ in range(max_passes):
            result = self.analyze(Unit(file, parse(text), text))
            if not result.success:
                break
            correction = autocorrect.resolve(result.findings, text)
            skipped = correction.skipped
            if not correction.changed:
                break
            applied.extend(correction.applied)
            text = correction.text
        return CorrectionResult(text=text, applied=tuple(applied), skipped=tuple(skipped))


def exit_code(results: Sequence[RunResult]) -> int:
    """
    Map a batch of results to the wrapping CLI's exit code.

    Returns:
        2 if no unit could be analyzed, 1 if any finding has error severity,
        0 otherwise
    """
    if results and not any(result.success for result in results):
        return EXIT_ENGINE_ERROR
    for result in results:
        severity = result.max_severity()
        if severity is not None and severity_rank(severity) >= severity_rank("error"):
            return EXIT_FINDINGS
    return EXIT_OK


def analyze_tree(tree, source: str = "", file: str = "",
                 config: Optional[EngineConfig] = None,
                 registry: Optional[Registry] = None) -> RunResult:
    """Convenience wrapper analyzing one tree with a fresh Engine."""
    return Engine(registry, config).analyze(Unit(file, _as_tree(tree), source))
