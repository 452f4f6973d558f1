"""
Diagnostic collector.

Accumulates findings in traversal order and produces the final list:
suppressed findings dropped, duplicates removed, sorted by source position
then rule id so output does not depend on registration order.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from .suppressions import rule_matches
from .types import Finding, Suppression


def sort_key(finding: Finding) -> Tuple[int, str, int, str, str]:
    return (finding.start_byte, finding.rule, finding.end_byte, finding.kind.value, finding.message)


class DiagnosticCollector:
    """Collects findings for one unit."""

    def __init__(self, suppressions: Sequence[Suppression] = (), limit: Optional[int] = None):
        self._suppressions = tuple(suppressions)
        self._limit = limit
        self._findings: List[Finding] = []
        self.suppressed_count = 0
        self.duplicate_count = 0

    def add(self, finding: Finding) -> None:
        self._findings.append(finding)

    def extend(self, findings: Iterable[Finding]) -> None:
        self._findings.extend(findings)

    def is_suppressed(self, finding: Finding) -> bool:
        """A finding is suppressed if a suppression naming its rule intersects its lines."""
        for suppression in self._suppressions:
            if rule_matches(finding.rule, suppression.rule) and \
                    suppression.covers(finding.start_line, finding.end_line):
                return True
        return False

    def results(self) -> Tuple[Finding, ...]:
        """Surviving findings, de-duplicated and in deterministic order."""
        seen = set()
        survivors = []
        self.suppressed_count = 0
        self.duplicate_count = 0

        for finding in self._findings:
            if self.is_suppressed(finding):
                self.suppressed_count += 1
                continue
            key = finding.key
            if key in seen:
                self.duplicate_count += 1
                continue
            seen.add(key)
            survivors.append(finding)

        survivors.sort(key=sort_key)
        if self._limit is not None:
            survivors = survivors[:self._limit]
        return tuple(survivors)

    def __len__(self) -> int:
        return len(self._findings)
