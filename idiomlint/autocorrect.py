"""
Autocorrection resolver.

Takes the sorted findings of a unit, greedily accepts edit sets in source
order and applies the accepted edits to the source in one pass from the end
toward the beginning. An edit set that overlaps an already accepted one is
not applied; it is reported as an autocorrect_skipped finding instead.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .types import CorrectionResult, Edit, Finding, FindingKind

logger = logging.getLogger(__name__)


def _invalid_reason(edits: Sequence[Edit], size: int) -> Optional[str]:
    """Why an edit set cannot be applied on its own, or None if it can."""
    for edit in edits:
        if edit.start_byte < 0 or edit.end_byte > size or edit.start_byte > edit.end_byte:
            return f"edit {edit.start_byte}-{edit.end_byte} is outside the source"
    ordered = sorted(edits, key=lambda e: (e.start_byte, e.end_byte))
    for a, b in zip(ordered, ordered[1:]):
        if a.overlaps(b):
            return "the finding's own edits overlap"
    return None


def _skipped(finding: Finding, reason: str, blocker: Optional[Finding] = None) -> Finding:
    meta = {"reason": reason}
    if blocker is not None:
        meta["conflicts_with"] = blocker.rule
    return Finding(
        rule=finding.rule,
        message=f"AutocorrectSkipped: correction for '{finding.rule}' not applied: {reason}",
        severity="info",
        start_byte=finding.start_byte,
        end_byte=finding.end_byte,
        start_line=finding.start_line,
        end_line=finding.end_line,
        kind=FindingKind.AUTOCORRECT_SKIPPED,
        file=finding.file,
        meta=meta,
    )


def apply_edits(source: str, edits: Sequence[Edit]) -> str:
    """Apply non-overlapping edits to UTF-8 byte offsets of a source string."""
    data = source.encode("utf-8")
    for edit in sorted(edits, key=lambda e: (e.start_byte, e.end_byte), reverse=True):
        data = data[:edit.start_byte] + edit.replacement.encode("utf-8") + data[edit.end_byte:]
    return data.decode("utf-8")


def select(findings: Sequence[Finding], size: int) -> Tuple[List[Finding], List[Finding], List[Edit]]:
    """
    Choose which edit sets to apply.

    Args:
        findings: Findings in source order
        size: Length of the UTF-8 encoded source

    Returns:
        (applied findings, autocorrect_skipped findings, accepted edits)
    """
    applied: List[Finding] = []
    skipped: List[Finding] = []
    accepted: List[Tuple[Edit, Finding]] = []

    for finding in findings:
        if not finding.autofix or finding.kind is not FindingKind.VIOLATION:
            continue

        reason = _invalid_reason(finding.autofix, size)
        if reason is not None:
            skipped.append(_skipped(finding, reason))
            continue

        blocker = next(
            (owner for edit in finding.autofix for prior, owner in accepted if edit.overlaps(prior)),
            None,
        )
        if blocker is not None:
            logger.info("Skipping autocorrect for %s at line %d: conflicts with %s",
                        finding.rule, finding.start_line, blocker.rule)
            skipped.append(_skipped(finding, f"conflicts with '{blocker.rule}'", blocker))
            continue

        accepted.extend((edit, finding) for edit in finding.autofix)
        applied.append(finding)

    return applied, skipped, [edit for edit, _ in accepted]


def resolve(findings: Sequence[Finding], source: str) -> CorrectionResult:
    """
    Resolve and apply the autocorrections of a unit.

    Args:
        findings: The unit's findings, sorted by source position
        source: The source text the findings' byte offsets refer to

    Returns:
        CorrectionResult with the rewritten text and applied/skipped corrections
    """
    applied, skipped, edits = select(findings, len(source.encode("utf-8")))
    text = apply_edits(source, edits) if edits else source
    return CorrectionResult(text=text, applied=tuple(applied), skipped=tuple(skipped))
