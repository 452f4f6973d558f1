"""Rule: style.boolean_keyword_operators

The ``and`` and ``or`` keywords are banned; their precedence is lower than
assignment and surprises readers. Always use ``&&`` and ``||``.

    if some_condition and some_other_condition   # bad
    if some_condition && some_other_condition    # good

The correction is only offered when both operands are simple enough that
the switch to the tighter-binding operator cannot change grouping.
"""

from typing import Iterator, List

from idiomlint.matchers import format_message, is_simple_operand, operator
from idiomlint.types import Edit, Finding, RuleMeta

REPLACEMENTS = {"and": "&&", "or": "||"}

# Binary operators binding tighter than both && and ||
TIGHT_BINARY_OPERATORS = frozenset({
    "==", "!=", "<", "<=", ">", ">=", "===", "=~", "!~", "<=>",
    "+", "-", "*", "/", "%", "**", "&", "|", "^", "<<", ">>",
})


class BooleanKeywordOperatorsRule:
    """Flag ``and``/``or`` used in place of ``&&``/``||``."""

    meta = RuleMeta(
        id="style.boolean_keyword_operators",
        description="Use && and || instead of the and/or keywords",
        kinds=("binary",),
        severity="warning",
    )

    message = "Use `{good}` instead of `{bad}`."

    def match(self, node, ctx) -> Iterator[Finding]:
        op = operator(node)
        if op is None or op.text not in REPLACEMENTS:
            return

        yield ctx.report(
            format_message(self.message, good=REPLACEMENTS[op.text], bad=op.text),
            operator=op.text,
            operator_range=(op.start_byte, op.end_byte),
            safe=self._safe_operands(node),
        )

    def autocorrect(self, finding: Finding) -> List[Edit]:
        meta = finding.meta or {}
        if not meta.get("safe"):
            return []
        start, end = meta["operator_range"]
        return [Edit(start, end, REPLACEMENTS[meta["operator"]])]

    def _safe_operands(self, node) -> bool:
        return all(
            self._safe_operand(side)
            for side in (node.child_by_field("left"), node.child_by_field("right"))
        )

    def _safe_operand(self, side) -> bool:
        if side is None:
            return False
        if side.kind == "binary":
            op = operator(side)
            return op is not None and op.text in TIGHT_BINARY_OPERATORS
        if side.kind == "unary":
            op = operator(side)
            return op is not None and op.text == "!"
        return is_simple_operand(side)


RULES = [BooleanKeywordOperatorsRule()]
