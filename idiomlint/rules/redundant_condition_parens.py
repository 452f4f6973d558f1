"""Rule: style.redundant_condition_parens

Don't use parentheses around the condition of a control expression, unless
the condition contains an assignment.

    if (x > 10)     # bad
    if x > 10       # good
    if (v = next_value)   # ok: assignment in condition
"""

from typing import Iterator

from idiomlint.matchers import ASSIGNMENT_KINDS, format_message, parenthesized_expression, unwrap_parentheses
from idiomlint.types import Finding, RuleMeta

KEYWORDS = {
    "if": "if", "unless": "unless", "while": "while", "until": "until", "elsif": "elsif",
    "if_modifier": "if", "unless_modifier": "unless",
    "while_modifier": "while", "until_modifier": "until",
}


class RedundantConditionParensRule:
    """Flag redundant parentheses around control-flow conditions."""

    meta = RuleMeta(
        id="style.redundant_condition_parens",
        description="Don't use parentheses around the condition of if/unless/while/until",
        kinds=tuple(KEYWORDS),
        severity="warning",
    )

    message = "Don't use parentheses around the condition of `{keyword}`."

    def match(self, node, ctx) -> Iterator[Finding]:
        condition = node.child_by_field("condition")
        if condition is None:
            return
        inner = parenthesized_expression(condition)
        if inner is None or inner.kind in ASSIGNMENT_KINDS:
            return

        lparen = condition.children[0]
        yield ctx.report(
            format_message(self.message, keyword=KEYWORDS[node.kind]),
            node=condition,
            autofix=unwrap_parentheses(condition, ctx.preceding_token(lparen)),
        )


RULES = [RedundantConditionParensRule()]
