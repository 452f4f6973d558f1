"""Rule: style.space_inside_parens

No spaces after ``(`` or before ``)``.

    some( arg ).other     # bad
    some(arg).other       # good
"""

from typing import Iterator

from idiomlint.matchers import is_parenthesized, remove_range
from idiomlint.types import Finding, RuleMeta


class SpaceInsideParensRule:
    """Flag same-line whitespace just inside a pair of parentheses."""

    meta = RuleMeta(
        id="style.space_inside_parens",
        description="No spaces after ( or before )",
        kinds=("parenthesized_statements", "argument_list", "method_parameters"),
        severity="warning",
    )

    def match(self, node, ctx) -> Iterator[Finding]:
        if not is_parenthesized(node) or len(node.children) < 3:
            return
        lparen, rparen = node.children[0], node.children[-1]
        first, last = node.children[1], node.children[-2]

        if first.start_byte > lparen.end_byte and ctx.on_same_line(lparen, first):
            yield self._report(ctx, lparen, lparen.end_byte, first.start_byte, "after `(`")
        if rparen.start_byte > last.end_byte and ctx.on_same_line(last, rparen):
            yield self._report(ctx, rparen, last.end_byte, rparen.start_byte, "before `)`")

    def _report(self, ctx, paren, start: int, end: int, where: str) -> Finding:
        return ctx.report(
            f"Space inside parentheses detected {where}.",
            node=paren,
            start_byte=start,
            end_byte=end,
            autofix=[remove_range(start, end)],
        )


RULES = [SpaceInsideParensRule()]
