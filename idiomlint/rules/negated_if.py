"""Rule: style.negated_if

Favor ``unless`` over ``if`` for negative conditions (when there is no
``else`` branch).

    do_something if !some_condition      # bad
    do_something unless some_condition   # good
"""

from typing import Iterator

from idiomlint.matchers import leaf, operator, remove_range, replace
from idiomlint.types import Finding, RuleMeta


class NegatedIfRule:
    """Flag ``if !cond`` without an else branch."""

    meta = RuleMeta(
        id="style.negated_if",
        description="Favor unless over if for negative conditions",
        kinds=("if", "if_modifier"),
        severity="info",
    )

    def match(self, node, ctx) -> Iterator[Finding]:
        if node.child_by_field("alternative") is not None:
            return
        condition = node.child_by_field("condition")
        if condition is None or condition.kind != "unary":
            return
        bang = operator(condition)
        operand = condition.child_by_field("operand")
        keyword = leaf(node, "if")
        if bang is None or bang.text != "!" or operand is None or keyword is None:
            return

        yield ctx.report(
            "Favor `unless` over `if` for negative conditions.",
            autofix=[replace(keyword, "unless"), remove_range(bang.start_byte, operand.start_byte)],
        )


RULES = [NegatedIfRule()]
