"""Rule: style.not_keyword

Use ``!`` instead of ``not``.

    x = (not something)   # bad
    x = !something        # good
"""

from typing import Iterator

from idiomlint.matchers import insert_after, is_simple_operand, operator
from idiomlint.types import Edit, Finding, RuleMeta


class NotKeywordRule:
    """Flag the ``not`` keyword."""

    meta = RuleMeta(
        id="style.not_keyword",
        description="Use ! instead of not",
        kinds=("unary",),
        severity="warning",
    )

    def match(self, node, ctx) -> Iterator[Finding]:
        op = operator(node)
        operand = node.child_by_field("operand")
        if op is None or op.text != "not" or operand is None:
            return

        if is_simple_operand(operand):
            edits = [Edit(op.start_byte, operand.start_byte, "!")]
        else:
            # `not a == b` must become `!(a == b)`
            edits = [Edit(op.start_byte, operand.start_byte, "!("), insert_after(operand, ")")]

        yield ctx.report("Use `!` instead of `not`.", autofix=edits)


RULES = [NotKeywordRule()]
