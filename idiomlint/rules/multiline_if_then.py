"""Rule: style.multiline_if_then

Never use ``then`` for multi-line ``if``/``unless``.

    if some_condition then     # bad
      # body omitted
    end

    if some_condition          # good
      # body omitted
    end
"""

from typing import Iterator, Optional

from idiomlint.matchers import format_message, leaf, remove_range
from idiomlint.types import Finding, Node, RuleMeta


class MultilineIfThenRule:
    """Flag ``then`` at the end of a multi-line conditional's first line."""

    meta = RuleMeta(
        id="style.multiline_if_then",
        description="Do not use then for multi-line if/unless",
        kinds=("if", "unless", "elsif"),
        severity="warning",
    )

    message = "Do not use `then` for multi-line `{keyword}`."

    def match(self, node, ctx) -> Iterator[Finding]:
        then = self._then_keyword(node)
        if then is None:
            return
        following = ctx.following_token(then)
        if following is not None and following.kind != "comment" and ctx.on_same_line(then, following):
            return

        before = ctx.preceding_token(then)
        start = before.end_byte if before is not None else then.start_byte
        yield ctx.report(
            format_message(self.message, keyword=node.kind),
            node=then,
            autofix=[remove_range(start, then.end_byte)],
        )

    def _then_keyword(self, node: Node) -> Optional[Node]:
        keyword = leaf(node, "then")
        if keyword is not None:
            return keyword
        consequence = node.child_by_field("consequence")
        if consequence is not None and consequence.kind == "then":
            return leaf(consequence, "then")
        return None


RULES = [MultilineIfThenRule()]
