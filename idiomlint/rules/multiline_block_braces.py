"""Rule: style.multiline_block_braces

Prefer ``{...}`` over ``do...end`` for single-line blocks and ``do...end``
for multi-line blocks.

    names.each { |name|
      puts name
    }                          # bad

    names.each do |name|
      puts name
    end                        # good
"""

from typing import Iterator, List

from idiomlint.matchers import is_parenthesized, spans_multiple_lines
from idiomlint.types import Edit, Finding, Node, RuleMeta

# Nodes that start a new statement context for do...end binding
STATEMENT_BOUNDARIES = frozenset({
    "program", "body_statement", "block_body", "then", "else", "ensure", "begin", "do",
})


class MultilineBlockBracesRule:
    """Flag brace-delimited blocks that span several lines."""

    meta = RuleMeta(
        id="style.multiline_block_braces",
        description="Use do...end instead of braces for multi-line blocks",
        kinds=("block",),
        severity="warning",
    )

    def match(self, node, ctx) -> Iterator[Finding]:
        if not node.children or node.children[0].text != "{" or node.children[-1].text != "}":
            return
        if not spans_multiple_lines(node):
            return

        yield ctx.report(
            "Avoid using `{...}` for multi-line blocks; use `do...end`.",
            autofix=self._edits(node, ctx),
        )

    def _edits(self, node: Node, ctx) -> List[Edit]:
        if self._inside_command_argument(ctx):
            return []

        lbrace, rbrace = node.children[0], node.children[-1]
        before_lbrace = ctx.preceding_token(lbrace)
        before_rbrace = ctx.preceding_token(rbrace)
        glued_open = before_lbrace is not None and before_lbrace.end_byte == lbrace.start_byte
        glued_close = before_rbrace is not None and before_rbrace.end_byte == rbrace.start_byte
        return [
            Edit(lbrace.start_byte, lbrace.end_byte, " do" if glued_open else "do"),
            Edit(rbrace.start_byte, rbrace.end_byte, " end" if glued_close else "end"),
        ]

    def _inside_command_argument(self, ctx) -> bool:
        """Whether the block sits anywhere inside an unparenthesized argument list.

        `foo bar { }` and `puts 1 + list.map { }.sum` bind the braces to the
        innermost call but `do...end` to the outermost command.
        """
        for ancestor in reversed(ctx.ancestors):
            if ancestor.kind in STATEMENT_BOUNDARIES:
                return False
            if ancestor.kind in ("argument_list", "parenthesized_statements") and is_parenthesized(ancestor):
                return False
            if ancestor.kind == "argument_list":
                return True
        return False


RULES = [MultilineBlockBracesRule()]
