"""Rule: style.redundant_return

Avoid ``return`` where not required for flow of control: the value of the
last expression of a method is its return value.

    def some_method(some_arr)
      return some_arr.size     # bad
    end

    def some_method(some_arr)
      some_arr.size            # good
    end
"""

from typing import Iterator, Optional

from idiomlint.matchers import remove_range, statements
from idiomlint.types import Finding, Node, RuleMeta

# Body sections after which the last statement is no longer the method's value
GUARDED_SECTIONS = {"rescue", "ensure", "else"}


class RedundantReturnRule:
    """Flag ``return value`` as the final statement of a method."""

    meta = RuleMeta(
        id="style.redundant_return",
        description="Avoid return where not required for flow of control",
        kinds=("method", "singleton_method"),
        severity="info",
    )

    def match(self, node, ctx) -> Iterator[Finding]:
        body = self._body(node)
        if body is None:
            return
        body_statements = statements(body)
        if not body_statements or any(s.kind in GUARDED_SECTIONS for s in body_statements):
            return

        last = body_statements[-1]
        if last.kind != "return":
            return
        keyword = last.children[0]
        arguments = last.named_children[0] if last.named_children else None
        if arguments is None or len(statements(arguments)) != 1:
            return
        value = statements(arguments)[0]
        if value.kind in ("splat_argument", "hash_splat_argument"):
            return

        autofix = [remove_range(keyword.start_byte, arguments.start_byte)]
        # `return a: 1` has no braceless statement form
        if value.kind == "pair":
            autofix = []
        yield ctx.report("Redundant `return` detected.", node=last, autofix=autofix)

    def _body(self, node: Node) -> Optional[Node]:
        body = node.child_by_field("body")
        if body is not None:
            return body
        for child in node.children:
            if child.kind == "body_statement":
                return child
        return None


RULES = [RedundantReturnRule()]
