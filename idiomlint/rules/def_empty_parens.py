"""Rule: style.def_empty_parens

Omit the parentheses in ``def`` when the method doesn't accept any
parameters.

    def some_method()   # bad
    def some_method     # good
"""

from typing import Iterator

from idiomlint.matchers import remove
from idiomlint.types import Finding, RuleMeta


class DefEmptyParensRule:
    """Flag ``def name()`` with an empty parameter list."""

    meta = RuleMeta(
        id="style.def_empty_parens",
        description="Omit parentheses in def when the method takes no parameters",
        kinds=("method", "singleton_method"),
        severity="info",
    )

    def match(self, node, ctx) -> Iterator[Finding]:
        params = node.child_by_field("parameters")
        if params is None or len(params.children) != 2:
            return
        if params.children[0].text != "(" or params.children[1].text != ")":
            return
        # `def foo() = 1` needs the parentheses
        following = ctx.following_token(params)
        if following is not None and following.text == "=":
            return

        yield ctx.report(
            "Omit the parentheses in defs when the method doesn't accept any arguments.",
            node=params,
            autofix=[remove(params)] if self._body_detached(params, following, ctx) else [],
        )

    def _body_detached(self, params, following, ctx) -> bool:
        # `def foo() bar end` would turn bar into a parameter
        if following is None or following.text == ";" or following.kind == "comment":
            return True
        return not ctx.on_same_line(params, following)


RULES = [DefEmptyParensRule()]
