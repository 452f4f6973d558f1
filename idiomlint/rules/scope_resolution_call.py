"""Rule: style.scope_resolution_call

Use ``::`` only to reference constants (classes, modules and constants
nested in them). Regular method invocation uses ``.``.

    SomeClass::some_method     # bad
    SomeClass.some_method      # good
    SomeModule::SomeClass::SOME_CONST   # good
"""

from typing import Iterator

from idiomlint.matchers import format_message, is_constant_name, replace, source_text
from idiomlint.types import Finding, RuleMeta


class ScopeResolutionCallRule:
    """Flag ``::`` used for plain method calls."""

    meta = RuleMeta(
        id="style.scope_resolution_call",
        description="Do not use :: for method calls; use . instead",
        kinds=("call",),
        severity="warning",
    )

    message = "Do not use `::` for method calls; use `{receiver}.{method}` instead."

    def match(self, node, ctx) -> Iterator[Finding]:
        operator = node.child_by_field("operator")
        method = node.child_by_field("method")
        receiver = node.child_by_field("receiver")
        if operator is None or operator.text != "::" or method is None or receiver is None:
            return
        # Foo::Bar() style calls to constant-named methods are left alone
        if method.kind != "identifier" or is_constant_name(method.text):
            return

        receiver_text = source_text(ctx.tokens_between(receiver.start_byte, receiver.end_byte))
        yield ctx.report(
            format_message(self.message, receiver=receiver_text or "receiver", method=method.text),
            autofix=[replace(operator, ".")],
        )


RULES = [ScopeResolutionCallRule()]
