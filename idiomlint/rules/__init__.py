"""
idiomlint built-in rules.

Rules are discovered by ``Registry.discover_rules(["idiomlint.rules"])``:
every module in this package is imported and the rules in its ``RULES``
list are registered in order.

To add a new rule:
1. Create a module in this package (e.g. ``my_rule.py``)
2. Define a class with a ``meta`` RuleMeta and a ``match(node, ctx)`` method
3. Optionally define ``autocorrect(finding)`` returning the edits
4. Export it: ``RULES = [MyRule()]``

Example rule structure:

```python
from idiomlint.types import RuleMeta

class MyRule:
    meta = RuleMeta(
        id="style.my_rule",
        description="Detects my specific issue",
        kinds=("call",),
    )

    def match(self, node, ctx):
        if node.text == "bad":
            yield ctx.report("Found an issue")

RULES = [MyRule()]
```
"""
