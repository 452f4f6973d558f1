"""
Reusable building blocks for rule matchers.

Matchers only look at node kinds, tree shape and raw token text. There is no
semantic or type information available, so every predicate here is lexical.
"""

from typing import List, Optional, Sequence

from .types import Edit, Node

# Node kinds that bind tighter than any binary operator; safe to use as a
# receiver or operand without adding parentheses.
SIMPLE_OPERAND_KINDS = frozenset({
    "identifier", "constant", "instance_variable", "class_variable", "global_variable",
    "self", "nil", "true", "false", "integer", "float", "string", "symbol",
    "simple_symbol", "array", "hash", "parenthesized_statements", "scope_resolution",
    "element_reference",
})

ASSIGNMENT_KINDS = frozenset({"assignment", "operator_assignment"})

COMMENT_KIND = "comment"


# --- lookups ---------------------------------------------------------------

def leaf(node: Node, text: str) -> Optional[Node]:
    """First direct child that is a terminal with the given text."""
    for child in node.children:
        if child.is_leaf and child.text == text:
            return child
    return None


def statements(node: Node) -> List[Node]:
    """Named, non-comment children: the statements of a body-like node."""
    return [child for child in node.named_children if child.kind != COMMENT_KIND]


def operator(node: Node) -> Optional[Node]:
    """The operator token of a binary or unary node."""
    found = node.child_by_field("operator")
    if found is not None:
        return found
    for child in node.children:
        if not child.named:
            return child
    return None


# --- shape predicates ------------------------------------------------------

def is_constant_name(text: Optional[str]) -> bool:
    """Constants, modules and classes start with an uppercase letter."""
    return bool(text) and text[0].isupper()


def spans_multiple_lines(node: Node) -> bool:
    return node.start_point[0] != node.end_point[0]


def is_parenthesized(node: Node) -> bool:
    if len(node.children) < 2:
        return False
    return node.children[0].text == "(" and node.children[-1].text == ")"


def parenthesized_expression(node: Node) -> Optional[Node]:
    """The single expression wrapped by parentheses, or None.

    Returns None unless the node is a parenthesized group holding exactly one
    statement.
    """
    if node.kind != "parenthesized_statements" or not is_parenthesized(node):
        return None
    inner = statements(node)
    if len(inner) != 1:
        return None
    return inner[0]


def is_simple_operand(node: Node) -> bool:
    """Whether the node can stand as an operand without extra parentheses."""
    if node.kind in SIMPLE_OPERAND_KINDS:
        return True
    if node.kind == "call":
        return not has_unparenthesized_args(node)
    return False


def has_unparenthesized_args(call: Node) -> bool:
    """A call like ``foo bar`` whose arguments are not wrapped in parentheses."""
    arguments = call.child_by_field("arguments")
    return arguments is not None and not is_parenthesized(arguments)


# --- edit builders ---------------------------------------------------------

def replace(node: Node, text: str) -> Edit:
    return Edit(node.start_byte, node.end_byte, text)


def remove(node: Node) -> Edit:
    return Edit(node.start_byte, node.end_byte, "")


def remove_range(start_byte: int, end_byte: int) -> Edit:
    return Edit(start_byte, end_byte, "")


def insert_after(node: Node, text: str) -> Edit:
    return Edit(node.end_byte, node.end_byte, text)


def unwrap_parentheses(group: Node, preceding: Optional[Node] = None) -> List[Edit]:
    """Edits removing a group's parentheses together with any inner padding.

    When the opening parenthesis is glued to the preceding token (``if(x)``),
    it is replaced by a single space so the tokens do not merge.
    """
    inner: Sequence[Node] = group.children[1:-1]
    lparen, rparen = group.children[0], group.children[-1]
    glued = preceding is not None and preceding.end_byte == lparen.start_byte
    if not inner:
        return [Edit(lparen.start_byte, rparen.end_byte, " " if glued else "")]

    return [
        Edit(lparen.start_byte, inner[0].start_byte, " " if glued else ""),
        Edit(inner[-1].end_byte, rparen.end_byte, ""),
    ]


# --- messages --------------------------------------------------------------

def format_message(template: str, **values) -> str:
    """Fill a rule's message template, e.g. "Use `{good}` instead of `{bad}`."."""
    return template.format(**values)


def source_text(tokens: Sequence[Node]) -> str:
    """Text spanned by source-ordered tokens, with one space where they are not adjacent."""
    parts: List[str] = []
    end: Optional[int] = None
    for token in tokens:
        if end is not None and token.start_byte > end:
            parts.append(" ")
        parts.append(token.text or "")
        end = token.end_byte
    return "".join(parts)
