"""
Ruby language adapter for tree-sitter.

Converts tree-sitter syntax trees into the engine's immutable Node trees.
Grammar field names are preserved on the converted nodes and anonymous
tokens (keywords, punctuation, operators) are kept as leaves with their text.
"""

import logging
from typing import List, Optional, Tuple

import tree_sitter

from .runner import Unit
from .types import Node, SyntaxTree

logger = logging.getLogger(__name__)


class RubyAdapter:
    """Tree-sitter adapter for Ruby."""

    language_id = "ruby"
    file_extensions: Tuple[str, ...] = (".rb", ".rake", ".gemspec", ".ru")

    def __init__(self, allow_errors: bool = False):
        """Initialize the adapter; the parser is created on first use.

        Args:
            allow_errors: Convert trees containing syntax errors instead of
                reporting the unit as unparseable
        """
        self._parser = None
        self._allow_errors = allow_errors

    def _get_parser(self):
        """Get or create the tree-sitter parser."""
        if self._parser is None:
            try:
                from tree_sitter_ruby import language
            except ImportError as e:
                logger.warning("tree-sitter-ruby not available: %s", e)
                return None

            parser = tree_sitter.Parser()
            parser.language = tree_sitter.Language(language())
            self._parser = parser

        return self._parser

    @property
    def available(self) -> bool:
        return self._get_parser() is not None

    def parse(self, text) -> Optional[SyntaxTree]:
        """Parse text and return a SyntaxTree, or None if it cannot be parsed."""
        parser = self._get_parser()
        if parser is None:
            return None

        # Handle both string and bytes input
        source = text.encode('utf-8') if isinstance(text, str) else text
        ts_tree = parser.parse(source)
        if ts_tree.root_node.has_error and not self._allow_errors:
            logger.info("Source has syntax errors; not converting the tree")
            return None
        return convert(ts_tree, source)

    def load_unit(self, path: str) -> Unit:
        """Read and parse a file into a Unit."""
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
        return Unit(file=path, tree=self.parse(text), source=text)


def _make_node(ts_node, field: Optional[str], children: List[Node], source: bytes) -> Node:
    text = None
    if not children:
        text = source[ts_node.start_byte:ts_node.end_byte].decode('utf-8', errors='replace')
    return Node(
        kind=ts_node.type,
        start_byte=ts_node.start_byte,
        end_byte=ts_node.end_byte,
        start_point=(ts_node.start_point[0], ts_node.start_point[1]),
        end_point=(ts_node.end_point[0], ts_node.end_point[1]),
        children=tuple(children),
        text=text,
        field=field,
        named=ts_node.is_named,
    )


def convert(ts_tree, source: bytes) -> SyntaxTree:
    """
    Convert a tree-sitter tree into a SyntaxTree.

    The conversion walks the tree with a cursor and builds nodes bottom-up
    with an explicit stack, so deeply nested sources do not hit the
    recursion limit.

    Args:
        ts_tree: tree-sitter Tree
        source: The UTF-8 bytes the tree was parsed from

    Returns:
        SyntaxTree with leaves collected in source order
    """
    tokens: List[Node] = []
    cursor = ts_tree.walk()
    # Frames: [tree-sitter node, field name, converted children]
    stack = [[cursor.node, None, []]]

    while True:
        if cursor.goto_first_child():
            stack.append([cursor.node, cursor.field_name, []])
            continue

        while True:
            ts_node, field, children = stack.pop()
            built = _make_node(ts_node, field, children, source)
            if built.is_leaf:
                tokens.append(built)
            if not stack:
                return SyntaxTree(root=built, tokens=tuple(tokens))
            stack[-1][2].append(built)
            if cursor.goto_next_sibling():
                stack.append([cursor.node, cursor.field_name, []])
                break
            cursor.goto_parent()


default_ruby_adapter = RubyAdapter()
