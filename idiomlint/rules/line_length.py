"""Rule: style.line_length

Limit lines to a maximum number of characters (``params.max``, default 120).
The length of a line is measured in characters up to the end of its last
token, so trailing whitespace does not count. Multibyte characters count
once.
"""

from collections import defaultdict
from typing import Dict, Iterator, List, Sequence, Tuple

from idiomlint.types import Finding, Node, RuleMeta

# (character column, byte offset, text) of one line's worth of a token
Piece = Tuple[int, int, str]


class LineLengthRule:
    """Report every line whose last token ends past the limit."""

    meta = RuleMeta(
        id="style.line_length",
        description="Limit lines to a maximum length",
        kinds=("program",),
        severity="warning",
        category="layout",
        autofix_safety="none",
        default_params={"max": 120},
    )

    def match(self, node, ctx) -> Iterator[Finding]:
        limit = int(ctx.params.get("max", 120))
        for row, pieces in sorted(self._pieces(ctx.tokens.tokens).items()):
            char_start, byte_start, text = max(pieces, key=lambda p: p[0] + len(p[2]))
            length = char_start + len(text)
            if length <= limit:
                continue
            finding = ctx.report(
                f"Line is too long. [{length}/{limit}]",
                node=node,
                start_byte=self._byte_at(pieces, limit),
                end_byte=byte_start + len(text.encode("utf-8")),
                length=length,
                max=limit,
            )
            yield finding._replace(start_line=row + 1, end_line=row + 1)

    def _pieces(self, tokens: Sequence[Node]) -> Dict[int, List[Piece]]:
        """Split tokens at newlines and place each piece by character column."""
        rows: Dict[int, List[Piece]] = defaultdict(list)
        # row -> bytes seen so far on that row beyond one per character
        wide: Dict[int, int] = defaultdict(int)
        for token in tokens:
            row, column = token.start_point
            offset = token.start_byte
            for i, text in enumerate(token.text.split("\n")):
                if i:
                    row, column = row + 1, 0
                rows[row].append((column - wide[row], offset, text))
                size = len(text.encode("utf-8"))
                wide[row] += size - len(text)
                offset += size + 1
        return rows

    def _byte_at(self, pieces: List[Piece], limit: int) -> int:
        """Byte offset of character column ``limit`` on a line."""
        for char_start, byte_start, text in sorted(pieces):
            if char_start + len(text) <= limit:
                continue
            if char_start >= limit:
                # the limit falls in the whitespace before this piece
                return byte_start - (char_start - limit)
            return byte_start + len(text[:limit - char_start].encode("utf-8"))
        raise ValueError(f"no character past column {limit}")


RULES = [LineLengthRule()]
