"""Text model for the prompt buffer."""

from __future__ import annotations

from bisect import bisect_left
from enum import Enum
from typing import Iterator, Optional


class BreakKind(Enum):
    """Kinds of line break stored in a document."""
    HARD = "hard"  # Entered by the user
    SOFT = "soft"  # Inserted by reflow to respect the terminal width


class Document:
    """Editable character sequence with a line-break side table.

    Every break occupies one character offset (stored as ``"\\n"``) and is
    recorded in a sorted list of break offsets with a parallel list of
    kinds.  Line lookups bisect that list.
    """

    def __init__(self) -> None:
        self._chars: list[str] = []
        self._breaks: list[int] = []
        self._kinds: list[BreakKind] = []

    @classmethod
    def from_text(cls, text: str) -> "Document":
        """Build a document where every ``"\\n"`` is a hard break."""
        doc = cls()
        for ch in text:
            if ch == "\n":
                doc.insert_break(len(doc), BreakKind.HARD)
            else:
                doc.insert_char(len(doc), ch)
        return doc

    def __len__(self) -> int:
        return len(self._chars)

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return (
            self._chars == other._chars
            and self._breaks == other._breaks
            and self._kinds == other._kinds
        )

    def __repr__(self) -> str:
        return f"Document({self.text(soft_break='|')!r})"

    def char_count(self) -> int:
        return len(self._chars)

    def line_count(self) -> int:
        return len(self._breaks) + 1

    def items(self) -> Iterator[tuple[str, Optional[BreakKind]]]:
        """Yield ``(char, kind)`` pairs; ``kind`` is None for plain characters."""
        bi = 0
        for offset, ch in enumerate(self._chars):
            if bi < len(self._breaks) and self._breaks[bi] == offset:
                yield ch, self._kinds[bi]
                bi += 1
            else:
                yield ch, None

    def _check_offset(self, offset: int, allow_end: bool = True) -> None:
        limit = len(self._chars) if allow_end else len(self._chars) - 1
        if not 0 <= offset <= limit:
            raise IndexError(f"offset {offset} out of range for document of length {len(self._chars)}")

    def char_at(self, offset: int) -> str:
        self._check_offset(offset, allow_end=False)
        return self._chars[offset]

    def break_at(self, offset: int) -> Optional[BreakKind]:
        """Return the break kind at ``offset``, or None if it holds a plain character."""
        self._check_offset(offset, allow_end=False)
        i = bisect_left(self._breaks, offset)
        if i < len(self._breaks) and self._breaks[i] == offset:
            return self._kinds[i]
        return None

    def _shift_breaks(self, start: int, delta: int) -> None:
        self._breaks[start:] = [b + delta for b in self._breaks[start:]]

    def insert_char(self, offset: int, ch: str) -> None:
        """Insert a single character.  A newline becomes a hard break."""
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        if ch == "\n":
            self.insert_break(offset, BreakKind.HARD)
            return
        self._check_offset(offset)
        i = bisect_left(self._breaks, offset)
        self._shift_breaks(i, 1)
        self._chars.insert(offset, ch)

    def insert_break(self, offset: int, kind: BreakKind) -> None:
        self._check_offset(offset)
        i = bisect_left(self._breaks, offset)
        self._shift_breaks(i, 1)
        self._breaks.insert(i, offset)
        self._kinds.insert(i, kind)
        self._chars.insert(offset, "\n")

    def remove_range(self, begin: int, end: int) -> None:
        """Remove characters in ``[begin, end)``, breaks included."""
        if not 0 <= begin <= end <= len(self._chars):
            raise IndexError(f"invalid range [{begin}, {end}) for document of length {len(self._chars)}")
        if begin == end:
            return
        del self._chars[begin:end]
        i = bisect_left(self._breaks, begin)
        j = bisect_left(self._breaks, end)
        del self._breaks[i:j]
        del self._kinds[i:j]
        self._shift_breaks(i, begin - end)

    def line_of_offset(self, offset: int) -> int:
        """Line index containing ``offset``.

        A break belongs to the line it terminates; the offset just past a
        break is the start of the next line.
        """
        self._check_offset(offset)
        return bisect_left(self._breaks, offset)

    def offset_of_line_start(self, line: int) -> int:
        if not 0 <= line < self.line_count():
            raise IndexError(f"line {line} out of range")
        return 0 if line == 0 else self._breaks[line - 1] + 1

    def line_length(self, line: int) -> int:
        """Number of characters on ``line``, excluding its terminating break."""
        start = self.offset_of_line_start(line)
        end = self._breaks[line] if line < len(self._breaks) else len(self._chars)
        return end - start

    def soft_breaks_before(self, offset: int) -> int:
        self._check_offset(offset)
        i = bisect_left(self._breaks, offset)
        return sum(1 for kind in self._kinds[:i] if kind is BreakKind.SOFT)

    def offset_of_content(self, index: int) -> int:
        """Offset preceded by ``index`` characters that are not soft breaks.

        When the position sits on a soft break the offset after it is
        returned, i.e. the start of the wrapped line.
        """
        offset = index
        for b, kind in zip(self._breaks, self._kinds):
            if b > offset:
                break
            if kind is BreakKind.SOFT:
                offset += 1
        self._check_offset(offset)
        return offset

    def text(self, soft_break: str = "") -> str:
        """Collapse to a string; hard breaks become ``"\\n"``."""
        if not self._breaks:
            return "".join(self._chars)
        out = []
        for ch, kind in self.items():
            out.append(soft_break if kind is BreakKind.SOFT else ch)
        return "".join(out)
