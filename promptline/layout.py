"""Layout context: terminal width and prompt label geometry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .constants import PromptConstants


def default_labels(term=None) -> tuple[str, str, str]:
    """Return the first, continuation and wrap labels.

    With a blessed terminal the label names are drawn in bold.
    """
    bold = term.bold if term is not None else ""
    normal = term.normal if term is not None else ""
    return (
        f"{bold}{PromptConstants.PROMPT_NAME}{normal}{PromptConstants.PROMPT_MARKER}",
        f"{bold}{PromptConstants.PROMPT_ENDL_NAME}{normal}{PromptConstants.PROMPT_MARKER}",
        f"{bold}{PromptConstants.PROMPT_WRAP_NAME}{normal}{PromptConstants.PROMPT_WRAP_MARKER}",
    )


_PLAIN_PROMPT, _PLAIN_CONTINUATION, _PLAIN_WRAP = default_labels()


@dataclass(frozen=True)
class PromptStyle:
    """Prompt labels and their printable widths.

    Label texts may carry escape sequences, so widths are given
    explicitly.  The wrap label is drawn after a soft break and must be as
    wide as the continuation label.
    """
    prompt: str = _PLAIN_PROMPT
    continuation: str = _PLAIN_CONTINUATION
    wrap: str = _PLAIN_WRAP
    prompt_width: int = PromptConstants.PROMPT_WIDTH
    continuation_width: int = PromptConstants.PROMPT_WIDTH
    tab_width: int = PromptConstants.TAB_WIDTH

    @classmethod
    def measured(cls, term, prompt: Optional[str] = None,
                 continuation: Optional[str] = None,
                 wrap: Optional[str] = None,
                 tab_width: int = PromptConstants.TAB_WIDTH) -> "PromptStyle":
        """Build a style whose widths are measured by a blessed terminal.

        Args:
            term: blessed.Terminal used to style defaults and measure length
            prompt: First line label (default: bold "duckdb> ")
            continuation: Label after an explicit newline
            wrap: Label after a soft wrap
            tab_width: Spaces inserted by the tab key

        Returns:
            PromptStyle with measured widths
        """
        default_prompt, default_continuation, default_wrap = default_labels(term)
        prompt = default_prompt if prompt is None else prompt
        continuation = default_continuation if continuation is None else continuation
        wrap = default_wrap if wrap is None else wrap

        continuation_width = term.length(continuation)
        if term.length(wrap) != continuation_width:
            raise ValueError("wrap and continuation labels must have the same width")
        return cls(
            prompt=prompt,
            continuation=continuation,
            wrap=wrap,
            prompt_width=term.length(prompt),
            continuation_width=continuation_width,
            tab_width=tab_width,
        )


@dataclass(frozen=True)
class Layout:
    width: int = PromptConstants.DEFAULT_TERMINAL_WIDTH
    style: PromptStyle = field(default_factory=PromptStyle)

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"terminal width must be positive, got {self.width}")

    def label_width(self, line: int) -> int:
        return self.style.prompt_width if line == 0 else self.style.continuation_width

    def is_full(self, line: int, length: int) -> bool:
        """True if one more character on the line would reach the width."""
        return self.label_width(line) + length + 1 >= self.width

    def room(self, line: int, length: int) -> int:
        """Characters that can be appended before the line reaches its last column."""
        return max(0, self.width - 1 - self.label_width(line) - length)
