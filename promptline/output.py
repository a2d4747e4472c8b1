"""Pending output buffer."""

from __future__ import annotations


class PendingOutput:
    """Escape codes and text not yet sent to the terminal."""

    def __init__(self) -> None:
        self._parts: list[str] = []

    def write(self, text: str) -> None:
        if text:
            self._parts.append(text)

    def getvalue(self) -> str:
        return "".join(self._parts)

    def clear(self) -> None:
        self._parts.clear()

    def drain(self, encoding: str = "utf-8") -> bytes:
        """Return the buffered output as bytes and clear the buffer."""
        data = self.getvalue().encode(encoding)
        self._parts.clear()
        return data

    def __len__(self) -> int:
        return sum(len(p) for p in self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
