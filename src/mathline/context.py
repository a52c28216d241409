from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from mathline.errors import ErrorKind, EvaluationError

WHITESPACE = " \t\n\r"


@dataclass
class EvaluationContext:
    """Mutable state threaded through a single evaluation.

    One context is created per call to `Evaluator.evaluate` and is never
    shared. `cursor` only moves forward and never past `end`, which is the
    length of the text or the position of the first embedded NUL.
    """

    text: str
    max_nesting: int = 100
    cursor: int = 0
    depth: int = 0
    nesting: int = 0
    end: int = field(init=False)

    def __post_init__(self) -> None:
        nul = self.text.find("\0")
        self.end = len(self.text) if nul == -1 else nul

    def at_end(self) -> bool:
        return self.cursor >= self.end

    def peek(self) -> str:
        """Return the character under the cursor, or "" at end of input."""
        if self.at_end():
            return ""
        return self.text[self.cursor]

    def advance(self, count: int = 1) -> None:
        self.cursor = min(self.cursor + count, self.end)

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.text[self.cursor] in WHITESPACE:
            self.cursor += 1

    def error(self, kind: ErrorKind, message: str) -> EvaluationError:
        """Build an error located at the current cursor (caller raises it)."""
        return EvaluationError(kind, message, self.cursor, self.text)

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Track one level of recursive descent, failing past `max_nesting`."""
        if self.nesting >= self.max_nesting:
            raise self.error(ErrorKind.NESTING_TOO_DEEP, "expression is nested too deeply")
        self.nesting += 1
        try:
            yield
        finally:
            self.nesting -= 1
