"""Transform failure exceptions."""

from __future__ import annotations

from pathlib import Path

from refract.exceptions.base import RefractError


class TransformError(RefractError):
    """Raised when the user transform fails for a source file.

    The original exception is chained as ``__cause__``. ``line`` and
    ``column`` are copied from it when it carries position information.
    """

    def __init__(
        self,
        message: str,
        *,
        file: Path,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.file = file
        self.line = line
        self.column = column

    def __str__(self) -> str:
        location = str(self.file)
        if self.line is not None:
            location = f"{location}:{self.line}"
            if self.column is not None:
                location = f"{location}:{self.column}"
        return f"{location}: {self.args[0]}"

    @classmethod
    def from_exception(cls, exc: BaseException, *, file: Path) -> TransformError:
        """Build a TransformError carrying the source path and any line/column of *exc*."""
        line = _position(exc, "line", "lineno")
        column = _position(exc, "column", "offset")
        message = str(exc) or type(exc).__name__
        return cls(message, file=file, line=line, column=column)


def _position(exc: BaseException, *names: str) -> int | None:
    for name in names:
        value = getattr(exc, name, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None
