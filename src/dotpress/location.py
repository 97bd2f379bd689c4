"""Source location tracking for error messages and debugging.

Input is strictly line-oriented, so a location is a line number plus the
optional source file path.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Line position of a directive, run, or paragraph in the input.

    Line numbers are 1-indexed. Line 0 marks a synthetic location, such as
    the paragraph that is open before the first line is read.

    Attributes:
        lineno: Line number (1-indexed, 0 for synthetic nodes)
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(lineno=3, source_file="input.txt")
        >>> str(loc)
        'input.txt:3'

    """

    lineno: int
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "input.txt:10" or "10"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}"
        return str(self.lineno)

    @classmethod
    def unknown(cls, source_file: str | None = None) -> SourceLocation:
        """Create a placeholder location for synthetic nodes."""
        return cls(lineno=0, source_file=source_file)
