"""Exception classes for dotpress.

Parse errors are per-line and carry the offending line number. Source and
output failures are reported as SourceError, never as a parse error.
"""

from __future__ import annotations


class DotpressError(Exception):
    """Base exception for all dotpress errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(DotpressError):
    """Error while reading a directive line.

    Raised when a line starts with the directive prefix but is not a
    well-formed directive.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        source_file: str | None = None,
        line: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            source_file: Path to source file (optional)
            line: The raw offending line (optional)
        """
        self.message = message
        self.lineno = lineno
        self.source_file = source_file
        self.line = line

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
        if location:
            location = location.rstrip(":") + ": "

        super().__init__(f"{location}{message}")


class UnknownDirectiveError(ParseError):
    """Directive prefix followed by a name that is not a known directive."""

    def __init__(
        self,
        name: str,
        lineno: int | None = None,
        source_file: str | None = None,
        line: str | None = None,
    ) -> None:
        self.name = name
        shown = f".{name}" if name else "."
        super().__init__(f"unknown directive {shown!r}", lineno, source_file, line)


class MissingArgumentError(ParseError):
    """Directive that requires an argument was given none."""

    def __init__(
        self,
        directive: str,
        lineno: int | None = None,
        source_file: str | None = None,
        line: str | None = None,
    ) -> None:
        self.directive = directive
        super().__init__(
            f"directive '.{directive}' requires an argument", lineno, source_file, line
        )


class InvalidArgumentError(ParseError):
    """Directive argument has the wrong shape or value."""

    def __init__(
        self,
        directive: str,
        argument: str,
        reason: str,
        lineno: int | None = None,
        source_file: str | None = None,
        line: str | None = None,
    ) -> None:
        self.directive = directive
        self.argument = argument
        self.reason = reason
        super().__init__(
            f"invalid argument {argument!r} for '.{directive}': {reason}",
            lineno,
            source_file,
            line,
        )


class AssemblyError(DotpressError):
    """Document assembler used after completion.

    Sealed documents never change, so appending to a completed assembler is
    a programming error.
    """

    pass


class RenderError(DotpressError):
    """Error during rendering.

    Raised when a renderer receives a node it cannot render.
    """

    pass


class SourceError(DotpressError):
    """Input could not be read or output could not be written."""

    def __init__(self, path: str, message: str) -> None:
        """Initialize source error.

        Args:
            path: The file path involved
            message: Description of the failure
        """
        self.path = path
        super().__init__(f"{path}: {message}")
