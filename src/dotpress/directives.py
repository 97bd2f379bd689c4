"""Directive parser: classifies one input line as a directive or text.

A directive line starts with the prefix character (``.``) and names one of a
fixed set of formatting commands, optionally followed by arguments::

    .bold
    .indent 4

Every other line, including the empty line, is literal text and is returned
verbatim.

Thread Safety:
    parse_line() is pure. Directive and TextLine are frozen.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType

from dotpress.errors import InvalidArgumentError, MissingArgumentError, UnknownDirectiveError
from dotpress.location import SourceLocation

DIRECTIVE_PREFIX = "."


class DirectiveKind(Enum):
    """The closed set of directives understood by the interpreter."""

    # Paragraph flushes
    PARAGRAPH = auto()  # .paragraph
    FILL = auto()  # .fill
    NOFILL = auto()  # .nofill
    INDENT = auto()  # .indent N

    # Ephemeral style
    REGULAR = auto()  # .regular
    BOLD = auto()  # .bold
    ITALIC = auto()  # .italics
    LARGE = auto()  # .large
    NORMAL = auto()  # .normal

    @property
    def takes_argument(self) -> bool:
        return self is DirectiveKind.INDENT


DIRECTIVE_NAMES: Mapping[str, DirectiveKind] = MappingProxyType(
    {
        "paragraph": DirectiveKind.PARAGRAPH,
        "fill": DirectiveKind.FILL,
        "nofill": DirectiveKind.NOFILL,
        "regular": DirectiveKind.REGULAR,
        "bold": DirectiveKind.BOLD,
        "italics": DirectiveKind.ITALIC,
        "large": DirectiveKind.LARGE,
        "normal": DirectiveKind.NORMAL,
        "indent": DirectiveKind.INDENT,
    }
)

# Spelling used by the command reference
_ALIASES: Mapping[str, DirectiveKind] = MappingProxyType({"italic": DirectiveKind.ITALIC})

_CANONICAL_NAMES: Mapping[DirectiveKind, str] = MappingProxyType(
    {kind: name for name, kind in DIRECTIVE_NAMES.items()}
)


@dataclass(frozen=True, slots=True)
class Directive:
    """A parsed directive line.

    Attributes:
        kind: Which directive
        argument: Indent amount for INDENT, None for every other kind
        location: Line the directive was read from

    """

    kind: DirectiveKind
    argument: int | None = None
    location: SourceLocation = SourceLocation.unknown()

    @property
    def name(self) -> str:
        """Canonical spelling, even when the line used an alias."""
        return _CANONICAL_NAMES[self.kind]


@dataclass(frozen=True, slots=True)
class TextLine:
    """A literal text line, kept exactly as read."""

    content: str
    location: SourceLocation = SourceLocation.unknown()


def is_directive_line(line: str) -> bool:
    """Whether a raw line is a directive line (starts with the prefix)."""
    return line.startswith(DIRECTIVE_PREFIX)


def parse_line(
    line: str,
    lineno: int = 0,
    source_file: str | None = None,
    *,
    accept_aliases: bool = True,
) -> Directive | TextLine:
    """Classify and parse one input line.

    Args:
        line: Raw line without its trailing newline
        lineno: 1-indexed line number used for locations and errors
        source_file: Source path used for locations and errors
        accept_aliases: Accept alternative spellings such as ``.italic``

    Returns:
        Directive for directive lines, TextLine for everything else

    Raises:
        UnknownDirectiveError: Prefixed name is not a directive
        MissingArgumentError: ``.indent`` without a value
        InvalidArgumentError: Non-integer or negative indent, or arguments
            given to a directive that takes none

    Example:
        >>> parse_line(".indent 4").argument
        4
        >>> parse_line("Hello").content
        'Hello'

    """
    location = SourceLocation(lineno=lineno, source_file=source_file)
    if not is_directive_line(line):
        return TextLine(content=line, location=location)

    rest = line[len(DIRECTIVE_PREFIX) :]
    tokens = rest.split()
    # The name must follow the prefix directly: ". bold" names nothing
    if not tokens or rest[0].isspace():
        raise UnknownDirectiveError("", lineno, source_file, line)
    name, args = tokens[0], tokens[1:]

    kind = DIRECTIVE_NAMES.get(name)
    if kind is None and accept_aliases:
        kind = _ALIASES.get(name)
    if kind is None:
        raise UnknownDirectiveError(name, lineno, source_file, line)

    if not kind.takes_argument:
        if args:
            raise InvalidArgumentError(
                name, " ".join(args), "takes no arguments", lineno, source_file, line
            )
        return Directive(kind=kind, location=location)

    if not args:
        raise MissingArgumentError(name, lineno, source_file, line)
    if len(args) > 1:
        raise InvalidArgumentError(
            name, " ".join(args), "expected a single integer", lineno, source_file, line
        )
    return Directive(
        kind=kind,
        argument=_parse_indent(name, args[0], lineno, source_file, line),
        location=location,
    )


def _parse_indent(
    name: str, raw: str, lineno: int, source_file: str | None, line: str
) -> int:
    """Parse a non-negative indent amount written in ASCII digits."""
    digits = raw.removeprefix("-")
    if not (digits.isascii() and digits.isdigit()):
        raise InvalidArgumentError(name, raw, "not an integer", lineno, source_file, line)
    if digits != raw:
        raise InvalidArgumentError(name, raw, "must not be negative", lineno, source_file, line)
    return int(digits)


__all__ = [
    "DIRECTIVE_NAMES",
    "DIRECTIVE_PREFIX",
    "Directive",
    "DirectiveKind",
    "TextLine",
    "is_directive_line",
    "parse_line",
]
