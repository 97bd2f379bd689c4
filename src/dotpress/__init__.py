"""
dotpress: dot-command text formatter

Turns plain text interleaved with one-line formatting directives into a
document model of paragraphs and styled text runs, ready for a renderer.

Quick Start:
    >>> from dotpress import parse
    >>> doc = parse(".bold\\nHello\\n.paragraph\\nWorld")
    >>> [run.content for run in doc.runs]
    ['Hello', 'World']
    >>> doc.children[0].runs[0].bold
    True

    >>> # Lenient mode: skip malformed directives and record them
    >>> from dotpress import Formatter
    >>> fmt = Formatter(strict=False)
    >>> fmt.parse(".shout\\nHi").diagnostics[0].kind
    'UnknownDirectiveError'

Directives:
    .paragraph   start a new paragraph
    .fill        justified paragraph with a fixed left padding
    .nofill      back to unjustified paragraphs
    .indent N    new paragraph indented N units
    .bold        next line bold
    .italics     next line italic
    .large       next line in the large font size
    .normal      cancel .large for the next line
    .regular     cancel all pending styles
"""

from collections.abc import Iterable

from dotpress.assembler import DocumentAssembler
from dotpress.builder import ParagraphBuilder
from dotpress.config import (
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from dotpress.directives import (
    DIRECTIVE_NAMES,
    DIRECTIVE_PREFIX,
    Directive,
    DirectiveKind,
    TextLine,
    parse_line,
)
from dotpress.errors import (
    AssemblyError,
    DotpressError,
    InvalidArgumentError,
    MissingArgumentError,
    ParseError,
    RenderError,
    SourceError,
    UnknownDirectiveError,
)
from dotpress.interpreter import (
    Interpreter,
    InterpreterState,
    Step,
    finish,
    initial_state,
    process,
)
from dotpress.io import split_lines
from dotpress.location import SourceLocation
from dotpress.nodes import Diagnostic, Document, Paragraph, TextRun
from dotpress.renderers.html import HtmlRenderer
from dotpress.renderers.protocol import DocumentRenderer
from dotpress.serialization import JsonRenderer, from_dict, from_json, to_dict, to_json
from dotpress.state import EphemeralStyle, ParagraphLayout

__version__ = "0.1.0"


def parse_lines(lines: Iterable[str], *, source_file: str | None = None) -> Document:
    """Interpret a sequence of lines into a Document.

    Uses the configuration active in the current context.

    Args:
        lines: Input lines (trailing newlines are ignored)
        source_file: Optional source path for locations and error messages

    Raises:
        ParseError: Malformed directive line, in strict mode

    """
    return Interpreter(source_file).run(lines)


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Interpret source text into a Document.

    Lines end at line feeds only (an optional CR before each is dropped).
    The empty string is zero lines and yields one empty paragraph.

    Example:
        >>> len(parse("").children)
        1
    """
    return parse_lines(split_lines(source), source_file=source_file)


def render(doc: Document, renderer: DocumentRenderer | None = None) -> str:
    """Render a Document, to standalone HTML by default."""
    return (renderer or HtmlRenderer()).render(doc)


class Formatter:
    """High-level formatter with bound configuration.

    Example:
        >>> fmt = Formatter(fill_padding_units=5)
        >>> fmt.parse(".fill\\nText").children[1].indent_units
        5

    Thread Safety:
        Config is immutable; each call sets it on the current context and
        restores the previous config afterwards.
    """

    __slots__ = ("_config", "_renderer")

    def __init__(
        self,
        *,
        strict: bool = True,
        fill_padding_units: int | None = None,
        accept_italic_alias: bool = True,
        renderer: DocumentRenderer | None = None,
    ) -> None:
        options: dict[str, object] = {
            "strict": strict,
            "accept_italic_alias": accept_italic_alias,
        }
        if fill_padding_units is not None:
            options["fill_padding_units"] = fill_padding_units
        self._config = FormatConfig.from_dict(options)
        self._renderer = renderer or HtmlRenderer()

    @property
    def config(self) -> FormatConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render source text in one step."""
        return self.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        with format_config_context(self._config):
            return parse(source, source_file=source_file)

    def parse_lines(self, lines: Iterable[str], *, source_file: str | None = None) -> Document:
        with format_config_context(self._config):
            return parse_lines(lines, source_file=source_file)

    def render(self, doc: Document) -> str:
        return self._renderer.render(doc)


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse",
    "parse_lines",
    "render",
    "Formatter",
    # Model
    "Document",
    "Paragraph",
    "TextRun",
    "Diagnostic",
    "SourceLocation",
    "EphemeralStyle",
    "ParagraphLayout",
    # Directives
    "DIRECTIVE_NAMES",
    "DIRECTIVE_PREFIX",
    "Directive",
    "DirectiveKind",
    "TextLine",
    "parse_line",
    # Interpreter
    "Interpreter",
    "InterpreterState",
    "Step",
    "initial_state",
    "process",
    "finish",
    "ParagraphBuilder",
    "DocumentAssembler",
    # Renderers + serialization
    "DocumentRenderer",
    "HtmlRenderer",
    "JsonRenderer",
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration
    "FormatConfig",
    "get_format_config",
    "set_format_config",
    "reset_format_config",
    "format_config_context",
    # Errors
    "DotpressError",
    "ParseError",
    "UnknownDirectiveError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "AssemblyError",
    "RenderError",
    "SourceError",
]
