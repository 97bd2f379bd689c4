"""Command interpreter: the paragraph-assembly state machine.

The interpreter state is an explicit, immutable record threaded through a
pure step function::

    state = initial_state()
    for lineno, line in enumerate(lines, start=1):
        step = process(state, line, lineno)
        state = step.state
        ...
    last = finish(state)

Transitions:

    ==========  =====================================  ======
    Directive   Effect                                 Flush
    ==========  =====================================  ======
    .bold       style.bold = True                      no
    .italics    style.italic = True                    no
    .large      style.large = True                     no
    .regular    style cleared                          no
    .normal     style.large = False                    no
    .paragraph  layout = (indent 0, no fill)           yes
    .fill       layout = (fill padding, fill)          yes
    .nofill     layout.fill_mode = False               yes
    .indent N   layout.indent_units = N                yes
    ==========  =====================================  ======

A flush seals the open paragraph (even an empty one) and opens a new one
with the layout produced by the directive. A text line becomes one run with
the current style, after which the style resets.

Interpreter drives the step function over a whole input, hands flushed
paragraphs to a DocumentAssembler, and applies the configured strictness to
parse errors.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import assert_never

from dotpress.assembler import DocumentAssembler
from dotpress.builder import ParagraphBuilder
from dotpress.config import FormatConfig, get_format_config
from dotpress.directives import DIRECTIVE_PREFIX, Directive, DirectiveKind, TextLine, parse_line
from dotpress.errors import ParseError
from dotpress.location import SourceLocation
from dotpress.nodes import Diagnostic, Document, Paragraph, TextRun
from dotpress.state import DEFAULT_LAYOUT, PLAIN_STYLE, EphemeralStyle, ParagraphLayout
from dotpress.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class InterpreterState:
    """Everything the interpreter knows between two lines."""

    style: EphemeralStyle = PLAIN_STYLE
    layout: ParagraphLayout = DEFAULT_LAYOUT
    builder: ParagraphBuilder = ParagraphBuilder()


@dataclass(frozen=True, slots=True)
class Step:
    """Result of processing one line.

    Attributes:
        state: State after the line (the input state when ``error`` is set)
        emitted: Paragraph sealed by this line, if it triggered a flush
        error: Parse error for a malformed directive line

    """

    state: InterpreterState
    emitted: Paragraph | None = None
    error: ParseError | None = None


def initial_state(source_file: str | None = None) -> InterpreterState:
    """State at the start of input: plain style, default layout, empty paragraph."""
    return InterpreterState(
        builder=ParagraphBuilder(location=SourceLocation.unknown(source_file)),
    )


def process(
    state: InterpreterState,
    line: str,
    lineno: int = 0,
    *,
    source_file: str | None = None,
    config: FormatConfig | None = None,
) -> Step:
    """Apply one input line to ``state``.

    Never raises for malformed directives; the error is returned on the
    Step and the state is left unchanged.
    """
    config = config or get_format_config()
    try:
        parsed = parse_line(
            line, lineno, source_file, accept_aliases=config.accept_italic_alias
        )
    except ParseError as e:
        return Step(state=state, error=e)

    match parsed:
        case TextLine():
            return Step(state=_append_text(state, parsed))
        case Directive():
            return apply_directive(state, parsed, config)
        case _:
            assert_never(parsed)


def apply_directive(
    state: InterpreterState, directive: Directive, config: FormatConfig | None = None
) -> Step:
    """Transition for one parsed directive."""
    config = config or get_format_config()
    match directive.kind:
        case DirectiveKind.BOLD:
            return Step(state=_with_style(state, state.style.with_bold()))
        case DirectiveKind.ITALIC:
            return Step(state=_with_style(state, state.style.with_italic()))
        case DirectiveKind.LARGE:
            return Step(state=_with_style(state, state.style.with_large()))
        case DirectiveKind.REGULAR:
            return Step(state=_with_style(state, PLAIN_STYLE))
        case DirectiveKind.NORMAL:
            return Step(state=_with_style(state, state.style.normal_size()))
        case DirectiveKind.PARAGRAPH:
            return _flush(state, DEFAULT_LAYOUT, directive)
        case DirectiveKind.FILL:
            return _flush(state, ParagraphLayout.filled(config.fill_padding_units), directive)
        case DirectiveKind.NOFILL:
            return _flush(state, state.layout.without_fill(), directive)
        case DirectiveKind.INDENT:
            if directive.argument is None:
                msg = "INDENT directive without an argument"
                raise ValueError(msg)
            return _flush(state, state.layout.with_indent(directive.argument), directive)
        case _:
            assert_never(directive.kind)


def finish(state: InterpreterState) -> Paragraph:
    """Terminal flush: seal the open paragraph unconditionally."""
    return state.builder.flush()


def _with_style(state: InterpreterState, style: EphemeralStyle) -> InterpreterState:
    return InterpreterState(style=style, layout=state.layout, builder=state.builder)


def _append_text(state: InterpreterState, line: TextLine) -> InterpreterState:
    # Style is consumed here, even by an empty line
    run = TextRun.styled(line.content, state.style, line.location)
    return InterpreterState(
        style=PLAIN_STYLE,
        layout=state.layout,
        builder=state.builder.append(run),
    )


def _flush(state: InterpreterState, layout: ParagraphLayout, directive: Directive) -> Step:
    sealed = state.builder.flush()
    logger.debug(
        "%s: %s%s sealed paragraph with %d run(s)",
        directive.location,
        DIRECTIVE_PREFIX,
        directive.name,
        len(sealed.runs),
    )
    return Step(
        state=InterpreterState(
            style=state.style,
            layout=layout,
            builder=state.builder.reopen(layout, directive.location),
        ),
        emitted=sealed,
    )


class Interpreter:
    """Runs the state machine over a complete input.

    Usage:
        >>> doc = Interpreter().run([".bold", "Hello", ".paragraph", "World"])
        >>> [len(p.runs) for p in doc.children]
        [1, 1]

    Thread Safety:
        Interpreter instances are single-use per run. Configuration is read
        from ContextVar (thread-local) when run() starts.
    """

    __slots__ = ("_source_file", "_config")

    def __init__(
        self, source_file: str | None = None, *, config: FormatConfig | None = None
    ) -> None:
        self._source_file = source_file
        self._config = config

    def run(self, lines: Iterable[str]) -> Document:
        """Interpret ``lines`` into a Document.

        Lines may carry a trailing newline; it is stripped before parsing.

        Raises:
            ParseError: First malformed directive line, in strict mode
        """
        config = self._config or get_format_config()
        assembler = DocumentAssembler(self._source_file)
        state = initial_state(self._source_file)

        lineno = 0
        for lineno, raw in enumerate(lines, start=1):
            step = process(
                state,
                raw.rstrip("\r\n"),
                lineno,
                source_file=self._source_file,
                config=config,
            )
            if step.error is not None:
                self._handle_error(step.error, config, assembler)
                continue
            state = step.state
            if step.emitted is not None:
                assembler.append(step.emitted)

        assembler.append(finish(state))
        doc = assembler.complete()
        logger.info(
            "Interpreted %d line(s) into %d paragraph(s)%s",
            lineno,
            len(doc.children),
            f", {len(doc.diagnostics)} line(s) skipped" if doc.diagnostics else "",
        )
        return doc

    def _handle_error(
        self, error: ParseError, config: FormatConfig, assembler: DocumentAssembler
    ) -> None:
        if config.strict:
            raise error
        logger.warning("Skipping line: %s", error)
        assembler.record(
            Diagnostic(
                kind=type(error).__name__,
                message=str(error),
                lineno=error.lineno,
                source_file=error.source_file,
            )
        )


__all__ = [
    "Interpreter",
    "InterpreterState",
    "Step",
    "apply_directive",
    "finish",
    "initial_state",
    "process",
]
