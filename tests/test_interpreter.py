"""Tests for the command interpreter state machine."""

import pytest

from dotpress.config import FormatConfig
from dotpress.directives import Directive, DirectiveKind
from dotpress.errors import InvalidArgumentError, UnknownDirectiveError
from dotpress.interpreter import (
    Interpreter,
    InterpreterState,
    apply_directive,
    finish,
    initial_state,
    process,
)
from dotpress.nodes import Paragraph, TextRun
from dotpress.state import PLAIN_STYLE, EphemeralStyle, ParagraphLayout


def _feed(lines: list[str], state: InterpreterState | None = None) -> tuple[InterpreterState, list[Paragraph]]:
    """Run lines through process(), collecting emitted paragraphs."""
    state = state or initial_state()
    emitted: list[Paragraph] = []
    for lineno, line in enumerate(lines, start=1):
        step = process(state, line, lineno)
        assert step.error is None, step.error
        state = step.state
        if step.emitted is not None:
            emitted.append(step.emitted)
    return state, emitted


class TestInitialState:
    def test_plain_style_default_layout_empty_paragraph(self) -> None:
        state = initial_state()
        assert state.style == PLAIN_STYLE
        assert state.layout == ParagraphLayout(indent_units=0, fill_mode=False)
        assert state.builder.is_empty

    def test_finish_on_initial_state_yields_empty_paragraph(self) -> None:
        para = finish(initial_state())
        assert para.runs == ()
        assert para.indent_units == 0
        assert para.fill_mode is False


class TestStyleDirectives:
    """Style directives change the ephemeral style and never flush."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            (".bold", EphemeralStyle(bold=True)),
            (".italics", EphemeralStyle(italic=True)),
            (".large", EphemeralStyle(large=True)),
        ],
    )
    def test_single_flag(self, line: str, expected: EphemeralStyle) -> None:
        step = process(initial_state(), line)
        assert step.emitted is None
        assert step.state.style == expected

    def test_flags_combine(self) -> None:
        state, emitted = _feed([".bold", ".italics", ".large"])
        assert emitted == []
        assert state.style == EphemeralStyle(bold=True, italic=True, large=True)

    def test_regular_clears_everything(self) -> None:
        state, _ = _feed([".bold", ".italics", ".large", ".regular"])
        assert state.style == PLAIN_STYLE

    def test_normal_clears_size_only(self) -> None:
        state, _ = _feed([".bold", ".large", ".normal"])
        assert state.style == EphemeralStyle(bold=True, large=False)

    def test_style_directives_leave_layout_alone(self) -> None:
        state, _ = _feed([".indent 3", ".bold", ".regular", ".normal"])
        assert state.layout.indent_units == 3


class TestTextLines:
    """Text lines become runs and consume the ephemeral style."""

    def test_run_snapshots_style(self) -> None:
        state, _ = _feed([".bold", ".italics", "Hello"])
        (run,) = state.builder.runs
        assert run.content == "Hello"
        assert run.bold is True
        assert run.italic is True
        assert run.large is False

    def test_style_resets_after_text(self) -> None:
        state, _ = _feed([".bold", "Hello"])
        assert state.style == PLAIN_STYLE

    def test_style_does_not_leak_to_second_line(self) -> None:
        state, _ = _feed([".bold", "first", "second"])
        first, second = state.builder.runs
        assert first.bold is True
        assert second.bold is False

    def test_empty_line_consumes_style(self) -> None:
        state, _ = _feed([".large", "", "after"])
        empty, after = state.builder.runs
        assert empty.content == ""
        assert empty.large is True
        assert after.large is False

    def test_run_location(self) -> None:
        state, _ = _feed(["a", "b"])
        assert [run.location.lineno for run in state.builder.runs] == [1, 2]

    def test_style_survives_flush_until_next_text(self) -> None:
        state, emitted = _feed([".bold", ".paragraph", "Hello"])
        assert len(emitted) == 1
        assert state.builder.runs[0].bold is True


class TestFlushDirectives:
    """Layout directives seal the open paragraph and open a new one."""

    def test_paragraph_resets_layout(self) -> None:
        state, emitted = _feed([".fill", "x", ".paragraph"])
        assert len(emitted) == 2
        assert emitted[1].fill_mode is True
        assert state.layout == ParagraphLayout(indent_units=0, fill_mode=False)

    def test_fill_sets_fixed_padding(self) -> None:
        state, _ = _feed([".indent 3", ".fill"])
        assert state.layout == ParagraphLayout(indent_units=10, fill_mode=True)

    def test_fill_is_not_cumulative(self) -> None:
        state, _ = _feed([".fill", ".fill"])
        assert state.layout.indent_units == 10

    def test_fill_padding_from_config(self) -> None:
        step = apply_directive(
            initial_state(),
            Directive(kind=DirectiveKind.FILL),
            FormatConfig(fill_padding_units=4),
        )
        assert step.state.layout == ParagraphLayout(indent_units=4, fill_mode=True)

    def test_nofill_clears_fill_only(self) -> None:
        state, _ = _feed([".fill", ".nofill"])
        assert state.layout == ParagraphLayout(indent_units=10, fill_mode=False)

    def test_indent_keeps_fill(self) -> None:
        state, _ = _feed([".fill", ".indent 2"])
        assert state.layout == ParagraphLayout(indent_units=2, fill_mode=True)

    def test_new_paragraph_gets_new_layout(self) -> None:
        state, _ = _feed([".indent 4", "text"])
        assert finish(state).indent_units == 4

    def test_sealed_paragraph_keeps_old_layout(self) -> None:
        _, emitted = _feed(["before", ".indent 4"])
        assert emitted[0].indent_units == 0
        assert emitted[0].runs[0].content == "before"

    def test_empty_paragraph_still_emitted(self) -> None:
        _, emitted = _feed([".paragraph", ".paragraph"])
        assert len(emitted) == 2
        assert all(p.runs == () for p in emitted)

    def test_reopened_paragraph_location_is_directive_line(self) -> None:
        state, _ = _feed(["a", ".indent 1"])
        assert state.builder.location.lineno == 2

    def test_runs_preserve_order(self) -> None:
        _, emitted = _feed(["one", "two", "three", ".paragraph"])
        assert [r.content for r in emitted[0].runs] == ["one", "two", "three"]


class TestErrors:
    """Malformed lines leave the state untouched."""

    def test_invalid_indent_leaves_state(self) -> None:
        state, _ = _feed([".indent 4", "text"])
        step = process(state, ".indent abc", 3)
        assert isinstance(step.error, InvalidArgumentError)
        assert step.state is state
        assert step.emitted is None
        assert step.error.lineno == 3

    def test_unknown_directive_reported(self) -> None:
        step = process(initial_state(), ".center")
        assert isinstance(step.error, UnknownDirectiveError)

    def test_unknown_directive_does_not_consume_style(self) -> None:
        state, _ = _feed([".bold"])
        step = process(state, ".center")
        assert step.state.style.bold is True


class TestInterpreterRun:
    """Interpreter drives a whole input."""

    def test_scenario_bold_then_paragraph(self) -> None:
        doc = Interpreter().run([".bold", "Hello", ".paragraph", "World"])
        assert doc.children == (
            Paragraph(
                runs=(TextRun("Hello", bold=True, location=doc.children[0].runs[0].location),),
                indent_units=0,
                fill_mode=False,
                location=doc.children[0].location,
            ),
            Paragraph(
                runs=(TextRun("World", location=doc.children[1].runs[0].location),),
                indent_units=0,
                fill_mode=False,
                location=doc.children[1].location,
            ),
        )

    def test_scenario_fill(self) -> None:
        doc = Interpreter().run([".fill", "Justified text"])
        assert len(doc.children) == 2
        empty, filled = doc.children
        assert empty.runs == ()
        assert empty.fill_mode is False
        assert empty.indent_units == 0
        assert filled.fill_mode is True
        assert filled.indent_units == 10
        assert [r.content for r in filled.runs] == ["Justified text"]

    def test_empty_input(self) -> None:
        doc = Interpreter().run([])
        assert len(doc.children) == 1
        assert doc.children[0].runs == ()

    def test_trailing_newlines_stripped(self) -> None:
        doc = Interpreter().run([".bold\n", "Hello\r\n"])
        (run,) = doc.children[0].runs
        assert run.content == "Hello"
        assert run.bold is True

    def test_strict_mode_raises_with_line_number(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            Interpreter("in.txt").run(["a", ".indent x"])
        assert exc_info.value.lineno == 2
        assert exc_info.value.source_file == "in.txt"

    def test_lenient_mode_skips_and_records(self) -> None:
        doc = Interpreter(config=FormatConfig(strict=False)).run(
            [".indent 2", ".center", "text", ".indent"]
        )
        assert len(doc.children) == 2
        assert doc.children[1].indent_units == 2
        assert [d.kind for d in doc.diagnostics] == [
            "UnknownDirectiveError",
            "MissingArgumentError",
        ]
        assert [d.lineno for d in doc.diagnostics] == [2, 4]

    def test_source_file_propagates(self) -> None:
        doc = Interpreter("notes.txt").run(["hi"])
        assert doc.source_file == "notes.txt"
        assert doc.children[0].runs[0].location.source_file == "notes.txt"

    def test_flush_logged_with_canonical_name(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("DEBUG", logger="dotpress"):
            Interpreter("in.txt").run(["a", ".italic", ".indent 3", "b"])
        messages = [r.getMessage() for r in caplog.records]
        assert "in.txt:3: .indent sealed paragraph with 1 run(s)" in messages
