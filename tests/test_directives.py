"""Tests for the directive parser (line classification and arguments)."""

import pytest

from dotpress.directives import (
    DIRECTIVE_NAMES,
    Directive,
    DirectiveKind,
    TextLine,
    is_directive_line,
    parse_line,
)
from dotpress.errors import (
    InvalidArgumentError,
    MissingArgumentError,
    ParseError,
    UnknownDirectiveError,
)
from dotpress.location import SourceLocation


class TestLineClassification:
    """Directive lines versus text lines."""

    @pytest.mark.parametrize(
        "line",
        ["Hello", "", "   ", "  .bold", "a.bold", "Hello. World."],
    )
    def test_text_lines_returned_verbatim(self, line: str) -> None:
        result = parse_line(line)
        assert isinstance(result, TextLine)
        assert result.content == line

    def test_text_line_keeps_surrounding_whitespace(self) -> None:
        result = parse_line("  indented text  ")
        assert isinstance(result, TextLine)
        assert result.content == "  indented text  "

    def test_is_directive_line(self) -> None:
        assert is_directive_line(".bold")
        assert is_directive_line(".")
        assert not is_directive_line(" .bold")
        assert not is_directive_line("")

    def test_location_attached(self) -> None:
        result = parse_line("Hello", 7, "input.txt")
        assert result.location == SourceLocation(lineno=7, source_file="input.txt")


class TestDirectiveNames:
    """Every documented directive name parses to its kind."""

    @pytest.mark.parametrize(
        ("line", "kind"),
        [
            (".paragraph", DirectiveKind.PARAGRAPH),
            (".fill", DirectiveKind.FILL),
            (".nofill", DirectiveKind.NOFILL),
            (".regular", DirectiveKind.REGULAR),
            (".bold", DirectiveKind.BOLD),
            (".italics", DirectiveKind.ITALIC),
            (".large", DirectiveKind.LARGE),
            (".normal", DirectiveKind.NORMAL),
        ],
    )
    def test_argumentless_directives(self, line: str, kind: DirectiveKind) -> None:
        result = parse_line(line)
        assert isinstance(result, Directive)
        assert result.kind is kind
        assert result.argument is None

    def test_italic_alias(self) -> None:
        result = parse_line(".italic")
        assert isinstance(result, Directive)
        assert result.kind is DirectiveKind.ITALIC

    def test_italic_alias_can_be_disabled(self) -> None:
        with pytest.raises(UnknownDirectiveError):
            parse_line(".italic", accept_aliases=False)

    def test_trailing_whitespace_ignored(self) -> None:
        result = parse_line(".bold   ")
        assert isinstance(result, Directive)
        assert result.kind is DirectiveKind.BOLD

    def test_name_table_covers_every_kind(self) -> None:
        assert set(DIRECTIVE_NAMES.values()) == set(DirectiveKind)

    def test_directive_name_property(self) -> None:
        assert parse_line(".italics").name == "italics"
        assert parse_line(".indent 2").name == "indent"

    def test_alias_reports_canonical_name(self) -> None:
        assert parse_line(".italic").name == "italics"

    def test_every_kind_has_a_name(self) -> None:
        for kind in DirectiveKind:
            assert DIRECTIVE_NAMES[Directive(kind=kind).name] is kind

    def test_names_are_case_sensitive(self) -> None:
        with pytest.raises(UnknownDirectiveError):
            parse_line(".Bold")


class TestIndentArgument:
    """The only directive with an argument."""

    def test_indent_value(self) -> None:
        result = parse_line(".indent 4")
        assert isinstance(result, Directive)
        assert result.kind is DirectiveKind.INDENT
        assert result.argument == 4

    def test_indent_zero(self) -> None:
        assert parse_line(".indent 0").argument == 0

    def test_extra_spaces_between_tokens(self) -> None:
        assert parse_line(".indent    12").argument == 12

    def test_missing_argument(self) -> None:
        with pytest.raises(MissingArgumentError) as exc_info:
            parse_line(".indent", 3)
        assert exc_info.value.directive == "indent"
        assert exc_info.value.lineno == 3

    @pytest.mark.parametrize("raw", ["abc", "4.5", "four", "0x10", "+4", "1_0", "\u0664", "\uff14"])
    def test_non_integer(self, raw: str) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_line(f".indent {raw}")
        assert exc_info.value.argument == raw

    def test_negative(self) -> None:
        with pytest.raises(InvalidArgumentError, match="negative"):
            parse_line(".indent -2")

    def test_too_many_arguments(self) -> None:
        with pytest.raises(InvalidArgumentError):
            parse_line(".indent 4 5")

    def test_argument_to_argumentless_directive(self) -> None:
        with pytest.raises(InvalidArgumentError, match="takes no arguments"):
            parse_line(".bold now")


class TestUnknownDirectives:
    """Prefixed lines that name no directive are errors, not text."""

    def test_unknown_name(self) -> None:
        with pytest.raises(UnknownDirectiveError) as exc_info:
            parse_line(".center", 5, "doc.txt")
        err = exc_info.value
        assert err.name == "center"
        assert err.lineno == 5
        assert err.source_file == "doc.txt"
        assert err.line == ".center"

    def test_bare_prefix(self) -> None:
        with pytest.raises(UnknownDirectiveError) as exc_info:
            parse_line(".")
        assert exc_info.value.name == ""

    @pytest.mark.parametrize("line", [". bold", ".\tindent 4", ".  "])
    def test_name_must_follow_prefix(self, line: str) -> None:
        with pytest.raises(UnknownDirectiveError) as exc_info:
            parse_line(line)
        assert exc_info.value.name == ""

    def test_ellipsis_line(self) -> None:
        with pytest.raises(UnknownDirectiveError):
            parse_line("...and then")

    def test_all_parse_errors_share_base(self) -> None:
        for line in (".nope", ".indent", ".indent x"):
            with pytest.raises(ParseError):
                parse_line(line)
