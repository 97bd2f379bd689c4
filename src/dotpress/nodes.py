"""Typed document model for dotpress.

All nodes are frozen dataclasses with slots. A frozen Paragraph is a sealed
paragraph: the one still accepting runs lives in the ParagraphBuilder.

Node Hierarchy:
Document
└── Paragraph
    └── TextRun

This is the interface consumed by renderers. Each paragraph exposes its
runs (text + bold/italic/large flags) and layout (indent_units, fill_mode).

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from dotpress.location import SourceLocation
from dotpress.state import EphemeralStyle, ParagraphLayout


@dataclass(frozen=True, slots=True)
class TextRun:
    """Literal text bound to the style active when it was read."""

    content: str
    bold: bool = False
    italic: bool = False
    large: bool = False
    location: SourceLocation = SourceLocation.unknown()

    @classmethod
    def styled(
        cls, content: str, style: EphemeralStyle, location: SourceLocation | None = None
    ) -> TextRun:
        """Snapshot ``style`` onto ``content``."""
        return cls(
            content=content,
            bold=style.bold,
            italic=style.italic,
            large=style.large,
            location=location or SourceLocation.unknown(),
        )

    @property
    def style(self) -> EphemeralStyle:
        return EphemeralStyle(bold=self.bold, italic=self.italic, large=self.large)


@dataclass(frozen=True, slots=True)
class Paragraph:
    """Sealed paragraph: ordered runs plus the layout it was opened with.

    ``location`` is the line of the directive that opened the paragraph
    (line 0 for the paragraph open at the start of input).

    """

    runs: tuple[TextRun, ...] = ()
    indent_units: int = 0
    fill_mode: bool = False
    location: SourceLocation = SourceLocation.unknown()

    @property
    def layout(self) -> ParagraphLayout:
        return ParagraphLayout(indent_units=self.indent_units, fill_mode=self.fill_mode)

    @property
    def is_empty(self) -> bool:
        return not self.runs

    @property
    def text(self) -> str:
        """Plain text of all runs, one line per run."""
        return "\n".join(run.content for run in self.runs)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A skipped line recorded in lenient mode.

    Attributes:
        kind: Error class name, e.g. "UnknownDirectiveError"
        message: Human-readable description
        lineno: Offending line
        source_file: Source path (optional)

    """

    kind: str
    message: str
    lineno: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class Document:
    """Ordered sequence of sealed paragraphs, in reading order."""

    children: tuple[Paragraph, ...] = ()
    source_file: str | None = None
    diagnostics: tuple[Diagnostic, ...] = ()

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self):
        return iter(self.children)

    @property
    def runs(self) -> tuple[TextRun, ...]:
        return tuple(run for para in self.children for run in para.runs)


__all__ = ["Diagnostic", "Document", "Paragraph", "TextRun"]
