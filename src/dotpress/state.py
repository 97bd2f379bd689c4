"""Style and layout state records.

Two layers of state drive the interpreter:

- EphemeralStyle is consumed by the next single text run, then reset.
- ParagraphLayout belongs to paragraphs and survives until a directive
  changes it.

Both are frozen; transitions return new records.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class EphemeralStyle:
    """Style applied to exactly one upcoming text run."""

    bold: bool = False
    italic: bool = False
    large: bool = False

    @property
    def is_plain(self) -> bool:
        return not (self.bold or self.italic or self.large)

    def with_bold(self) -> EphemeralStyle:
        return replace(self, bold=True)

    def with_italic(self) -> EphemeralStyle:
        return replace(self, italic=True)

    def with_large(self) -> EphemeralStyle:
        return replace(self, large=True)

    def normal_size(self) -> EphemeralStyle:
        return replace(self, large=False)


PLAIN_STYLE = EphemeralStyle()


@dataclass(frozen=True, slots=True)
class ParagraphLayout:
    """Paragraph-level layout.

    Attributes:
        indent_units: Left padding in indent units (each unit is 10pt when
            rendered)
        fill_mode: Justified alignment; set together with the fixed fill
            padding by `.fill`

    """

    indent_units: int = 0
    fill_mode: bool = False

    def __post_init__(self) -> None:
        if self.indent_units < 0:
            msg = f"indent_units must be >= 0, got {self.indent_units}"
            raise ValueError(msg)

    def with_indent(self, units: int) -> ParagraphLayout:
        return replace(self, indent_units=units)

    def without_fill(self) -> ParagraphLayout:
        return replace(self, fill_mode=False)

    @classmethod
    def filled(cls, padding_units: int) -> ParagraphLayout:
        """Layout opened by `.fill`: fixed padding, not cumulative."""
        return cls(indent_units=padding_units, fill_mode=True)


DEFAULT_LAYOUT = ParagraphLayout()
