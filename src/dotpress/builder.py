"""Paragraph builder: the open paragraph that accepts runs.

The builder is an immutable accumulator. ``append`` and ``reopen`` return
new builders, ``flush`` seals the current contents into a Paragraph. No I/O.

Runs are held in a persistent linked chain so ``append`` is O(1) while
earlier builders stay valid; the chain is materialized into a tuple once,
on flush.

Example:
    >>> b = ParagraphBuilder().append(TextRun("Hello"))
    >>> b.flush().runs[0].content
    'Hello'
    >>> b.reopen(ParagraphLayout(indent_units=4)).is_empty
    True

"""

from __future__ import annotations

from dataclasses import dataclass, field

from dotpress.location import SourceLocation
from dotpress.nodes import Paragraph, TextRun
from dotpress.state import DEFAULT_LAYOUT, ParagraphLayout


@dataclass(frozen=True, slots=True, eq=False)
class _RunLink:
    run: TextRun
    previous: _RunLink | None


@dataclass(frozen=True, slots=True)
class ParagraphBuilder:
    """Runs collected so far for the open paragraph, with its layout."""

    layout: ParagraphLayout = DEFAULT_LAYOUT
    location: SourceLocation = SourceLocation.unknown()
    count: int = 0
    _last: _RunLink | None = field(default=None, repr=False)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def runs(self) -> tuple[TextRun, ...]:
        """Runs in the order they were appended."""
        collected: list[TextRun] = []
        link = self._last
        while link is not None:
            collected.append(link.run)
            link = link.previous
        collected.reverse()
        return tuple(collected)

    def append(self, run: TextRun) -> ParagraphBuilder:
        """Return a builder with ``run`` added after the existing runs."""
        return ParagraphBuilder(
            layout=self.layout,
            location=self.location,
            count=self.count + 1,
            _last=_RunLink(run, self._last),
        )

    def flush(self) -> Paragraph:
        """Seal the open paragraph. Safe on an empty builder."""
        return Paragraph(
            runs=self.runs,
            indent_units=self.layout.indent_units,
            fill_mode=self.layout.fill_mode,
            location=self.location,
        )

    def reopen(
        self, layout: ParagraphLayout, location: SourceLocation | None = None
    ) -> ParagraphBuilder:
        """Start a fresh, empty paragraph with ``layout``."""
        return ParagraphBuilder(
            layout=layout,
            location=location or SourceLocation.unknown(self.location.source_file),
        )
