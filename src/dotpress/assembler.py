"""Document assembler: the append-only sequence of sealed paragraphs.

The interpreter appends each paragraph as it is flushed and calls
complete() after the terminal flush. The completed Document is what the
renderer receives; the assembler refuses further appends.
"""

from __future__ import annotations

from dotpress.errors import AssemblyError
from dotpress.nodes import Diagnostic, Document, Paragraph


class DocumentAssembler:
    """Collects sealed paragraphs in reading order.

    Thread Safety:
        Instances are single-use and not thread-safe. Create one per run.
    """

    __slots__ = ("_paragraphs", "_diagnostics", "_source_file", "_document")

    def __init__(self, source_file: str | None = None) -> None:
        self._paragraphs: list[Paragraph] = []
        self._diagnostics: list[Diagnostic] = []
        self._source_file = source_file
        self._document: Document | None = None

    @property
    def completed(self) -> bool:
        return self._document is not None

    def append(self, paragraph: Paragraph) -> None:
        """Append a sealed paragraph to the document."""
        self._check_open("append")
        self._paragraphs.append(paragraph)

    def record(self, diagnostic: Diagnostic) -> None:
        """Record a line skipped in lenient mode."""
        self._check_open("record")
        self._diagnostics.append(diagnostic)

    def complete(self) -> Document:
        """Freeze the collected paragraphs into a Document.

        Raises:
            AssemblyError: If the document was already completed
        """
        self._check_open("complete")
        self._document = Document(
            children=tuple(self._paragraphs),
            source_file=self._source_file,
            diagnostics=tuple(self._diagnostics),
        )
        return self._document

    def _check_open(self, operation: str) -> None:
        if self._document is not None:
            msg = f"cannot {operation}: document already completed"
            raise AssemblyError(msg)

    def __len__(self) -> int:
        return len(self._paragraphs)
