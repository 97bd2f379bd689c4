"""DocumentRenderer protocol: stable interface for renderers.

Any renderer that implements ``render(doc) -> str`` conforms to this protocol.
The built-in ``HtmlRenderer`` is the reference implementation; page-oriented
writers (PDF and the like) live outside this package and consume either the
Document directly or its JSON form from ``dotpress.serialization``.

Example:
    from dotpress.renderers.protocol import DocumentRenderer

    def render_page(renderer: DocumentRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from dotpress.nodes import Document

# Rendering constants shared by renderers
POINTS_PER_INDENT_UNIT = 10
NORMAL_FONT_SIZE = 12
LARGE_FONT_SIZE = 22


class DocumentRenderer(Protocol):
    """Protocol for document renderers.

    Implementations must accept a completed Document and return the
    rendered output as a string.

    """

    def render(self, doc: Document) -> str:
        """Render a Document to a string.

        Args:
            doc: The completed document.

        Returns:
            Rendered string output.

        """
        ...
