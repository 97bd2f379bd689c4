"""HTML preview renderer.

Maps the document model onto a standalone HTML page:

- one ``<p>`` per paragraph, empty paragraphs included
- ``padding-left`` of indent_units x 10pt
- ``text-align: justify`` for fill-mode paragraphs
- ``<strong>``/``<em>`` for bold/italic runs, 22pt font size for large runs

Runs are separated by a newline, which the browser shows as a space.

Thread Safety:
HtmlRenderer holds no per-render state. Instances can be shared.
"""

import html

from dotpress.errors import RenderError
from dotpress.nodes import Document, Paragraph, TextRun
from dotpress.renderers.protocol import (
    LARGE_FONT_SIZE,
    NORMAL_FONT_SIZE,
    POINTS_PER_INDENT_UNIT,
)
from dotpress.utils.logger import get_logger

logger = get_logger(__name__)

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <title>{title}</title>
  <style>
    body {{ font-family: Helvetica, Arial, sans-serif; font-size: {font_size}pt; }}
  </style>
</head>
<body>
{body}</body>
</html>
"""


def html_escape(s: str) -> str:
    """Escape HTML special characters, including double quotes."""
    return html.escape(s, quote=False).replace('"', "&quot;")


class HtmlRenderer:
    """Render a Document to HTML.

    Usage:
        >>> renderer = HtmlRenderer(standalone=False)
        >>> renderer.render(parse(".bold\\nHello"))
        '<p><strong>Hello</strong></p>\\n'

    Args:
        standalone: Wrap the paragraphs in a complete HTML page
        title: Page title for standalone output
    """

    __slots__ = ("_standalone", "_title")

    def __init__(self, *, standalone: bool = True, title: str = "dotpress document") -> None:
        self._standalone = standalone
        self._title = title

    def render(self, doc: Document) -> str:
        """Render document to an HTML string."""
        if not isinstance(doc, Document):
            msg = f"HtmlRenderer expects a Document, got {type(doc).__name__}"
            raise RenderError(msg)

        parts: list[str] = []
        for para in doc.children:
            self._render_paragraph(para, parts)
        body = "".join(parts)
        logger.debug("Rendered %d paragraph(s) to HTML", len(doc.children))

        if not self._standalone:
            return body
        return _PAGE_TEMPLATE.format(
            title=html_escape(self._title),
            font_size=NORMAL_FONT_SIZE,
            body=body,
        )

    def _render_paragraph(self, para: Paragraph, parts: list[str]) -> None:
        styles = []
        if para.indent_units:
            styles.append(f"padding-left: {para.indent_units * POINTS_PER_INDENT_UNIT}pt")
        if para.fill_mode:
            styles.append("text-align: justify")
        style_attr = f' style="{"; ".join(styles)}"' if styles else ""

        parts.append(f"<p{style_attr}>")
        parts.append("\n".join(self._render_run(run) for run in para.runs))
        parts.append("</p>\n")

    def _render_run(self, run: TextRun) -> str:
        out = html_escape(run.content)
        if run.italic:
            out = f"<em>{out}</em>"
        if run.bold:
            out = f"<strong>{out}</strong>"
        if run.large:
            out = f'<span style="font-size: {LARGE_FONT_SIZE}pt">{out}</span>'
        return out
