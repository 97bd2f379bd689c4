"""Renderers for the dotpress document model."""

from dotpress.renderers.html import HtmlRenderer
from dotpress.renderers.protocol import DocumentRenderer

__all__ = ["DocumentRenderer", "HtmlRenderer"]
