"""Document serialization: JSON hand-off to external renderers.

Converts the document model to/from JSON-compatible dicts. A renderer that
lives outside this process (a PDF writer, a typesetting service) consumes
this form.

All output is deterministic (sorted keys).

Example:
    from dotpress import parse
    from dotpress.serialization import to_json, from_json

    doc = parse(".bold\\nHello")
    restored = from_json(to_json(doc))
    assert doc == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from dotpress.location import SourceLocation
from dotpress.nodes import Diagnostic, Document, Paragraph, TextRun

Node = Document | Paragraph | TextRun | Diagnostic

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    "Document": Document,
    "Paragraph": Paragraph,
    "TextRun": TextRun,
    "Diagnostic": Diagnostic,
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a model node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    Args:
        node: Document, Paragraph, TextRun or Diagnostic

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, (Document, Paragraph, TextRun, Diagnostic)):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "source_file": value.source_file,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict produced by to_dict.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                source_file=value.get("source_file"),
            )
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document to a JSON string.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node


class JsonRenderer:
    """DocumentRenderer producing the JSON hand-off form."""

    __slots__ = ("_indent",)

    def __init__(self, *, indent: int | None = 2) -> None:
        self._indent = indent

    def render(self, doc: Document) -> str:
        return to_json(doc, indent=self._indent) + "\n"


__all__ = ["JsonRenderer", "from_dict", "from_json", "to_dict", "to_json"]
