"""Reading sources and writing rendered output.

Output is written to a temporary file in the destination directory and
moved into place only after rendering succeeded, so a failed run (parse
error, render error, or I/O error) never leaves a partial file behind.
Failures are reported as SourceError, chained from the OSError.
"""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO

from dotpress.errors import SourceError
from dotpress.nodes import Document
from dotpress.renderers.protocol import DocumentRenderer
from dotpress.utils.logger import get_logger

logger = get_logger(__name__)


def split_lines(text: str) -> list[str]:
    """Split text on line feeds, dropping a trailing CR from each line.

    Unlike ``str.splitlines()``, form feeds, vertical tabs and Unicode line
    separators stay inside the line. A final newline does not start another
    line, so the empty string is zero lines.

    Example:
        >>> split_lines("a\\x0cb\\r\\nc\\n")
        ['a\\x0cb', 'c']
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def read_lines(path: str | os.PathLike[str], encoding: str = "utf-8") -> list[str]:
    """Read a source file into lines without their line endings.

    Raises:
        SourceError: File missing, unreadable, or not valid text
    """
    p = Path(path)
    try:
        with p.open(encoding=encoding, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(str(p), f"cannot read input: {e}") from e
    logger.debug("Read %d characters from %s", len(text), p)
    return split_lines(text)


@contextmanager
def open_output(path: str | os.PathLike[str], encoding: str = "utf-8") -> Iterator[IO[str]]:
    """Open ``path`` for writing; commit only if the block succeeds.

    Yields a text stream backed by a temporary file. On normal exit the
    file replaces ``path``; on any exception it is removed and the
    exception propagates.

    Raises:
        SourceError: Temporary file could not be created or moved into place
    """
    target = Path(path)
    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
        )
    except OSError as e:
        raise SourceError(str(target), f"cannot write output: {e}") from e

    committed = False
    try:
        with os.fdopen(fd, "w", encoding=encoding) as stream:
            yield stream
        try:
            os.chmod(tmp_name, _output_mode(target))
            os.replace(tmp_name, target)
        except OSError as e:
            raise SourceError(str(target), f"cannot write output: {e}") from e
        committed = True
    finally:
        if not committed:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass


def _output_mode(target: Path) -> int:
    # mkstemp creates 0600; keep an existing file's mode, else honour the umask
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_document(
    doc: Document, renderer: DocumentRenderer, path: str | os.PathLike[str]
) -> Path:
    """Render ``doc`` and write it to ``path``.

    The renderer runs inside the output scope, so a RenderError leaves no
    file behind.
    """
    target = Path(path)
    try:
        with open_output(target) as stream:
            stream.write(renderer.render(doc))
    except OSError as e:
        raise SourceError(str(target), f"cannot write output: {e}") from e
    logger.info("Wrote %s", target)
    return target
