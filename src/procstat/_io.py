"""File access helpers shared by the readers."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from procstat.errors import MalformedRecord, NotAccessible, ProcStatError

MissingHandler = Callable[[], ProcStatError]


def _translate(path: Path, exc: OSError, on_missing: MissingHandler | None) -> ProcStatError:
    # ESRCH shows up when a process exits between open() and read().
    if on_missing is not None and isinstance(exc, (FileNotFoundError, ProcessLookupError)):
        return on_missing()
    return NotAccessible(path, exc.strerror or str(exc))


@contextmanager
def open_record(path: Path, on_missing: MissingHandler | None = None) -> Iterator[TextIO]:
    """
    Open a counter file for line-by-line reading.

    Args:
        path: File to open.
        on_missing: Builds the error raised when the file does not exist.
            Defaults to NotAccessible.
    """
    try:
        fh = path.open("r", encoding="utf-8", errors="replace")
    except OSError as exc:
        raise _translate(path, exc, on_missing) from exc
    with fh:
        try:
            yield fh
        except OSError as exc:
            raise _translate(path, exc, on_missing) from exc


def read_text(path: Path, on_missing: MissingHandler | None = None) -> str:
    """Read a whole counter file as stripped text."""
    with open_record(path, on_missing) as fh:
        return fh.read().strip()


def read_uint(path: Path) -> int:
    """Read a file holding one unsigned integer."""
    text = read_text(path)
    if not (text.isascii() and text.isdigit()):
        raise MalformedRecord(path, f"expected an unsigned integer, got {text!r}")
    return int(text)
