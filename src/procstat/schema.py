"""
Positional record schemas for fixed-layout kernel records.

Each schema is a table of (1-indexed position, field name, parser) rows, so
a layout change between kernel versions is an edit to the table rather than
to the reader that uses it. Positions follow the numbering in proc(5).
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from procstat.errors import MalformedRecord


def parse_uint(token: str) -> int:
    """Parse an unsigned decimal integer, rejecting signs and whitespace."""
    if not (token.isascii() and token.isdigit()):
        raise ValueError(f"not an unsigned integer: {token!r}")
    return int(token)


def parse_int(token: str) -> int:
    """Parse a signed decimal integer."""
    digits = token[1:] if token[:1] == "-" else token
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"not an integer: {token!r}")
    return int(token)


@dataclass(slots=True, frozen=True)
class Field:
    """One positional field of a record."""

    position: int
    name: str
    parse: Callable[[str], int] = parse_uint


@dataclass(slots=True, frozen=True)
class RecordSchema:
    """
    Layout of a whitespace-tokenized kernel record.

    Attributes:
        name: Human readable record name, used in error messages.
        revision: Kernel version the layout was taken from.
        fields: Positional fields to extract.
        min_fields: Minimum token count a record must have.
        exact: If True, the token count must equal ``min_fields``.
    """

    name: str
    revision: str
    fields: tuple[Field, ...]
    min_fields: int
    exact: bool = False

    def extract(self, tokens: Sequence[str], source: Path | str) -> dict[str, int]:
        """
        Pull every schema field out of ``tokens``.

        Raises:
            MalformedRecord: On a field count mismatch or a parse failure.
        """
        count = len(tokens)
        if count < self.min_fields or (self.exact and count != self.min_fields):
            expected = f"{self.min_fields}" if self.exact else f">= {self.min_fields}"
            raise MalformedRecord(
                source, f"{self.name} record has {count} fields, expected {expected}"
            )

        values: dict[str, int] = {}
        for f in self.fields:
            token = tokens[f.position - 1]
            try:
                values[f.name] = f.parse(token)
            except ValueError as exc:
                raise MalformedRecord(
                    source, f"{self.name} field {f.name} (position {f.position}): {exc}"
                ) from exc
        return values


# /proc/stat "cpu" lines: label followed by ten tick counters.
CPU_STAT = RecordSchema(
    name="cpu",
    revision="2.6.33",
    fields=(
        Field(2, "user"),
        Field(3, "nice"),
        Field(4, "system"),
        Field(5, "idle"),
        Field(6, "iowait"),
        Field(7, "irq"),
        Field(8, "softirq"),
        Field(9, "steal"),
        Field(10, "guest"),
        Field(11, "guest_nice"),
    ),
    min_fields=11,
    exact=True,
)

# /proc/<pid>/stat, with comm already isolated as a single token.
PROCESS_STAT = RecordSchema(
    name="process stat",
    revision="2.6.24",
    fields=(
        Field(7, "tty"),
        Field(14, "user"),
        Field(15, "system"),
        Field(16, "children_user"),
        Field(17, "children_system"),
        Field(18, "priority", parse_int),
        Field(19, "nice", parse_int),
        Field(22, "start"),
        Field(43, "guest"),
        Field(44, "children_guest"),
    ),
    min_fields=44,
)
