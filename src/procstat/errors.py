"""Exceptions raised by procstat readers."""

from pathlib import Path


class ProcStatError(Exception):
    """Base class for all procstat errors."""


class NotAccessible(ProcStatError):
    """A counter file is missing or cannot be opened."""

    def __init__(self, path: Path | str, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        msg = f"cannot read {self.path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class MalformedRecord(ProcStatError, ValueError):
    """A record does not match the expected field count or numeric schema."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class NotFound(ProcStatError, LookupError):
    """The requested process or core does not exist at read time."""

    def __init__(self, identity: int, kind: str = "process") -> None:
        self.identity = identity
        self.kind = kind
        super().__init__(f"{kind} {identity} not found")
