"""Reader configuration: filesystem roots and the kernel tick rate."""

import functools
import os
from dataclasses import dataclass, field
from pathlib import Path

import psutil


@functools.cache
def system_ticks_per_second() -> int:
    """
    Return the kernel clock ticks per second (``SC_CLK_TCK``).

    Queried once per interpreter; later calls return the cached value.
    """
    return os.sysconf("SC_CLK_TCK")


def _default_proc_root() -> Path:
    # psutil exposes the procfs mount point as a module-level setting so
    # agents running in containers can point it at the host's /proc.
    return Path(getattr(psutil, "PROCFS_PATH", "/proc"))


@dataclass(slots=True, frozen=True)
class ProcFS:
    """
    Where to read kernel counters from, and how to convert ticks to seconds.

    Passed explicitly to every reader and to the process calculators so
    tests can substitute a fake tree and a fixed tick rate.

    Args:
        root: Mount point of procfs. Defaults to ``psutil.PROCFS_PATH``.
        sys_root: Mount point of sysfs.
        ticks_per_second: Kernel clock ticks per second.
    """

    root: Path = field(default_factory=_default_proc_root)
    sys_root: Path = Path("/sys")
    ticks_per_second: int = field(default_factory=system_ticks_per_second)

    def __post_init__(self) -> None:
        if self.ticks_per_second <= 0:
            raise ValueError(f"ticks_per_second must be positive, got {self.ticks_per_second}")
        # frozen dataclass: normalise str roots through object.__setattr__
        object.__setattr__(self, "root", Path(self.root))
        object.__setattr__(self, "sys_root", Path(self.sys_root))

    def proc(self, *parts: str | int) -> Path:
        """Build a path below the procfs root."""
        return self.root.joinpath(*(str(p) for p in parts))

    def sys(self, *parts: str) -> Path:
        """Build a path below the sysfs root."""
        return self.sys_root.joinpath(*parts)

    def to_seconds(self, ticks: int) -> float:
        """Convert a tick count to seconds."""
        return ticks / self.ticks_per_second


def resolve(procfs: ProcFS | None) -> ProcFS:
    """Return ``procfs`` or a default-configured instance."""
    return procfs if procfs is not None else ProcFS()
