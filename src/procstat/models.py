"""Snapshot data models for procstat."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from procstat.config import ProcFS


def _percent(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return part / whole * 100.0


@dataclass(slots=True, frozen=True)
class CPUStat:
    """
    Cumulative scheduler tick counters for the whole system or one core.

    ``user`` and ``nice`` already exclude guest time; ``total`` is the sum
    of the ten counters. Build instances from raw kernel values with
    :meth:`from_ticks`.
    """

    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0
    total: int = 0

    @classmethod
    def from_ticks(
        cls,
        user: int,
        nice: int,
        system: int,
        idle: int,
        iowait: int,
        irq: int,
        softirq: int,
        steal: int,
        guest: int,
        guest_nice: int,
    ) -> CPUStat:
        """Create a snapshot from counters as the kernel reports them."""
        # The kernel counts guest time inside user/nice as well.
        user -= guest
        nice -= guest_nice
        total = user + nice + system + idle + iowait + irq + softirq + steal + guest + guest_nice
        return cls(
            user=user,
            nice=nice,
            system=system,
            idle=idle,
            iowait=iowait,
            irq=irq,
            softirq=softirq,
            steal=steal,
            guest=guest,
            guest_nice=guest_nice,
            total=total,
        )

    @property
    def idle_total(self) -> int:
        """Idle plus iowait ticks."""
        return self.idle + self.iowait


@dataclass(slots=True, frozen=True)
class CPUInfo:
    """Static CPU identity and topology."""

    name: str = ""
    vendor_id: str = ""
    model: int = 0
    family: int = 0
    stepping: str = ""
    cache_size: int = 0  # KiB
    flags: tuple[str, ...] = ()
    min_freq: int = 0  # kHz
    max_freq: int = 0  # kHz
    core_count: int = 0
    thread_count: int = 0
    socket_count: int = 0


@dataclass(slots=True, frozen=True)
class MemorySnapshot:
    """
    System-wide memory accounting, in KiB.

    ``free`` counts page cache and buffers as free. ``used`` and
    ``swap_used`` are plain differences and go negative if the kernel
    reports more free than total memory (seen under some cgroup setups).
    """

    total: int = 0
    free: int = 0
    used: int = 0
    cached: int = 0
    buffers: int = 0
    active: int = 0
    inactive: int = 0
    swap_total: int = 0
    swap_free: int = 0
    swap_used: int = 0
    swap_cached: int = 0

    @classmethod
    def from_counters(
        cls,
        total: int = 0,
        free: int = 0,
        cached: int = 0,
        buffers: int = 0,
        active: int = 0,
        inactive: int = 0,
        swap_total: int = 0,
        swap_free: int = 0,
        swap_cached: int = 0,
    ) -> MemorySnapshot:
        """Create a snapshot from raw meminfo counters."""
        free = free + cached + buffers
        return cls(
            total=total,
            free=free,
            used=total - free,
            cached=cached,
            buffers=buffers,
            active=active,
            inactive=inactive,
            swap_total=swap_total,
            swap_free=swap_free,
            swap_used=swap_total - swap_free,
            swap_cached=swap_cached,
        )

    @property
    def used_percent(self) -> float:
        """Used memory as a percentage of total, 0.0 if total is 0."""
        return _percent(self.used, self.total)

    @property
    def free_percent(self) -> float:
        """Free memory as a percentage of total, 0.0 if total is 0."""
        return _percent(self.free, self.total)

    @property
    def swap_used_percent(self) -> float:
        """Used swap as a percentage of swap total, 0.0 without swap."""
        return _percent(self.swap_used, self.swap_total)

    @property
    def swap_free_percent(self) -> float:
        """Free swap as a percentage of swap total, 0.0 without swap."""
        return _percent(self.swap_free, self.swap_total)


@dataclass(slots=True, frozen=True)
class LoadAverage:
    """Run-queue load averages and task counts."""

    avg1: float
    avg5: float
    avg15: float
    running: int
    total: int
    last_pid: int


@dataclass(slots=True, frozen=True)
class ProcessCPUStat:
    """
    Cumulative CPU ticks of one process and its reaped children.

    ``start`` is in ticks since boot. ``uptime`` is the system uptime in
    seconds at the moment the counters were read and serves as the
    capture time when two snapshots are compared.
    """

    start: int = 0
    user: int = 0
    system: int = 0
    guest: int = 0
    children_user: int = 0
    children_system: int = 0
    children_guest: int = 0
    total: int = 0
    uptime: float = 0.0

    @classmethod
    def from_ticks(
        cls,
        start: int,
        user: int,
        system: int,
        guest: int,
        children_user: int,
        children_system: int,
        children_guest: int,
        uptime: float,
    ) -> ProcessCPUStat:
        """Create a snapshot from counters as the kernel reports them."""
        user -= guest
        children_user -= children_guest
        total = user + system + children_user + children_system + guest + children_guest
        return cls(
            start=start,
            user=user,
            system=system,
            guest=guest,
            children_user=children_user,
            children_system=children_system,
            children_guest=children_guest,
            total=total,
            uptime=uptime,
        )


@dataclass(slots=True, frozen=True)
class ProcessMemoryStat:
    """Memory region sizes of one process, in KiB."""

    virtual: int = 0
    peak_virtual: int = 0
    resident: int = 0
    peak_resident: int = 0
    locked: int = 0
    data: int = 0
    stack: int = 0
    text: int = 0
    shared: int = 0


@dataclass(slots=True)
class ProcessInfo:
    """
    Identity and accounting of one process.

    Built by :func:`procstat.process.read_process`. The ``cpu`` and
    ``memory`` snapshots are replaced wholesale by :meth:`update`; nothing
    else mutates an instance.
    """

    pid: int
    parent_pid: int = 0
    name: str = ""
    path: str = ""
    arguments: tuple[str, ...] = ()
    state: str = ""
    uid: int = 0
    gid: int = 0
    groups: tuple[int, ...] = ()
    tty: int = 0
    thread_count: int = 0
    priority: int = 0
    nice: int = 0
    fd_count: int = 0
    cpu: ProcessCPUStat = field(default_factory=ProcessCPUStat)
    memory: ProcessMemoryStat = field(default_factory=ProcessMemoryStat)
    procfs: ProcFS | None = field(default=None, repr=False, compare=False)

    def update(self) -> None:
        """
        Re-read the status and stat records of this process in place.

        The command line is not re-read.

        Raises:
            NotFound: If the process has exited.
        """
        from procstat.process import refresh

        refresh(self)

    def cpu_usage_percent(self) -> float:
        """CPU share over the whole lifetime of the process."""
        from procstat.usage import process_lifetime_cpu_percent

        tps = self.procfs.ticks_per_second if self.procfs is not None else None
        return process_lifetime_cpu_percent(self.cpu, tps)

    def memory_usage_percent(self) -> float:
        """Resident memory as a percentage of total system memory."""
        from procstat.usage import process_memory_percent

        return process_memory_percent(self, self.procfs)
