"""Shared fixtures: a fake procfs/sysfs tree under tmp_path."""

from pathlib import Path

import pytest

from procstat.config import ProcFS

PROC_STAT = """\
cpu  1000 20 300 5000 40 5 6 0 100 10
cpu0 500 10 150 2500 20 3 3 0 50 5
cpu1 500 10 150 2500 20 2 3 0 50 5
intr 12345 0 0
ctxt 67890
btime 1700000000
processes 4242
procs_running 2
procs_blocked 0
"""

MEMINFO = """\
MemTotal:        1000 kB
MemFree:          200 kB
MemAvailable:     650 kB
Buffers:          100 kB
Cached:           300 kB
SwapCached:        10 kB
Active:           250 kB
Inactive:         150 kB
Active(anon):      90 kB
SwapTotal:        500 kB
SwapFree:         400 kB
HugePages_Total:    0
"""

CPUINFO_STANZA = """\
processor\t: {processor}
vendor_id\t: GenuineIntel
cpu family\t: 6
model\t\t: 142
model name\t: Intel(R) Core(TM) i7-8565U CPU @ 1.80GHz
stepping\t: 11
physical id\t: 0
core id\t\t: {core}
cache size\t: 8192 KB
flags\t\t: fpu vme de pse
power management:

"""

STATUS = """\
Name:\t{name}
Umask:\t0022
State:\tS (sleeping)
Tgid:\t{pid}
Ngid:\t0
Pid:\t{pid}
PPid:\t1
TracerPid:\t0
Uid:\t1000\t1000\t1000\t1000
Gid:\t100\t100\t100\t100
FDSize:\t64
Groups:\t4 24 100
VmPeak:\t  20000 kB
VmSize:\t  18000 kB
VmLck:\t       0 kB
VmHWM:\t   6000 kB
VmRSS:\t   5000 kB
VmData:\t   3000 kB
VmStk:\t    132 kB
VmExe:\t    800 kB
VmLib:\t   2400 kB
Threads:\t3
"""


def stat_line(
    pid: int,
    comm: str = "worker",
    utime: int = 400,
    stime: int = 100,
    cutime: int = 50,
    cstime: int = 25,
    starttime: int = 1000,
    guest: int = 40,
    cguest: int = 10,
    fields: int = 52,
) -> str:
    """Build a /proc/<pid>/stat line with the given counters."""
    values = ["0"] * fields
    values[0] = str(pid)
    values[1] = f"({comm})"
    values[2] = "S"
    values[3] = "1"
    values[6] = "34817"
    values[13] = str(utime)
    values[14] = str(stime)
    values[15] = str(cutime)
    values[16] = str(cstime)
    values[17] = "20"
    values[18] = "-5"
    values[21] = str(starttime)
    if fields > 43:
        values[42] = str(guest)
        values[43] = str(cguest)
    return " ".join(values) + "\n"


class FakeProc:
    """Writes counter files into a temporary procfs/sysfs layout."""

    def __init__(self, base: Path) -> None:
        self.proc_root = base / "proc"
        self.sys_root = base / "sys"
        self.proc_root.mkdir()
        self.sys_root.mkdir()
        self.procfs = ProcFS(root=self.proc_root, sys_root=self.sys_root, ticks_per_second=100)

    def write(self, relpath: str, content: str | bytes) -> Path:
        path = self.proc_root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    def write_sys(self, relpath: str, content: str) -> Path:
        path = self.sys_root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    def add_process(
        self,
        pid: int,
        name: str = "worker",
        cmdline: bytes | None = b"/usr/bin/worker\0--fast\0-n\x002\0",
        **stat_kwargs,
    ) -> None:
        self.write(f"{pid}/status", STATUS.format(name=name, pid=pid))
        self.write(f"{pid}/stat", stat_line(pid, comm=name, **stat_kwargs))
        if cmdline is not None:
            self.write(f"{pid}/cmdline", cmdline)

    def set_uptime(self, seconds: float) -> None:
        self.write("uptime", f"{seconds:.2f} 12345.67\n")


@pytest.fixture
def fake_proc(tmp_path: Path) -> FakeProc:
    """A fake procfs populated with system-wide records and tick rate 100."""
    fake = FakeProc(tmp_path)
    fake.write("stat", PROC_STAT)
    fake.write("meminfo", MEMINFO)
    fake.write("cpuinfo", "".join(CPUINFO_STANZA.format(processor=i, core=i // 2) for i in range(4)))
    fake.write("loadavg", "0.52 0.58 0.59 2/843 12345\n")
    fake.set_uptime(100.0)
    freq_dir = "devices/system/cpu/cpu0/cpufreq"
    fake.write_sys(f"{freq_dir}/cpuinfo_min_freq", "400000\n")
    fake.write_sys(f"{freq_dir}/cpuinfo_max_freq", "4600000\n")
    return fake


@pytest.fixture
def procfs(fake_proc: FakeProc) -> ProcFS:
    """ProcFS pointing at the fake tree."""
    return fake_proc.procfs
