"""procstat - kernel counter snapshots and usage rates for Linux."""

from procstat.config import ProcFS, system_ticks_per_second
from procstat.cpu import read_core_stat, read_cpu_info, read_cpu_stat
from procstat.errors import MalformedRecord, NotAccessible, NotFound, ProcStatError
from procstat.memory import read_memory
from procstat.models import (
    CPUInfo,
    CPUStat,
    LoadAverage,
    MemorySnapshot,
    ProcessCPUStat,
    ProcessInfo,
    ProcessMemoryStat,
)
from procstat.process import list_processes, read_process
from procstat.system import read_load_avg, read_uptime
from procstat.usage import (
    cpu_usage_percent,
    process_cpu_usage_percent,
    process_lifetime_cpu_percent,
    process_memory_percent,
)

__version__ = "0.1.0"

__all__ = [
    "CPUInfo",
    "CPUStat",
    "LoadAverage",
    "MalformedRecord",
    "MemorySnapshot",
    "NotAccessible",
    "NotFound",
    "ProcFS",
    "ProcStatError",
    "ProcessCPUStat",
    "ProcessInfo",
    "ProcessMemoryStat",
    "cpu_usage_percent",
    "list_processes",
    "process_cpu_usage_percent",
    "process_lifetime_cpu_percent",
    "process_memory_percent",
    "read_core_stat",
    "read_cpu_info",
    "read_cpu_stat",
    "read_load_avg",
    "read_memory",
    "read_process",
    "read_uptime",
    "system_ticks_per_second",
]
