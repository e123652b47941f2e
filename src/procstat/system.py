"""Readers for system-wide scalar records: uptime and load average."""

from procstat._io import read_text
from procstat.config import ProcFS, resolve
from procstat.errors import MalformedRecord
from procstat.models import LoadAverage
from procstat.schema import parse_uint


def read_uptime(procfs: ProcFS | None = None) -> float:
    """Return seconds since boot from /proc/uptime."""
    procfs = resolve(procfs)
    path = procfs.proc("uptime")
    fields = read_text(path).split()
    if len(fields) != 2:
        raise MalformedRecord(path, f"expected 2 fields, got {len(fields)}")
    try:
        return float(fields[0])
    except ValueError as exc:
        raise MalformedRecord(path, str(exc)) from exc


def read_load_avg(procfs: ProcFS | None = None) -> LoadAverage:
    """
    Read /proc/loadavg.

    Raises:
        NotAccessible: If the file cannot be read.
        MalformedRecord: If the record is not ``a1 a5 a15 running/total last_pid``.
    """
    procfs = resolve(procfs)
    path = procfs.proc("loadavg")
    fields = read_text(path).split()
    if len(fields) != 5:
        raise MalformedRecord(path, f"expected 5 fields, got {len(fields)}")

    tasks = fields[3].split("/")
    if len(tasks) != 2:
        raise MalformedRecord(path, f"bad task ratio {fields[3]!r}")

    try:
        return LoadAverage(
            avg1=float(fields[0]),
            avg5=float(fields[1]),
            avg15=float(fields[2]),
            running=parse_uint(tasks[0]),
            total=parse_uint(tasks[1]),
            last_pid=parse_uint(fields[4]),
        )
    except ValueError as exc:
        raise MalformedRecord(path, str(exc)) from exc
