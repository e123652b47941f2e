"""
Per-process accounting from /proc/<pid>/{status,stat,cmdline}.

A process snapshot merges three records. The status and stat records are
mandatory; the command line is optional because kernel threads and some
zombies have none.
"""

import logging
import os
from pathlib import Path

from procstat._io import open_record, read_text
from procstat.config import ProcFS, resolve
from procstat.errors import MalformedRecord, NotAccessible, NotFound, ProcStatError
from procstat.models import ProcessCPUStat, ProcessInfo, ProcessMemoryStat
from procstat.schema import PROCESS_STAT, parse_uint
from procstat.system import read_uptime

logger = logging.getLogger(__name__)

# status key (lowercased) -> ProcessInfo attribute, unsigned values
STATUS_IDENTITY_KEYS = {
    "tgid": "pid",
    "ppid": "parent_pid",
    "threads": "thread_count",
    "fdsize": "fd_count",
    "uid": "uid",
    "gid": "gid",
}

# status key (lowercased) -> ProcessMemoryStat attribute, values in kB
STATUS_MEMORY_KEYS = {
    "vmpeak": "peak_virtual",
    "vmsize": "virtual",
    "vmlck": "locked",
    "vmhwm": "peak_resident",
    "vmrss": "resident",
    "vmdata": "data",
    "vmstk": "stack",
    "vmexe": "text",
    "vmlib": "shared",
}


def _strip_parens(value: str) -> str:
    if value.startswith("(") and value.endswith(")"):
        return value[1:-1]
    return value


def _read_status(procfs: ProcFS, pid: int) -> tuple[dict[str, object], ProcessMemoryStat]:
    path = procfs.proc(pid, "status")
    identity: dict[str, object] = {}
    memory: dict[str, int] = {}

    with open_record(path, on_missing=lambda: NotFound(pid)) as fh:
        for line in fh:
            key, sep, value = line.partition(":")
            if not sep:
                continue
            key = key.strip().lower()
            fields = value.split()

            try:
                if key == "name":
                    identity["name"] = _strip_parens(value.strip())
                elif key == "state":
                    identity["state"] = fields[0] if fields else ""
                elif key == "groups":
                    identity["groups"] = tuple(parse_uint(f) for f in fields)
                elif key in STATUS_IDENTITY_KEYS:
                    # Uid/Gid carry real, effective, saved and fs ids; keep the real one.
                    identity[STATUS_IDENTITY_KEYS[key]] = parse_uint(fields[0])
                elif key in STATUS_MEMORY_KEYS:
                    memory[STATUS_MEMORY_KEYS[key]] = parse_uint(fields[0])
            except (ValueError, IndexError) as exc:
                raise MalformedRecord(path, f"{key}: {exc}") from exc

    return identity, ProcessMemoryStat(**memory)


def _split_stat(text: str, path: Path) -> list[str]:
    # comm may itself contain spaces and parentheses, so it runs from the
    # first "(" to the last ")".
    head, sep, tail = text.rpartition(")")
    pid_part, lparen, comm = head.partition("(")
    if not sep or not lparen:
        raise MalformedRecord(path, "process stat record has no (comm) field")
    return [pid_part.strip(), comm, *tail.split()]


def _read_stat(procfs: ProcFS, pid: int) -> tuple[dict[str, int], ProcessCPUStat]:
    path = procfs.proc(pid, "stat")
    text = read_text(path, on_missing=lambda: NotFound(pid))
    values = PROCESS_STAT.extract(_split_stat(text, path), path)
    uptime = read_uptime(procfs)

    identity = {
        "tty": values["tty"],
        "priority": values["priority"],
        "nice": values["nice"],
    }
    cpu = ProcessCPUStat.from_ticks(
        start=values["start"],
        user=values["user"],
        system=values["system"],
        guest=values["guest"],
        children_user=values["children_user"],
        children_system=values["children_system"],
        children_guest=values["children_guest"],
        uptime=uptime,
    )
    return identity, cpu


def _read_cmdline(procfs: ProcFS, pid: int) -> tuple[str, tuple[str, ...]]:
    path = procfs.proc(pid, "cmdline")
    try:
        raw = path.read_bytes()
    except OSError as exc:
        logger.debug("no command line for pid %d: %s", pid, exc)
        return "", ()

    fields = raw.decode(errors="replace").replace("\0", " ").split()
    if not fields:
        return "", ()
    return fields[0], tuple(fields[1:])


def refresh(info: ProcessInfo) -> None:
    """
    Re-read status and stat for ``info.pid`` and apply them to ``info``.

    Nothing is modified unless both records parse.
    """
    procfs = resolve(info.procfs)
    status, memory = _read_status(procfs, info.pid)
    stat, cpu = _read_stat(procfs, info.pid)

    for name, value in {**status, **stat}.items():
        setattr(info, name, value)
    info.memory = memory
    info.cpu = cpu
    info.procfs = procfs


def read_process(pid: int, procfs: ProcFS | None = None) -> ProcessInfo:
    """
    Read identity and accounting of one process.

    Args:
        pid: Process id.
        procfs: Filesystem configuration. Defaults to the live system.

    Raises:
        NotFound: If the process does not exist.
        NotAccessible: If its status or stat record cannot be read.
        MalformedRecord: If either record does not match the expected layout.
    """
    info = ProcessInfo(pid=pid, procfs=resolve(procfs))
    refresh(info)
    info.path, info.arguments = _read_cmdline(info.procfs, pid)
    return info


def list_processes(procfs: ProcFS | None = None) -> list[ProcessInfo]:
    """
    Read every live process, ordered by pid.

    Processes that exit mid-scan or cannot be read are skipped.

    Raises:
        NotAccessible: If the procfs root cannot be listed.
    """
    procfs = resolve(procfs)
    try:
        entries = os.listdir(procfs.root)
    except OSError as exc:
        raise NotAccessible(procfs.root, exc.strerror or str(exc)) from exc

    pids = sorted(int(name) for name in entries if name.isascii() and name.isdigit())

    processes: list[ProcessInfo] = []
    for pid in pids:
        try:
            processes.append(read_process(pid, procfs))
        except ProcStatError as exc:
            logger.debug("skipping pid %d: %s", pid, exc)
            continue
    return processes
