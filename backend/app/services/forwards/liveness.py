"""
Liveness checks for tracked forward processes.

A checker answers ALIVE, DEAD or UNKNOWN for a pid. Only DEAD lets the
supervisor drop a record; UNKNOWN keeps it.
"""

import os
from typing import Tuple

import psutil

from app.core.logging import forward_logger
from .enums import Liveness


class LivenessChecker:
    """Interface: check(pid) -> Liveness."""

    name = "base"

    def check(self, pid: int) -> Liveness:
        raise NotImplementedError


class ProcFsLivenessChecker(LivenessChecker):
    """
    Linux procfs probe.

    Stats /proc/<pid>/cwd rather than /proc/<pid>: the cwd link goes away as
    soon as the process exits, while the pid directory stays until a zombie
    child is reaped.
    """

    name = "procfs"

    def __init__(self, proc_root: str = "/proc"):
        self.proc_root = proc_root

    def path_for(self, pid: int) -> str:
        return os.path.join(self.proc_root, str(pid), "cwd")

    def check(self, pid: int) -> Liveness:
        path = self.path_for(pid)
        try:
            os.stat(path)
        except FileNotFoundError:
            return Liveness.DEAD
        except OSError as e:
            forward_logger.warning(
                f"Unexpected error checking process PID {pid} via {path}: {e}"
            )
            return Liveness.UNKNOWN
        return Liveness.ALIVE


class PsutilLivenessChecker(LivenessChecker):
    """Portable probe for platforms without procfs."""

    name = "psutil"

    def check(self, pid: int) -> Liveness:
        try:
            process = psutil.Process(pid)
            if process.status() == psutil.STATUS_ZOMBIE:
                return Liveness.DEAD
            return Liveness.ALIVE if process.is_running() else Liveness.DEAD
        except (psutil.NoSuchProcess, psutil.ZombieProcess):
            return Liveness.DEAD
        except psutil.AccessDenied as e:
            forward_logger.warning(f"Access denied checking process PID {pid}: {e}")
            return Liveness.UNKNOWN


CHECKERS: Tuple[type, ...] = (ProcFsLivenessChecker, PsutilLivenessChecker)


def build_liveness_checker(name: str, proc_root: str = "/proc") -> LivenessChecker:
    """Create the checker selected by the LIVENESS_CHECKER setting."""
    if name == ProcFsLivenessChecker.name:
        return ProcFsLivenessChecker(proc_root)
    if name == PsutilLivenessChecker.name:
        return PsutilLivenessChecker()
    raise ValueError(
        f"Unknown liveness checker {name!r}, expected one of "
        f"{', '.join(c.name for c in CHECKERS)}"
    )
