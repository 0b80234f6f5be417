"""Running process detection.

The safety policy refuses to delete a path while a running process
executes from it. Process enumeration sits behind the ProcessProbe
interface so that tests can supply a fixed process list.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

import psutil

logger = logging.getLogger(__name__)


class ProcessProbe(ABC):
    """Abstract source of currently running executables.

    Example:
        >>> probe = PsutilProcessProbe()
        >>> "/usr/bin/python3" in probe.running_executables()
        True
    """

    @abstractmethod
    def running_executables(self) -> list[str]:
        """Return absolute paths of executables of running processes.

        Returns:
            List of executable paths (order and duplicates unspecified).
        """


class PsutilProcessProbe(ProcessProbe):
    """Lists running executables via psutil.

    psutil drops processes that vanish during iteration and reports
    None for an exe it may not read. If enumeration fails entirely, the
    probe reports nothing running and logs a warning.
    """

    def running_executables(self) -> list[str]:
        executables: list[str] = []
        try:
            for proc in psutil.process_iter(["exe"]):
                exe = proc.info.get("exe")
                if exe:
                    executables.append(exe)
        except (psutil.Error, OSError) as e:
            logger.warning("Cannot enumerate running processes: %s", e)
            return []
        return executables


class StaticProcessProbe(ProcessProbe):
    """Reports a fixed list of executables."""

    def __init__(self, executables: Iterable[str] = ()) -> None:
        self._executables = list(executables)

    def running_executables(self) -> list[str]:
        return list(self._executables)
