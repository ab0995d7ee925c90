import os
import sys
import signal
import logging
import subprocess
from typing import Any, Dict

import psutil

from chrome_runner.errors import TerminationSignalDeliveryError

log = logging.getLogger(__name__)


#* --- Process Creation ---
def get_spawn_kwargs() -> Dict[str, Any]:
    """
    Returns platform-specific keyword arguments for starting a detached process.

    On POSIX the child gets its own session, so its PID is also its process
    group ID and the whole group can be signalled at once. On Windows it gets
    a new process group.

    :return dict: Keyword arguments for `asyncio.create_subprocess_exec`.
    """
    if sys.platform == "win32":
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


#* --- Process Termination ---
def _kill_process_group(pid: int) -> None:
    """Sends SIGKILL to the process group led by `pid`."""
    try:
        os.killpg(pid, signal.SIGKILL)
    except OSError as e:
        raise TerminationSignalDeliveryError(pid, str(e)) from e


def _kill_process_tree(pid: int) -> None:
    """Kills `pid` and every descendant of it."""
    try:
        parent = psutil.Process(pid)
        procs = parent.children(recursive=True)
        procs.append(parent)
    except psutil.Error as e:
        raise TerminationSignalDeliveryError(pid, str(e)) from e

    for proc in procs:
        try:
            log.debug(f"Killing {proc.pid} in the process tree of {pid}")
            proc.kill()
        except psutil.NoSuchProcess:
            log.debug(f"Process {proc.pid} no longer exists, skipping forceful kill.")
            continue
        except psutil.Error as e:
            raise TerminationSignalDeliveryError(pid, str(e)) from e


def terminate_process_tree(pid: int) -> None:
    """
    Forcefully terminates a detached process together with everything it spawned.

    Uses a process-group kill on POSIX and a recursive tree kill on Windows.

    :param pid: PID of the process started with `get_spawn_kwargs()`.
    :raises TerminationSignalDeliveryError: If the OS refused or failed the request.
    """
    if sys.platform == "win32":
        _kill_process_tree(pid)
    else:
        _kill_process_group(pid)
