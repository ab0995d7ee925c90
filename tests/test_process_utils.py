"""Tests for spawn arguments and process-tree termination."""
import sys
import subprocess

import psutil
import pytest

from chrome_runner.errors import TerminationSignalDeliveryError
from chrome_runner.supervisor import process_utils


def test_spawn_kwargs_detach_from_session(monkeypatch):
    monkeypatch.setattr(process_utils.sys, "platform", "linux")
    assert process_utils.get_spawn_kwargs() == {"start_new_session": True}


@pytest.mark.skipif(sys.platform != "win32", reason="Windows creation flags")
def test_spawn_kwargs_on_windows():
    assert process_utils.get_spawn_kwargs() == {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}


@pytest.mark.skipif(sys.platform == "win32", reason="process groups are POSIX only")
def test_group_kill_of_missing_process_raises():
    proc = subprocess.Popen([sys.executable, "-c", "pass"])
    proc.wait(timeout=10)
    pid = proc.pid
    with pytest.raises(TerminationSignalDeliveryError) as excinfo:
        process_utils.terminate_process_tree(pid)
    assert excinfo.value.pid == pid


class FakeProcess:
    def __init__(self, pid, children=(), gone=False):
        self.pid = pid
        self._children = list(children)
        self._gone = gone
        self.killed = False

    def children(self, recursive=False):
        return list(self._children)

    def kill(self):
        if self._gone:
            raise psutil.NoSuchProcess(self.pid)
        self.killed = True


def test_tree_kill_on_windows_kills_descendants(monkeypatch):
    grandchild = FakeProcess(3)
    vanished = FakeProcess(4, gone=True)
    parent = FakeProcess(1, children=[grandchild, vanished])
    monkeypatch.setattr(process_utils.sys, "platform", "win32")
    monkeypatch.setattr(process_utils.psutil, "Process", lambda pid: parent)
    process_utils.terminate_process_tree(1)
    assert parent.killed and grandchild.killed


def test_tree_kill_of_missing_process_raises(monkeypatch):
    def missing(pid):
        raise psutil.NoSuchProcess(pid)

    monkeypatch.setattr(process_utils.sys, "platform", "win32")
    monkeypatch.setattr(process_utils.psutil, "Process", missing)
    with pytest.raises(TerminationSignalDeliveryError):
        process_utils.terminate_process_tree(99)
