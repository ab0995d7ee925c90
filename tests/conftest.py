import os
import sys
import stat
import logging
import tempfile
from pathlib import Path

import pytest

FAKE_CHROME_SCRIPT = Path(__file__).parent / "fake_chrome.py"

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake Chrome wrapper is a POSIX shell script")


@pytest.fixture
def tmp_root(tmp_path, monkeypatch):
    """Points tempfile at an isolated directory so created workspaces can be counted."""
    root = tmp_path / "tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def fake_chrome(tmp_path):
    """An executable that behaves like Chrome as far as the supervisor can tell."""
    wrapper = tmp_path / "fake-chrome"
    wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{FAKE_CHROME_SCRIPT}" "$@"\n')
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(wrapper)


@pytest.fixture
def make_runner(tmp_root):
    """Builds runners with test-friendly timings and no SIGINT handler."""
    from chrome_runner import ChromeRunner

    def _make(**kwargs):
        kwargs.setdefault("handle_sigint", False)
        kwargs.setdefault("logger", logging.getLogger("tests.runner"))
        runner = ChromeRunner(**kwargs)
        runner.ready_poll_interval = 0.05
        runner.ready_max_retries = 100
        runner.restart_delay = 0.1
        return runner

    return _make


def workspace_dirs(root: Path):
    return [p for p in root.iterdir() if p.is_dir() and p.name.startswith("chrome-runner-")]


@pytest.fixture
def clean_env(monkeypatch):
    """Removes environment variables the finders look at."""
    for var in ("CHROME_PATH", "LOCALAPPDATA", "PROGRAMFILES", "PROGRAMFILES(X86)"):
        monkeypatch.delenv(var, raising=False)
    return os.environ
