"""
The Supervisor package.
Manages the lifecycle of a single Chrome process.

This package contains the central ChromeRunner class and its helper modules,
which together handle preparing the workspace, spawning Chrome, polling its
debugging port, restarting it after unexpected exits and tearing it down.
"""
from .runner import ChromeRunner
from .network import ProbeResult

__all__ = ['ChromeRunner', 'ProbeResult']
