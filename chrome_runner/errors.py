"""Exceptions raised while supervising a Chrome process."""
from typing import Optional


class ChromeRunnerError(Exception):
    """Base class for every error raised by chrome_runner."""


class UnsupportedPlatformError(ChromeRunnerError):
    """The current operating system is not one Chrome Runner knows how to drive."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"platform {platform} is not supported")


class ExecutableNotFoundError(ChromeRunnerError):
    """No Chrome path was given and discovery found no installation."""

    def __init__(self, message: str = "no chrome installations found"):
        super().__init__(message)


class ReadinessTimeoutError(ChromeRunnerError, TimeoutError):
    """The debugging port never accepted a connection within the poll budget."""

    def __init__(self, port: int, attempts: int):
        self.port = port
        self.attempts = attempts
        super().__init__(f"chrome not reachable on port {port} after {attempts} attempts")


class TerminationSignalDeliveryError(ChromeRunnerError):
    """The OS refused or failed the forceful kill request."""

    def __init__(self, pid: int, reason: Optional[str] = None):
        self.pid = pid
        message = f"could not terminate process tree of PID {pid}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
