"""
chrome-runner: launch and supervise a Chrome instance with remote debugging enabled.

Provides a ChromeRunner that finds Chrome, starts it in a private workspace,
waits for its debugging port, restarts it after unexpected exits and cleans
everything up on kill or SIGINT.
"""
from .errors import (  # noqa: F401
    ChromeRunnerError,
    ExecutableNotFoundError,
    ReadinessTimeoutError,
    TerminationSignalDeliveryError,
    UnsupportedPlatformError,
)
from .supervisor import ChromeRunner, ProbeResult  # noqa: F401
from .launcher import launch, launch_without_noise, launch_with_headless  # noqa: F401
