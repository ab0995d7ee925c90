"""Command-line flag sets passed to Chrome."""
import sys
from typing import List, Optional, Sequence

# Automation-friendly baseline applied to every launch.
DEFAULT_FLAGS = (
    "--disable-translate",
    "--disable-extensions",
    "--disable-background-networking",
    "--safebrowsing-disable-auto-update",
    "--disable-sync",
    "--metrics-recording-only",
    "--disable-default-apps",
    "--mute-audio",
    "--no-first-run",
)

# Background features that make automated sessions noisy or flaky.
NOISE_FLAGS = (
    "--disable-client-side-phishing-detection",
    "--disable-component-update",
    "--disable-popup-blocking",
    "--disable-prompt-on-repost",
    "--disable-hang-monitor",
    "--disable-background-timer-throttling",
    "--disable-renderer-backgrounding",
    "--disable-device-discovery-notifications",
)

HEADLESS_FLAGS = (
    "--headless",
    "--disable-gpu",
)

BLANK_PAGE = "about:blank"


def build_flags(
    port: int,
    user_data_dir: str,
    extra_flags: Optional[Sequence[str]] = None,
    platform: Optional[str] = None,
) -> List[str]:
    """
    Builds the full argument list for a Chrome launch.

    Caller flags come after the generated ones so that Chrome's last-wins
    handling lets them override, and the blank page is always the final argument.

    :param port: Remote debugging port.
    :param user_data_dir: Profile directory for this session.
    :param extra_flags: Caller flags appended verbatim.
    :param platform: A `sys.platform` value. Defaults to the running platform.
    :return: The argument list, without the executable.
    """
    platform = platform or sys.platform
    flags = list(DEFAULT_FLAGS)
    flags.append(f"--remote-debugging-port={port}")
    flags.append(f"--user-data-dir={user_data_dir}")

    if platform.startswith("linux"):
        flags.append("--disable-setuid-sandbox")

    flags.extend(extra_flags or ())
    flags.append(BLANK_PAGE)
    return flags
