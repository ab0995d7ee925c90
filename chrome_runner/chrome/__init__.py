"""
Chrome-specific collaborators of the supervisor: executable discovery
and the command-line flag sets.
"""
from .finder import find_chrome_installations
from .flags import DEFAULT_FLAGS, NOISE_FLAGS, HEADLESS_FLAGS, build_flags

__all__ = ["find_chrome_installations", "DEFAULT_FLAGS", "NOISE_FLAGS", "HEADLESS_FLAGS", "build_flags"]
