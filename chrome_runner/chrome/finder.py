"""
Per-platform discovery of installed Chrome/Chromium executables.

Each finder returns an ordered list of candidate paths, preferred first.
An empty list means nothing was found.
"""
import os
import sys
import shutil
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

log = logging.getLogger(__name__)

#* --- Candidate Locations ---
DARWIN_APP_SUFFIXES = (
    ("Google Chrome Canary.app", "Contents", "MacOS", "Google Chrome Canary"),
    ("Google Chrome.app", "Contents", "MacOS", "Google Chrome"),
    ("Chromium.app", "Contents", "MacOS", "Chromium"),
)

LINUX_EXECUTABLES = (
    "google-chrome-stable",
    "google-chrome",
    "chromium-browser",
    "chromium",
)

LINUX_DESKTOP_DIRS = (
    Path("/usr/share/applications"),
    Path("/usr/local/share/applications"),
    Path.home() / ".local" / "share" / "applications",
)

WIN32_PREFIX_VARS = ("LOCALAPPDATA", "PROGRAMFILES", "PROGRAMFILES(X86)")
WIN32_SUFFIXES = (
    ("Google", "Chrome SxS", "Application", "chrome.exe"),
    ("Google", "Chrome", "Application", "chrome.exe"),
    ("Chromium", "Application", "chrome.exe"),
)


def _is_executable(path: str) -> bool:
    if not os.path.isfile(path):
        return False
    return sys.platform == "win32" or os.access(path, os.X_OK)


def _unique(paths: Iterable[str]) -> List[str]:
    """De-duplicates while keeping the first-seen order."""
    seen = set()
    result = []
    for path in paths:
        if path and path not in seen:
            seen.add(path)
            result.append(path)
    return result


def _from_env() -> List[str]:
    """Returns CHROME_PATH as a candidate if it points at an existing file."""
    env_path = os.environ.get("CHROME_PATH")
    if env_path and os.path.isfile(env_path):
        return [env_path]
    if env_path:
        log.warning(f"CHROME_PATH is set to '{env_path}' but no such file exists. Ignoring.")
    return []


def darwin() -> List[str]:
    """Finds Chrome app bundles under /Applications and ~/Applications."""
    roots = (Path("/Applications"), Path.home() / "Applications")
    candidates = _from_env()
    for suffix in DARWIN_APP_SUFFIXES:
        for root in roots:
            path = str(root.joinpath(*suffix))
            if _is_executable(path):
                candidates.append(path)
    return _unique(candidates)


def _desktop_file_targets(directories: Iterable[Path]) -> List[str]:
    """Extracts the executables named by `Exec=` lines of chrome/chromium desktop files."""
    targets = []
    for directory in directories:
        if not directory.is_dir():
            continue
        for desktop_file in sorted(directory.glob("*.desktop")):
            name = desktop_file.name.lower()
            if "chrome" not in name and "chromium" not in name:
                continue
            try:
                lines = desktop_file.read_text(encoding="utf-8", errors="replace").splitlines()
            except OSError as e:
                log.debug(f"Could not read desktop file {desktop_file}: {e}")
                continue
            for line in lines:
                if not line.startswith("Exec="):
                    continue
                parts = line[len("Exec="):].split()
                if parts and _is_executable(parts[0]):
                    targets.append(parts[0])
    return targets


def linux(desktop_dirs: Optional[Iterable[Path]] = None) -> List[str]:
    """Finds Chrome on PATH, then through installed desktop entries."""
    candidates = _from_env()
    for executable in LINUX_EXECUTABLES:
        path = shutil.which(executable)
        if path:
            candidates.append(path)
    if desktop_dirs is None:
        desktop_dirs = LINUX_DESKTOP_DIRS
    candidates.extend(_desktop_file_targets(desktop_dirs))
    return _unique(candidates)


def win32() -> List[str]:
    """Finds Chrome under the per-user and machine-wide program directories."""
    candidates = _from_env()
    for suffix in WIN32_SUFFIXES:
        for var in WIN32_PREFIX_VARS:
            prefix = os.environ.get(var)
            if not prefix:
                continue
            path = str(Path(prefix).joinpath(*suffix))
            if os.path.isfile(path):
                candidates.append(path)
    return _unique(candidates)


FINDERS: Dict[str, Callable[[], List[str]]] = {
    "darwin": darwin,
    "linux": linux,
    "win32": win32,
}


def find_chrome_installations(platform: Optional[str] = None) -> List[str]:
    """
    Runs the finder for the given (or current) platform.

    :param platform: A `sys.platform` value. Defaults to the running platform.
    :return: Candidate executable paths, preferred first. Empty for unknown platforms.
    """
    platform = platform or sys.platform
    finder = FINDERS.get(platform)
    if finder is None:
        log.warning(f"No Chrome finder available for platform '{platform}'.")
        return []
    installations = finder()
    log.debug(f"Found {len(installations)} Chrome installation(s): {installations}")
    return installations
