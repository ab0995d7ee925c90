import sys
import asyncio
import logging
import argparse
from typing import List, Optional

import setproctitle

from chrome_runner import launcher
from chrome_runner.config import effective_settings as config
from chrome_runner.chrome.finder import find_chrome_installations
from chrome_runner.errors import ChromeRunnerError
from chrome_runner.log import get_log_level, setup_logging

log = logging.getLogger("console")

PROCESS_TITLE = "Chrome Runner - Supervisor"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chrome-runner",
        description="Launch Chrome with remote debugging and keep it running until interrupted.",
        epilog="Extra Chrome flags go after '--', e.g. chrome-runner --port 9222 -- --window-size=800,600",
    )
    parser.add_argument("--port", type=int, default=None, help="debugging port to adopt or bind (default: random free port)")
    parser.add_argument("--chrome-path", default=None, help="Chrome executable to use instead of discovering one")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--quiet", action="store_true", help="disable background-noise features")
    mode.add_argument("--headless", action="store_true", help="run headless without GPU (implies --quiet)")
    parser.add_argument("--list", action="store_true", help="list discovered Chrome installations and exit")
    parser.add_argument(
        "--set", dest="settings", action="append", default=[], metavar="KEY=VALUE",
        help="save a setting to the overrides file and exit (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="log at DEBUG level")
    parser.add_argument("chrome_flags", nargs="*", help="extra flags passed to Chrome")
    return parser


def list_installations() -> int:
    """Prints discovered installations, preferred first. Returns the exit code."""
    installations = find_chrome_installations()
    if not installations:
        print("No Chrome installations found.")
        return 1
    for path in installations:
        print(path)
    return 0


def save_settings(assignments: List[str]) -> int:
    """
    Persists `KEY=VALUE` assignments to the overrides file. Returns the exit code.

    :param assignments: Raw assignments from the command line. Keys are case-insensitive.
    """
    overrides = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        key = key.strip().upper()
        if not sep or key not in config.MODIFIABLE_SETTINGS:
            modifiable = ", ".join(sorted(config.MODIFIABLE_SETTINGS))
            log.error(f"Cannot set '{assignment}'. Modifiable settings: {modifiable}")
            return 1
        log.info(f"{key}: {config.get(key)!r} -> {value!r}")
        overrides[key] = value

    return 0 if config.save_overrides(overrides) else 1


async def run(args: argparse.Namespace) -> None:
    """Launches Chrome per the parsed arguments and blocks until cancelled or interrupted."""
    if args.headless:
        launch = launcher.launch_with_headless
    elif args.quiet:
        launch = launcher.launch_without_noise
    else:
        launch = launcher.launch

    runner = await launch(port=args.port, chrome_path=args.chrome_path, chrome_flags=args.chrome_flags)
    try:
        log.info(f"Chrome debugging endpoint: {runner.debug_url}")
        log.info("Press Ctrl+C to stop.")
        await asyncio.Event().wait()
    finally:
        await runner.kill()


def main(argv: Optional[List[str]] = None) -> int:
    """The main entry point for the command line."""
    args = build_parser().parse_args(argv)

    setproctitle.setproctitle(PROCESS_TITLE)
    setup_logging(logging.DEBUG if args.verbose else get_log_level())

    if args.list:
        return list_installations()
    if args.settings:
        return save_settings(args.settings)

    try:
        asyncio.run(run(args))
    except (ChromeRunnerError, OSError) as e:
        log.error(f"Chrome Runner failed: {e}")
        return 1
    except KeyboardInterrupt:
        log.warning("Interrupted.")
        return config.SIGINT_EXIT_CODE
    return 0


if __name__ == "__main__":
    sys.exit(main())
