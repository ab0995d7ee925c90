"""
Entry points that create a ChromeRunner and launch it in one call.

Each accepts the ChromeRunner constructor arguments as keywords. The preset
variants put their own flags first so caller flags can still override them.
"""
from typing import Any, Optional, Sequence

from chrome_runner.chrome.flags import HEADLESS_FLAGS, NOISE_FLAGS
from chrome_runner.errors import ChromeRunnerError
from chrome_runner.supervisor import ChromeRunner


def _with_preset(preset: Sequence[str], chrome_flags: Optional[Sequence[str]]) -> list:
    return list(preset) + list(chrome_flags or [])


async def launch(**runner_options: Any) -> ChromeRunner:
    """
    Launches Chrome with the baseline flags plus any `chrome_flags` given.

    A failed launch kills any Chrome it started and removes its workspace
    before the error is re-raised.
    """
    runner = ChromeRunner(**runner_options)
    try:
        await runner.launch()
    except (ChromeRunnerError, OSError):
        await runner.kill()
        raise
    return runner


async def launch_without_noise(**runner_options: Any) -> ChromeRunner:
    """Launches Chrome with background-noise features turned off."""
    runner_options["chrome_flags"] = _with_preset(NOISE_FLAGS, runner_options.get("chrome_flags"))
    return await launch(**runner_options)


async def launch_with_headless(**runner_options: Any) -> ChromeRunner:
    """Launches a headless Chrome without GPU and with background-noise features turned off."""
    preset = tuple(NOISE_FLAGS) + tuple(HEADLESS_FLAGS)
    runner_options["chrome_flags"] = _with_preset(preset, runner_options.get("chrome_flags"))
    return await launch(**runner_options)
