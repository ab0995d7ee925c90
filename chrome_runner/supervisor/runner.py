import sys
import signal
import asyncio
import logging
from typing import Callable, List, Optional, Sequence

from chrome_runner.config import effective_settings as config
from chrome_runner.chrome.finder import find_chrome_installations
from chrome_runner.chrome.flags import build_flags
from chrome_runner.errors import (
    ChromeRunnerError,
    ExecutableNotFoundError,
    ReadinessTimeoutError,
    TerminationSignalDeliveryError,
    UnsupportedPlatformError,
)
from chrome_runner.supervisor import network, process_utils
from chrome_runner.supervisor.network import ProbeResult
from chrome_runner.supervisor.workspace import Workspace

log = logging.getLogger(__name__)


class ChromeRunner:
    """
    Supervises a single Chrome process with remote debugging enabled.

    `launch()` either adopts a Chrome already listening on the given port or
    prepares a private workspace, starts Chrome and waits until its debugging
    port accepts connections. While running, an unexpected exit triggers a
    restart after `restart_delay` seconds. `kill()` stops Chrome and every
    process it spawned and removes the workspace.
    """

    def __init__(
        self,
        port: Optional[int] = None,
        chrome_path: Optional[str] = None,
        chrome_flags: Optional[Sequence[str]] = None,
        *,
        logger: Optional[logging.Logger] = None,
        finder: Optional[Callable[[], List[str]]] = None,
        handle_sigint: bool = True,
        host: Optional[str] = None,
    ) -> None:
        """
        :param port: Debugging port to adopt or bind. A free port is chosen at spawn time if unset.
        :param chrome_path: Chrome executable. Discovered with `finder` if unset.
        :param chrome_flags: Extra flags appended after the generated ones.
        :param logger: Logger to report to. Defaults to this module's logger.
        :param finder: Callable returning candidate executables, preferred first.
        :param handle_sigint: Kill Chrome and exit with status 130 on SIGINT.
        :param host: Host used for reachability probes.
        """
        self.port: int = port or 0
        self.chrome_path = chrome_path
        self.chrome_flags: List[str] = list(chrome_flags or [])
        self.log = logger or log
        self.host = host or config.DEBUG_HOST

        self.ready_max_retries: int = config.READY_MAX_RETRIES
        self.ready_poll_interval: float = config.READY_POLL_INTERVAL
        self.probe_timeout: float = config.PROBE_TIMEOUT
        self.restart_delay: float = config.RESTART_DELAY

        self._finder = finder or find_chrome_installations
        self._sigint_enabled = handle_sigint

        self.tmp_ready = False
        self.workspace: Optional[Workspace] = None
        self.process: Optional[asyncio.subprocess.Process] = None
        self.shutdown_requested = False
        self.adopted = False

        self._exit_watcher: Optional[asyncio.Task] = None
        self._restart_task: Optional[asyncio.Task] = None
        self._sigint_task: Optional[asyncio.Task] = None
        self._sigint_mode: Optional[str] = None
        self._previous_sigint_handler = None

    async def __aenter__(self) -> "ChromeRunner":
        return await self.launch()

    async def __aexit__(self, *exc) -> None:
        await self.kill()

    @property
    def pid(self) -> Optional[int]:
        return self.process.pid if self.process is not None else None

    @property
    def debug_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def flags(self) -> List[str]:
        """The Chrome arguments for the current port and workspace."""
        user_data_dir = str(self.workspace.data_dir) if self.workspace is not None else ""
        return build_flags(self.port, user_data_dir, self.chrome_flags)

    #* --- Launch ---
    async def launch(self) -> "ChromeRunner":
        """
        Adopts or starts Chrome and returns once its debugging port is reachable.

        :return: This runner.
        :raises UnsupportedPlatformError: If the OS is not supported.
        :raises ExecutableNotFoundError: If no Chrome path was given and none was found.
        :raises ReadinessTimeoutError: If Chrome never became reachable.
        """
        if self.shutdown_requested:
            raise ChromeRunnerError("runner has already been killed, create a new one")

        if self.port:
            if await self.is_debug_ready() is ProbeResult.REACHABLE:
                self.adopted = True
                self.log.info(f"Chrome already listening on port {self.port}, adopting it.")
                return self
            self.log.warning(f"No Chrome found on port {self.port}, launching a new Chrome.")

        self.prepare()

        if not self.chrome_path:
            loop = asyncio.get_running_loop()
            installations = await loop.run_in_executor(None, self._finder)
            if not installations:
                raise ExecutableNotFoundError()
            self.chrome_path = installations[0]
            self.log.info(f"Using Chrome found at {self.chrome_path}")

        await self.spawn()
        return self

    def prepare(self) -> None:
        """
        Creates the workspace once per runner.

        :raises UnsupportedPlatformError: If the OS is not supported.
        """
        if self.tmp_ready:
            return

        platform = sys.platform
        if platform not in config.SUPPORTED_PLATFORMS:
            raise UnsupportedPlatformError(platform)

        self.workspace = Workspace.create(config.TMP_DIR_PREFIX)
        self.tmp_ready = True

    async def spawn(self) -> int:
        """
        Starts Chrome unless a process is already tracked, then waits for readiness.

        :return: The PID of the tracked Chrome process.
        """
        if self.process is not None:
            self.log.info(f"Chrome already running with PID {self.process.pid}.")
            return self.process.pid

        self.prepare()
        if not self.port:
            self.port = network.get_random_port(self.host)

        process = await asyncio.create_subprocess_exec(
            self.chrome_path,
            *self.flags,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=self.workspace.stdout_log,
            stderr=self.workspace.stderr_log,
            **process_utils.get_spawn_kwargs(),
        )
        self.process = process
        self._register_sigint_handler()
        self._watch_exit(process)
        self.workspace.write_pid(process.pid)
        self.log.info(f"Chrome running with PID {process.pid} on port {self.port}.")

        await self.wait_until_ready()
        return process.pid

    #* --- Readiness ---
    async def is_debug_ready(self) -> ProbeResult:
        return await network.is_port_open(self.port, self.host, self.probe_timeout)

    async def wait_until_ready(self) -> None:
        """
        Polls the debugging port until it accepts connections.

        Makes one initial attempt plus `ready_max_retries` retries, sleeping
        `ready_poll_interval` seconds after each failure except the last.

        :raises ReadinessTimeoutError: After the final failed attempt.
        """
        self.log.info(f"Waiting until Chrome is ready on port {self.port}...")
        attempts = 0
        while True:
            attempts += 1
            if await self.is_debug_ready() is ProbeResult.REACHABLE:
                self.log.info(f"Chrome is ready on port {self.port}.")
                return
            if attempts > self.ready_max_retries:
                raise ReadinessTimeoutError(self.port, attempts)
            await asyncio.sleep(self.ready_poll_interval)

    #* --- Unexpected Exit ---
    def _watch_exit(self, process: asyncio.subprocess.Process) -> None:
        self._exit_watcher = asyncio.get_running_loop().create_task(self._on_exit(process))

    async def _on_exit(self, process: asyncio.subprocess.Process) -> None:
        returncode = await process.wait()
        if self.shutdown_requested:
            return
        if self.process is process:
            self.process = None
        self.log.warning(
            f"Chrome (PID {process.pid}) exited unexpectedly with code {returncode}, "
            f"restarting it in {self.restart_delay}s."
        )
        self._restart_task = asyncio.get_running_loop().create_task(self._restart())

    async def _restart(self) -> None:
        await asyncio.sleep(self.restart_delay)
        if self.shutdown_requested:
            return
        try:
            await self.spawn()
        except (ChromeRunnerError, OSError) as e:
            self.log.error(f"Failed to restart Chrome: {e}", exc_info=True)

    #* --- Shutdown ---
    async def kill(self) -> None:
        """
        Stops Chrome with its whole process tree and removes the workspace.

        Without a tracked process, for example while a restart is pending or
        after a failed launch, only the workspace is removed.
        """
        self.shutdown_requested = True
        self._cancel_background_tasks()

        process = self.process
        if process is None:
            self.destroy_tmp()
            self._remove_sigint_handler()
            return
        self.process = None

        self.log.info("Killing all Chrome instances")
        try:
            process_utils.terminate_process_tree(process.pid)
        except TerminationSignalDeliveryError as e:
            self.log.error(f"Chrome could not be killed: {e}")

        await process.wait()
        self.destroy_tmp()
        self._remove_sigint_handler()

    def destroy_tmp(self) -> None:
        """Closes the session files and removes the workspace. Safe to call repeatedly."""
        if self.workspace is not None:
            self.workspace.destroy()

    def _cancel_background_tasks(self) -> None:
        for task in (self._exit_watcher, self._restart_task):
            if task is not None and not task.done() and task is not asyncio.current_task():
                task.cancel()
        self._exit_watcher = None
        self._restart_task = None

    #* --- SIGINT ---
    def _register_sigint_handler(self) -> None:
        if not self._sigint_enabled or self._sigint_mode is not None:
            return

        loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(signal.SIGINT, self._on_sigint)
            self._sigint_mode = "loop"
            return
        except NotImplementedError:
            pass  # Windows event loops have no add_signal_handler
        except (RuntimeError, ValueError) as e:
            self.log.warning(f"Cannot install SIGINT handler: {e}")
            return

        try:
            self._previous_sigint_handler = signal.signal(
                signal.SIGINT, lambda signum, frame: loop.call_soon_threadsafe(self._on_sigint)
            )
            self._sigint_mode = "signal"
        except ValueError as e:
            self.log.warning(f"Cannot install SIGINT handler: {e}")

    def _remove_sigint_handler(self) -> None:
        if self._sigint_mode == "loop":
            asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)
        elif self._sigint_mode == "signal":
            previous = self._previous_sigint_handler
            signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)
            self._previous_sigint_handler = None
        self._sigint_mode = None

    def _on_sigint(self) -> None:
        if self._sigint_task is None:
            self._sigint_task = asyncio.get_running_loop().create_task(self._handle_sigint())

    async def _handle_sigint(self) -> None:
        self.log.warning("Received SIGINT, killing Chrome before exiting.")
        await self.kill()
        raise SystemExit(config.SIGINT_EXIT_CODE)
