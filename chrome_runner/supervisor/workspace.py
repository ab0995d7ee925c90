import shutil
import logging
import tempfile
from pathlib import Path
from typing import IO, Optional

from chrome_runner import settings

log = logging.getLogger(__name__)


class Workspace:
    """
    The private temp directory of one Chrome session.

    It doubles as Chrome's user data dir and holds the captured stdout/stderr
    logs and the pid file. All three files are opened on creation and closed,
    together with the directory's removal, by `destroy`.
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self.out_log_path = self.data_dir / settings.CHROME_OUT_LOG_NAME
        self.err_log_path = self.data_dir / settings.CHROME_ERR_LOG_NAME
        self.pid_file_path = self.data_dir / settings.CHROME_PID_FILE_NAME

        self.stdout_log: Optional[IO[bytes]] = self.out_log_path.open("ab")
        self.stderr_log: Optional[IO[bytes]] = self.err_log_path.open("ab")
        self.pid_file: Optional[IO[str]] = self.pid_file_path.open("a")

    @classmethod
    def create(cls, prefix: str = settings.TMP_DIR_PREFIX) -> "Workspace":
        """
        Creates a fresh temp directory and opens the session files in it.

        :param prefix: Name prefix of the temp directory.
        :return: The new workspace.
        """
        data_dir = Path(tempfile.mkdtemp(prefix=prefix))
        workspace = cls(data_dir)
        log.info(f"Created chrome data dir {data_dir}")
        return workspace

    def write_pid(self, pid: int) -> None:
        """
        Replaces the contents of the pid file with the given PID.

        :param pid: The process ID of the running Chrome.
        """
        if self.pid_file is None:
            log.warning(f"PID file already closed, cannot record PID {pid}.")
            return
        self.pid_file.truncate(0)
        self.pid_file.write(str(pid))
        self.pid_file.flush()

    def close_files(self) -> None:
        """Closes the log and pid file handles. Safe to call repeatedly."""
        for attr in ("stdout_log", "stderr_log", "pid_file"):
            handle = getattr(self, attr)
            if handle is not None:
                handle.close()
                setattr(self, attr, None)

    def destroy(self) -> None:
        """Closes all handles and recursively removes the directory."""
        self.close_files()
        shutil.rmtree(self.data_dir, ignore_errors=True)
        log.debug(f"Removed chrome data dir {self.data_dir}")
