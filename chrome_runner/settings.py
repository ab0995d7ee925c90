"""
This module contains the default configuration settings for Chrome Runner.
It defines supervision timings, workspace naming, logging options and the
location of the runtime overrides file.
"""

import os
import pathlib
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

#* --- Core Paths ---
HOME_DIR = pathlib.Path.home() / ".chrome-runner"
OVERRIDES_JSON_PATH = pathlib.Path(
    os.getenv("CHROME_RUNNER_OVERRIDES", str(HOME_DIR / "overrides.json"))
)

#* --- Platform Support ---
SUPPORTED_PLATFORMS = frozenset({"darwin", "linux", "win32"})

#* --- Workspace Settings ---
TMP_DIR_PREFIX = "chrome-runner-"
CHROME_OUT_LOG_NAME = "chrome-out.log"
CHROME_ERR_LOG_NAME = "chrome-err.log"
CHROME_PID_FILE_NAME = "chrome.pid"

#* --- Supervisor Settings ---
DEBUG_HOST = os.getenv("CHROME_RUNNER_HOST", "127.0.0.1")
READY_MAX_RETRIES = int(os.getenv("CHROME_RUNNER_READY_RETRIES", "10"))
READY_POLL_INTERVAL = float(os.getenv("CHROME_RUNNER_READY_INTERVAL", "0.5"))  # seconds
PROBE_TIMEOUT = 1.0  # seconds per TCP connect attempt
RESTART_DELAY = float(os.getenv("CHROME_RUNNER_RESTART_DELAY", "1.0"))  # seconds
SIGINT_EXIT_CODE = 130  # 128 + SIGINT

#* --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("CHROME_RUNNER_LOG_FILE", "")
LOG_FORMAT = "%(asctime)s - %(levelname)-8s - [%(name)s] - %(message)s"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3

#* --- MODIFIABLE SETTINGS (Changeable through the overrides file) ---
MODIFIABLE_SETTINGS = {
    "DEBUG_HOST",
    "READY_MAX_RETRIES",
    "READY_POLL_INTERVAL",
    "PROBE_TIMEOUT",
    "RESTART_DELAY",
    "LOG_LEVEL",
    "LOG_FILE",
}
