"""Tests for the Chrome command-line builder."""
from chrome_runner.chrome.flags import DEFAULT_FLAGS, build_flags


def test_flags_end_with_blank_page():
    flags = build_flags(9222, "/tmp/profile", ["--window-size=800,600"], platform="darwin")
    assert flags[-1] == "about:blank"


def test_flags_bind_port_and_user_data_dir():
    flags = build_flags(9333, "/tmp/profile", platform="darwin")
    assert "--remote-debugging-port=9333" in flags
    assert "--user-data-dir=/tmp/profile" in flags


def test_baseline_flags_come_first():
    flags = build_flags(9222, "/tmp/profile", platform="win32")
    assert flags[:len(DEFAULT_FLAGS)] == list(DEFAULT_FLAGS)


def test_setuid_sandbox_flag_only_on_linux():
    assert "--disable-setuid-sandbox" in build_flags(9222, "/p", platform="linux")
    assert "--disable-setuid-sandbox" not in build_flags(9222, "/p", platform="darwin")
    assert "--disable-setuid-sandbox" not in build_flags(9222, "/p", platform="win32")


def test_caller_flags_follow_generated_flags():
    flags = build_flags(9222, "/p", ["--headless", "--remote-debugging-port=1"], platform="linux")
    assert flags[-3:] == ["--headless", "--remote-debugging-port=1", "about:blank"]
    assert flags.index("--disable-setuid-sandbox") < flags.index("--headless")
