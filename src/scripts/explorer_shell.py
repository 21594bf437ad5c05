# explorer_shell.py
import subprocess
import time
from typing import Callable, List

import psutil
import pywintypes
import win32con
import win32gui
import win32process

from core.results import ShellRestartError
from core.utils import print_status

SHELL_EXECUTABLE = "explorer.exe"

# Top-level window classes owned by the shell
SHELL_WINDOW_CLASSES = (
    "CabinetWClass",  # File Explorer window (tabbed)
    "ExploreWClass",  # File Explorer window (legacy tree view)
    "Progman",        # desktop program manager
    "WorkerW",        # desktop worker / wallpaper host
    "#32770",         # generic shell dialog
)

CLOSE_SETTLE_DELAY = 0.5
RELEASE_DELAY = 1.0


def _is_shell_owned(hwnd) -> bool:
    _, pid = win32process.GetWindowThreadProcessId(hwnd)
    try:
        return psutil.Process(pid).name().lower() == SHELL_EXECUTABLE
    except psutil.Error:
        return False


def find_shell_windows() -> List[int]:
    """Return handles of top-level shell windows that should be closed before the kill."""
    found = []

    def _collect(hwnd, _):
        if win32gui.GetClassName(hwnd) in SHELL_WINDOW_CLASSES and _is_shell_owned(hwnd):
            found.append(hwnd)
        return True

    win32gui.EnumWindows(_collect, None)
    return found


def close_shell_windows() -> int:
    """Ask every shell window to close gracefully. Returns how many requests were posted."""
    posted = 0
    for hwnd in find_shell_windows():
        try:
            win32gui.PostMessage(hwnd, win32con.WM_CLOSE, 0, 0)
            posted += 1
        except pywintypes.error as e:
            # window went away between enumeration and post
            print_status('WARN', f"Could not close window {hwnd:#x}: {e.strerror}")
    return posted


def terminate_shell():
    """Force-kill every explorer.exe without flashing a console window."""
    subprocess.run(
        ["taskkill", "/f", "/im", SHELL_EXECUTABLE],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        creationflags=subprocess.CREATE_NO_WINDOW,
    )


def launch_shell():
    subprocess.Popen(
        [SHELL_EXECUTABLE],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        creationflags=subprocess.DETACHED_PROCESS,
    )


def is_shell_running() -> bool:
    for proc in psutil.process_iter(["name"]):
        name = proc.info.get("name") or ""
        if name.lower() == SHELL_EXECUTABLE:
            return True
    return False


def restart_shell(sleep: Callable[[float], None] = time.sleep) -> None:
    """
    Restart Windows Explorer so it re-reads the context menu registration.

    Windows are closed first, then the process is killed and started again.
    The delays give the OS time to tear down windows and release the process.

    Raises:
        ShellRestartError: if any step fails. Nothing is retried.
    """
    try:
        closed = close_shell_windows()
        print_status('INFO', f"Requested close of {closed} shell window(s).")
        sleep(CLOSE_SETTLE_DELAY)
        terminate_shell()
        sleep(RELEASE_DELAY)
        launch_shell()
    except Exception as e:
        raise ShellRestartError(f"Failed to restart {SHELL_EXECUTABLE}: {e}") from e
