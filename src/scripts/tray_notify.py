# tray_notify.py
"""
Transient notification-area balloons with optional auto-hide.

A hidden window hosts one tray icon; every notification is shown as a
balloon on that icon. When a timeout is given, a one-shot HideTask removes
the balloon later. Some shells keep a balloon on screen even after it is
cleared, so hide() also toggles the icon and forces a redraw of the
notification area.

Requires: pywin32 (pip install pywin32)
"""
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import pywintypes
import win32api
import win32con
import win32gui

from core.utils import print_status
from scripts.notify_options import LegacyOptions, NotifyOptions, parse_notify_options

WM_TRAY_CALLBACK = win32con.WM_USER + 20
ICON_TOGGLE_DELAY = 0.5

_WINDOW_CLASS = "ClassicContextMenuNotifier"
_class_atom = None


class NotificationState(Enum):
    CREATED = 1
    DISPLAYED = 2
    PERSISTED = 3      # no timeout, stays until the OS drops it
    TIMER_ARMED = 4
    HIDDEN = 5


class HideTask:
    """One-shot deferred call. Fires at most once and can be cancelled before that."""

    def __init__(self, delay_ms: int, callback: Callable[[], None]):
        self.delay_ms = delay_ms
        self._callback = callback
        self._fired = threading.Event()
        self._timer = threading.Timer(delay_ms / 1000, self._run)

    def _run(self):
        self._fired.set()
        self._callback()

    def start(self):
        self._timer.start()

    def cancel(self):
        self._timer.cancel()

    def join(self, timeout: Optional[float] = None):
        self._timer.join(timeout)

    @property
    def thread(self) -> threading.Thread:
        return self._timer

    @property
    def fired(self) -> bool:
        return self._fired.is_set()

    @property
    def pending(self) -> bool:
        return self._timer.is_alive() and not self.fired


@dataclass
class Notification:
    title: str
    message: str
    options: NotifyOptions
    state: NotificationState = NotificationState.CREATED
    hide_task: Optional[HideTask] = None


def _register_window_class() -> int:
    global _class_atom
    if _class_atom is None:
        wc = win32gui.WNDCLASS()
        wc.hInstance = win32api.GetModuleHandle(None)
        wc.lpszClassName = _WINDOW_CLASS
        wc.lpfnWndProc = {}
        _class_atom = win32gui.RegisterClass(wc)
    return _class_atom


class TrayNotifier:
    def __init__(self, app_name: str = "Classic context menu", sleep: Callable[[float], None] = time.sleep):
        self.app_name = app_name
        self._sleep = sleep
        self._hwnd = None
        self._hicon = None
        self._tasks: List[HideTask] = []
        # serialises icon changes between the caller and hide timers
        self._lock = threading.Lock()

    # Host window / icon -------------------------------------------------
    def _base_icon_data(self, hwnd):
        return (
            hwnd,
            0,
            win32gui.NIF_ICON | win32gui.NIF_MESSAGE | win32gui.NIF_TIP,
            WM_TRAY_CALLBACK,
            self._hicon,
            self.app_name,
        )

    def _ensure_icon(self):
        if self._hwnd is not None:
            return
        atom = _register_window_class()
        hwnd = win32gui.CreateWindow(
            atom, self.app_name, win32con.WS_OVERLAPPED,
            0, 0, win32con.CW_USEDEFAULT, win32con.CW_USEDEFAULT,
            0, 0, win32api.GetModuleHandle(None), None,
        )
        self._hicon = win32gui.LoadIcon(0, win32con.IDI_APPLICATION)
        try:
            win32gui.Shell_NotifyIcon(win32gui.NIM_ADD, self._base_icon_data(hwnd))
        except pywintypes.error:
            # retried with a fresh window on the next notify
            win32gui.DestroyWindow(hwnd)
            raise
        self._hwnd = hwnd

    def _set_balloon(self, hwnd, title: str, message: str, flags: int):
        win32gui.Shell_NotifyIcon(
            win32gui.NIM_MODIFY,
            (hwnd, 0, win32gui.NIF_INFO, WM_TRAY_CALLBACK, self._hicon,
             self.app_name, message[:255], 0, title[:63], flags),
        )

    # Public API ---------------------------------------------------------
    def notify(self, title: str, message: str = "", options: LegacyOptions = None,
               timeout: Optional[int] = None) -> Notification:
        """
        Show a balloon in the notification area.

        Args:
            title: balloon title.
            message: balloon body.
            options: NotifyIcon / NotifyOptions, native NIIF_* flags, or a
                legacy flags string which may carry `T<seconds>` and textual
                selectors (`Iconi`, `Icon!`, `Iconx`, `Mute`).
            timeout: auto-hide delay in milliseconds.

        Returns:
            Notification describing this balloon's lifecycle. It stays
            CREATED when the shell refused the balloon (e.g. no taskbar yet).
        """
        resolved = parse_notify_options(options, timeout)
        notification = Notification(title, message, resolved)

        with self._lock:
            try:
                self._ensure_icon()
                # An empty body is not shown by the shell
                self._set_balloon(self._hwnd, title, message or " ", resolved.flags)
            except pywintypes.error as e:
                print_status('WARN', f"Notification not shown: {e.strerror}")
                return notification
        notification.state = NotificationState.DISPLAYED

        if not resolved.timeout_ms:
            notification.state = NotificationState.PERSISTED
            return notification

        def _expire():
            try:
                self.hide()
            except pywintypes.error as e:
                print_status('WARN', f"Notification not hidden: {e.strerror}")
                return
            notification.state = NotificationState.HIDDEN

        task = HideTask(resolved.timeout_ms, _expire)
        notification.hide_task = task
        notification.state = NotificationState.TIMER_ARMED
        self._tasks = [t for t in self._tasks if t.pending] + [task]
        task.start()
        return notification

    def hide(self):
        """Force the current balloon off screen."""
        with self._lock:
            hwnd = self._hwnd
            if hwnd is None:
                return

            win32gui.Shell_NotifyIcon(win32gui.NIM_DELETE, (hwnd, 0))
            self._sleep(ICON_TOGGLE_DELAY)
            win32gui.Shell_NotifyIcon(win32gui.NIM_ADD, self._base_icon_data(hwnd))

            self._set_balloon(hwnd, "", "", 0)
            self._redraw(hwnd)

    def _redraw(self, hwnd):
        try:
            tray = win32gui.FindWindow("Shell_TrayWnd", None)
            notify_area = win32gui.FindWindowEx(tray, 0, "TrayNotifyWnd", None)
        except pywintypes.error as e:
            # taskbar is gone while Explorer restarts
            print_status('WARN', f"Notification area not found: {e.strerror}")
        else:
            win32gui.RedrawWindow(
                notify_area, None, None,
                win32con.RDW_INVALIDATE | win32con.RDW_ERASE | win32con.RDW_UPDATENOW | win32con.RDW_ALLCHILDREN,
            )
        win32gui.InvalidateRect(hwnd, None, True)

    def wait(self):
        """Block until every armed hide has fired."""
        for task in list(self._tasks):
            task.join()

    def close(self):
        """Cancel pending hides, let a running one finish, then remove the icon."""
        tasks, self._tasks = self._tasks, []
        current = threading.current_thread()
        for task in tasks:
            task.cancel()
            if task.thread is not current:
                task.join()

        with self._lock:
            hwnd, self._hwnd = self._hwnd, None
            if hwnd is None:
                return
            win32gui.Shell_NotifyIcon(win32gui.NIM_DELETE, (hwnd, 0))
            win32gui.DestroyWindow(hwnd)
