# context_menu.py
"""
Switch Windows 11 Explorer to the classic (Windows 10 style) context menu.

Usage (from src/):
    python -m scripts.context_menu

The marker key is only ever created, never removed: running this again
once the classic menu is active does nothing besides reporting it.
"""
import sys
from dataclasses import dataclass

from core.results import ContextMenuError, MenuState, Outcome
from core.utils import init_console, print_status
from scripts.notify_options import NotifyIcon

NOTIFY_TIMEOUT_MS = 5000
TITLE = "Classic context menu"


@dataclass(frozen=True)
class ClassicMenuConfig:
    notify: bool = False


def _report(notifier, tag: str, message: str, icon: NotifyIcon):
    print_status(tag, message)
    if notifier is None:
        return
    try:
        notifier.notify(TITLE, message, icon, NOTIFY_TIMEOUT_MS)
    except Exception as e:
        # the registry/shell outcome stands even when the balloon cannot be shown
        print_status('WARN', f"Notification failed: {e}")


def enable_classic_context_menu(config: ClassicMenuConfig = ClassicMenuConfig(),
                                registry=None, shell=None, notifier=None) -> Outcome:
    """
    Enable the classic context menu and restart Explorer so it takes effect.

    Args:
        config: whether progress is shown as tray notifications.
        registry: object with probe() and enable_classic_menu(); defaults to
            scripts.classic_menu_registry.
        shell: object with restart_shell(); defaults to scripts.explorer_shell.
        notifier: object with notify(title, message, options, timeout);
            defaults to a TrayNotifier when config.notify is set.

    Returns:
        Outcome of the run. Failures are reported, never raised.
    """
    if registry is None:
        from scripts import classic_menu_registry as registry
    if shell is None:
        from scripts import explorer_shell as shell
    if not config.notify:
        notifier = None
    elif notifier is None:
        from scripts.tray_notify import TrayNotifier
        notifier = TrayNotifier(TITLE)

    if registry.probe() is MenuState.ENABLED:
        _report(notifier, 'INFO', "Classic context menu is already enabled.", NotifyIcon.INFO)
        return Outcome.ALREADY_ENABLED

    try:
        registry.enable_classic_menu()
    except ContextMenuError as e:
        _report(notifier, 'ERROR', str(e), NotifyIcon.ERROR)
        return Outcome.WRITE_FAILED
    print_status('OK', "Classic context menu registered.")

    try:
        shell.restart_shell()
    except ContextMenuError as e:
        _report(notifier, 'ERROR', str(e), NotifyIcon.ERROR)
        return Outcome.RESTART_FAILED

    _report(notifier, 'OK', "Classic context menu enabled, Explorer restarted.", NotifyIcon.INFO)
    return Outcome.ENABLED


def main() -> int:
    from scripts.tray_notify import TrayNotifier

    init_console()
    notifier = TrayNotifier(TITLE)
    try:
        outcome = enable_classic_context_menu(ClassicMenuConfig(notify=True), notifier=notifier)
        notifier.wait()
    finally:
        notifier.close()
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
