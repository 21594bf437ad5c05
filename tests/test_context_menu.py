"""
Unit tests for the enable sequence, using in-memory registry and shell fakes.
"""

import pytest
from unittest.mock import MagicMock

from core.results import MenuState, Outcome, RegistryWriteError, ShellRestartError
from scripts.context_menu import TITLE, ClassicMenuConfig, enable_classic_context_menu
from scripts.notify_options import NotifyIcon


class FakeRegistry:
    def __init__(self, enabled=False, error=None):
        self.enabled = enabled
        self.error = error
        self.writes = 0

    def probe(self):
        return MenuState.ENABLED if self.enabled else MenuState.DISABLED

    def enable_classic_menu(self):
        self.writes += 1
        if self.error is not None:
            raise self.error
        self.enabled = True


class FakeShell:
    def __init__(self, error=None):
        self.error = error
        self.restarts = 0

    def restart_shell(self):
        self.restarts += 1
        if self.error is not None:
            raise self.error


@pytest.fixture
def notifier():
    return MagicMock()


def test_fresh_environment_enables_and_restarts(notifier):
    """Marker absent: the key is written, Explorer restarted and the user told."""
    registry, shell = FakeRegistry(), FakeShell()

    outcome = enable_classic_context_menu(ClassicMenuConfig(notify=True), registry, shell, notifier)

    assert outcome is Outcome.ENABLED
    assert registry.writes == 1
    assert shell.restarts == 1
    assert registry.probe() is MenuState.ENABLED
    notifier.notify.assert_called_once()
    assert notifier.notify.call_args.args[0] == TITLE
    assert notifier.notify.call_args.args[2] is NotifyIcon.INFO


def test_already_enabled_does_nothing(notifier):
    """Running again once enabled must not write or restart anything."""
    registry, shell = FakeRegistry(enabled=True), FakeShell()

    outcome = enable_classic_context_menu(ClassicMenuConfig(notify=True), registry, shell, notifier)

    assert outcome is Outcome.ALREADY_ENABLED
    assert registry.writes == 0
    assert shell.restarts == 0
    notifier.notify.assert_called_once()
    assert "already" in notifier.notify.call_args.args[1]


def test_second_run_is_idempotent(notifier):
    registry, shell = FakeRegistry(), FakeShell()
    config = ClassicMenuConfig(notify=True)

    assert enable_classic_context_menu(config, registry, shell, notifier) is Outcome.ENABLED
    assert enable_classic_context_menu(config, registry, shell, notifier) is Outcome.ALREADY_ENABLED
    assert registry.writes == 1
    assert shell.restarts == 1
    assert registry.probe() is MenuState.ENABLED


def test_write_failure_skips_restart_and_reports_reason(notifier):
    registry = FakeRegistry(error=RegistryWriteError("Access is denied"))
    shell = FakeShell()

    outcome = enable_classic_context_menu(ClassicMenuConfig(notify=True), registry, shell, notifier)

    assert outcome is Outcome.WRITE_FAILED
    assert shell.restarts == 0
    notifier.notify.assert_called_once()
    assert notifier.notify.call_args.args[1] == "Access is denied"
    assert notifier.notify.call_args.args[2] is NotifyIcon.ERROR


def test_restart_failure_is_reported_and_registry_kept(notifier):
    registry = FakeRegistry()
    shell = FakeShell(error=ShellRestartError("taskkill missing"))

    outcome = enable_classic_context_menu(ClassicMenuConfig(notify=True), registry, shell, notifier)

    assert outcome is Outcome.RESTART_FAILED
    assert registry.probe() is MenuState.ENABLED
    assert notifier.notify.call_args.args[1] == "taskkill missing"


def test_notifications_are_off_by_default(notifier, capsys):
    """Without notify=True a passed notifier is ignored; output goes to the console only."""
    registry = FakeRegistry(error=RegistryWriteError("Access is denied"))

    outcome = enable_classic_context_menu(ClassicMenuConfig(), registry, FakeShell(), notifier)

    assert outcome is Outcome.WRITE_FAILED
    notifier.notify.assert_not_called()
    assert "Access is denied" in capsys.readouterr().out


def test_outcome_success_flags():
    assert Outcome.ENABLED.succeeded
    assert Outcome.ALREADY_ENABLED.succeeded
    assert not Outcome.WRITE_FAILED.succeeded
    assert not Outcome.RESTART_FAILED.succeeded


def test_notifier_failure_does_not_escape(notifier, capsys):
    """A balloon that cannot be shown (taskbar still starting) must not undo a successful run."""
    notifier.notify.side_effect = OSError(1008, "Shell_NotifyIcon", "taskbar not ready")
    registry, shell = FakeRegistry(), FakeShell()

    outcome = enable_classic_context_menu(ClassicMenuConfig(notify=True), registry, shell, notifier)

    assert outcome is Outcome.ENABLED
    assert shell.restarts == 1
    assert "[WARN]" in capsys.readouterr().out


def test_notifier_failure_on_already_enabled(notifier):
    notifier.notify.side_effect = RuntimeError("no host window")

    outcome = enable_classic_context_menu(
        ClassicMenuConfig(notify=True), FakeRegistry(enabled=True), FakeShell(), notifier,
    )

    assert outcome is Outcome.ALREADY_ENABLED
