from core.navigation import NavigationNode
from core.results import Outcome
from scripts.context_menu import TITLE, ClassicMenuConfig, enable_classic_context_menu
from scripts.tray_notify import TrayNotifier

_OUTCOME_TEXT = {
    Outcome.ALREADY_ENABLED: "Nothing to do, the classic menu was already enabled.",
    Outcome.ENABLED: "Done.",
    Outcome.WRITE_FAILED: "Registry was not changed.",
    Outcome.RESTART_FAILED: "Registry changed, restart Explorer or sign out to apply it.",
}


class EnableClassicMenu(NavigationNode):
    def get_name(self) -> str:
        return "Enable classic menu"

    def process(self):
        print()
        notifier = TrayNotifier(TITLE)
        outcome = enable_classic_context_menu(ClassicMenuConfig(notify=True), notifier=notifier)
        print(_OUTCOME_TEXT[outcome])

        self.wait_back()
        notifier.close()
