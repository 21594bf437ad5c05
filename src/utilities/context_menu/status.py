from core.navigation import NavigationNode
from core.results import MenuState
from scripts.classic_menu_registry import MARKER_PATH, probe
from scripts.explorer_shell import is_shell_running


class ContextMenuStatus(NavigationNode):
    def get_name(self) -> str:
        return "Status"

    def process(self):
        print()
        if probe() is MenuState.ENABLED:
            print("Classic context menu is enabled.")
        else:
            print("Modern context menu is active (classic menu disabled).")
        print(f"Marker key: {MARKER_PATH}")
        print(f"Explorer running: {is_shell_running()}")

        self.wait_back()
