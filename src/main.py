import os
import sys

from core.loop import main_loop
from core.results import MenuState
from core.utils import init_console
from scripts.classic_menu_registry import probe
from utilities.root import RootNode


def menu_header() -> str:
    if probe() is MenuState.ENABLED:
        return 'Context menu: classic'
    return 'Context menu: modern'


def main():
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")
    init_console()

    main_loop(RootNode(), menu_header)

    os.system("pause")


if __name__ == "__main__":
    main()
