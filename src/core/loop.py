from typing import Callable, Optional

from core.navigation import NavigationNode, Navigator


def main_loop(root: NavigationNode, header: Optional[Callable[[], str]] = None):
    navigator = Navigator(header)
    navigator.init(root)

    while True:
        try:
            navigator.process()
        except (KeyboardInterrupt, EOFError):
            break

    print('bye')
