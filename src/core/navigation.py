from abc import ABC, abstractmethod
from typing import Callable, Optional

from prompt_toolkit.shortcuts import choice

from core.utils import cls

BACK_LABEL = '[...]'


class NavigationNode(ABC):

    def __init__(self):
        self._move_back: Optional[Callable[[], None]] = None
        self._move_next: Optional[Callable[['NavigationNode'], None]] = None

    @abstractmethod
    def get_name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def process(self):
        raise NotImplementedError

    @property
    def is_active(self) -> bool:
        return self._move_next is not None

    def move_back(self):
        if self._move_back is not None:
            self._move_back()

    def wait_back(self):
        choice(message='', options=[(None, '[Back]')])
        self.move_back()

    def start(self, move_next: Callable[['NavigationNode'], None], move_back: Optional[Callable[[], None]]):
        self._move_next = move_next
        self._move_back = move_back

    def stop(self):
        self._move_back = None
        self._move_next = None


def get_node_name(node: NavigationNode) -> str:
    name = node.get_name().capitalize()
    if isinstance(node, FolderNode):
        return f'[{name}]'
    return name


class Navigator:
    """
    Keeps the stack of opened nodes. The top node is processed on every
    loop iteration, below a breadcrumb line and an optional header.
    """

    def __init__(self, header: Optional[Callable[[], str]] = None):
        self._stack: list[NavigationNode] = []
        self._node: Optional[NavigationNode] = None
        self._header = header

    @property
    def current(self) -> Optional[NavigationNode]:
        return self._node

    @property
    def depth(self) -> int:
        return len(self._stack)

    def init(self, node: NavigationNode):
        self._open(node)

    def breadcrumbs(self) -> str:
        nodes = self._stack + ([self._node] if self._node is not None else [])
        return ' > '.join(get_node_name(node) for node in nodes)

    def process(self):
        cls()
        print(' ' + self.breadcrumbs())
        if self._header is not None:
            print(' ' + self._header())

        if self._node is not None:
            self._node.process()

    def _open(self, node: NavigationNode):
        assert node is not None

        if self._node is not None:
            self._node.stop()
            self._stack.append(self._node)

        self._node = node
        node.start(self._open, self._close if self._stack else None)

    def _close(self):
        assert self._node is not None
        assert self._stack

        self._node.stop()
        self._node = None
        self._open(self._stack.pop())


class FolderNode(NavigationNode, ABC):
    CHILDREN: list[NavigationNode] = [
        # filled by inheritors
    ]

    def __init__(self):
        super().__init__()
        self._last_selected: Optional[NavigationNode] = None

    def options(self) -> list[tuple[Optional[NavigationNode], str]]:
        options: list[tuple[Optional[NavigationNode], str]] = []
        if self._move_back is not None:
            options.append((None, BACK_LABEL))
        options += [(node, get_node_name(node)) for node in self.CHILDREN]
        return options

    def process(self):
        self._last_selected = choice(
            message='',
            options=self.options(),
            default=self._last_selected,
        )

        if self._last_selected is None:
            self.move_back()
            return

        assert self._move_next is not None
        self._move_next(self._last_selected)
