from core.navigation import FolderNode
from utilities.context_menu import ContextMenu


class RootNode(FolderNode):
    CHILDREN = [
        ContextMenu(),
    ]

    def get_name(self):
        return 'Root'
