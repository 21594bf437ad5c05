from core.navigation import FolderNode
from utilities.context_menu.enable import EnableClassicMenu
from utilities.context_menu.notification import SampleNotification
from utilities.context_menu.status import ContextMenuStatus


class ContextMenu(FolderNode):
    CHILDREN = [
        ContextMenuStatus(),
        EnableClassicMenu(),
        SampleNotification(),
    ]

    def get_name(self) -> str:
        return 'context menu'
