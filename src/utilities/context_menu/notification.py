from core.navigation import NavigationNode
from scripts.tray_notify import TrayNotifier


class SampleNotification(NavigationNode):
    def get_name(self) -> str:
        return "Sample notification"

    def process(self):
        notifier = TrayNotifier("Notification test")

        # info icon, hidden after 3 seconds
        notifier.notify("Test notification", "This balloon hides in 3 seconds.", "Iconi T3")
        print("\nNotification sent.")

        self.wait_back()
        notifier.close()
