# classic_menu_registry.py
import winreg

from core.results import MenuState, RegistryWriteError

_GUID = "{86ca1aa0-34aa-4e8b-a509-50c905bae2a2}"
_SUBKEY = rf"Software\Classes\CLSID\{_GUID}\InprocServer32"

MARKER_PATH = rf"HKEY_CURRENT_USER\{_SUBKEY}"


def probe() -> MenuState:
    """
    Check whether Windows 11 is forced to use the classic context menu.

    Only the existence of the marker key matters, its value is never read.

    Returns:
        MenuState.ENABLED  -> marker key exists, classic menu is active
        MenuState.DISABLED -> key missing or unreadable, modern menu is active
    """
    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, _SUBKEY, 0, winreg.KEY_READ):
            return MenuState.ENABLED
    except OSError:
        return MenuState.DISABLED


def enable_classic_menu() -> None:
    """
    Create the marker key (with all missing parents) and set its default
    value to an empty REG_SZ.

    Raises:
        RegistryWriteError: if the key cannot be created or the value written.
    """
    try:
        with winreg.CreateKeyEx(winreg.HKEY_CURRENT_USER, _SUBKEY, 0, winreg.KEY_WRITE) as key:
            winreg.SetValueEx(key, "", 0, winreg.REG_SZ, "")
    except OSError as e:
        raise RegistryWriteError(f"Failed to write registry {MARKER_PATH}: {e}") from e
