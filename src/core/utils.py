import os

from colorama import Fore, Style, init

_STATUS_COLORS = {
    'OK': Fore.GREEN,
    'INFO': Fore.CYAN,
    'WARN': Fore.YELLOW,
    'ERROR': Fore.RED,
}


def init_console():
    """Enable ANSI colours on the Windows console."""
    init()


def cls():
    os.system('cls' if os.name == 'nt' else 'clear')


def print_status(tag: str, message: str):
    """Print a console status line like `[OK] message`, coloured by tag."""
    color = _STATUS_COLORS.get(tag, '')
    print(f"{color}[{tag}]{Style.RESET_ALL} {message}")
