# ChefAcademy_V1/console_style.py
def bold(text: str) -> str:
    return f"\033[1m{text}\033[0m"


def green(text: str) -> str:
    return f"\033[92m{text}\033[0m"


def red(text: str) -> str:
    return f"\033[91m{text}\033[0m"


def yellow(text: str) -> str:
    return f"\033[93m{text}\033[0m"


def progress_bar(ratio: float, width: int = 10) -> str:
    """Text gauge for a ratio in [0, 1], e.g. ``[#####-----]``."""
    filled = int(round(max(0.0, min(1.0, ratio)) * width))
    return "[" + "#" * filled + "-" * (width - filled) + "]"
