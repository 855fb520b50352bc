import os


# --------- ANSI COLORS ----------
class Color:
    RESET = "\033[0m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    REVERSE = "\033[7m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


def paint(text, *codes, enabled=True):
    if not enabled or not codes:
        return text
    return "".join(codes) + text + Color.RESET


def supports_color(stream):
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())
