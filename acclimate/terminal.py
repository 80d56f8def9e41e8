"""
Acclimate terminal messages.

A tiny markup for one-line terminal messages, rendered with rich:

- $name$ interpolates params["name"] (missing keys become empty).
- |color| switches the foreground color until the next color token or |reset|.
  Known colors: black, red, green, yellow, blue, magenta, cyan, white, their
  bright_ forms, and gray/grey (bright_black). Unknown tokens stay literal.

    >>> log("|red|Error:|reset| could not reach $host$", host="db-1")
    Error: could not reach db-1
"""
import re

from rich.console import Console
from rich.text import Text

console = Console()

COLORS = {
    "black": "black",
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "blue": "blue",
    "magenta": "magenta",
    "cyan": "cyan",
    "white": "white",
    "bright_black": "bright_black",
    "gray": "bright_black",
    "grey": "bright_black",
    "bright_red": "bright_red",
    "bright_green": "bright_green",
    "bright_yellow": "bright_yellow",
    "bright_blue": "bright_blue",
    "bright_magenta": "bright_magenta",
    "bright_cyan": "bright_cyan",
    "bright_white": "bright_white",
}

PARAM_TOKEN = re.compile(r"\$([a-zA-Z0-9_]+)\$")
COLOR_TOKEN = re.compile(r"\|([a-zA-Z_]+)\|")


def _interpolate(message, params):
    def replace(match):
        if (value := params.get(match[1])) is None:
            return ""
        return str(value)
    return PARAM_TOKEN.sub(replace, message)


def generate_terminal_message(message, params=None, /):
    """
    Render a marked-up message into a rich Text.

    Interpolation happens first, so interpolated values may carry color
    tokens of their own.
    """
    if not isinstance(message, str):
        raise TypeError("generate_terminal_message() argument must be a string")

    text = Text()
    style = ""
    position = 0
    interpolated = _interpolate(message, params or {})
    for match in COLOR_TOKEN.finditer(interpolated):
        name = match[1].lower()
        if name != "reset" and name not in COLORS:
            continue
        text.append(interpolated[position:match.start()], style)
        style = "" if name == "reset" else COLORS[name]
        position = match.end()
    text.append(interpolated[position:], style)
    return text


def log(message, /, **params):
    """
    Print a marked-up message on standard output.
    """
    console.print(generate_terminal_message(message, params))


__all__ = (
    "generate_terminal_message",
    "log",
)
