"""Terminal colours and boxed message formatting for the chat console."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

RESET_COLOR = "\033[0m"
RED_COLOR = "\033[31m"
GREEN_COLOR = "\033[32m"
BLUE_COLOR = "\033[34m"
YELLOW_COLOR = "\033[33m"
MAGENTA_COLOR = "\033[35m"
CYAN_COLOR = "\033[36m"
WHITE_COLOR = "\033[37m"
BRIGHT_RED_COLOR = "\033[91m"
BRIGHT_GREEN_COLOR = "\033[92m"
BRIGHT_BLUE_COLOR = "\033[94m"
BRIGHT_YELLOW_COLOR = "\033[93m"
BRIGHT_MAGENTA_COLOR = "\033[95m"
BRIGHT_CYAN_COLOR = "\033[96m"
BRIGHT_WHITE_COLOR = "\033[97m"
BOLD_TEXT = "\033[1m"
ITALIC_TEXT = "\033[3m"
UNDERLINE_TEXT = "\033[4m"
DIM_TEXT = "\033[2m"

USER_PALETTE: tuple[str, ...] = (
    "\033[38;5;208m",  # bright orange
    "\033[38;5;129m",  # purple
    "\033[38;5;213m",  # pink
    "\033[38;5;154m",  # lime green
    "\033[38;5;80m",  # teal
    "\033[38;5;99m",  # indigo
    "\033[38;5;203m",  # coral
    "\033[38;5;220m",  # gold
    "\033[38;5;177m",  # violet
    "\033[38;5;86m",  # turquoise
    "\033[38;5;209m",  # salmon
    "\033[38;5;46m",  # emerald
    "\033[38;5;196m",  # ruby red
    "\033[38;5;33m",  # sapphire blue
    "\033[38;5;214m",  # amber
    "\033[38;5;160m",  # crimson
    "\033[38;5;22m",  # forest green
    "\033[38;5;201m",  # hot pink
    "\033[38;5;51m",  # cyan blue
    "\033[38;5;226m",  # bright yellow
    "\033[38;5;165m",  # magenta pink
    "\033[38;5;39m",  # sky blue
    "\033[38;5;202m",  # orange red
    "\033[38;5;118m",  # spring green
    "\033[38;5;207m",  # bright magenta
    "\033[38;5;87m",  # light cyan
    "\033[38;5;228m",  # khaki
    "\033[38;5;171m",  # orchid
    "\033[38;5;75m",  # steel blue
    "\033[38;5;215m",  # light orange
)


@dataclass(frozen=True)
class BoxStyle:
    """The characters used to draw message boxes and separators."""

    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    padding: str
    system_top: str
    system_bottom: str
    system_side: str
    join_top: str
    join_bottom: str
    join_side: str
    leave_top: str
    leave_bottom: str
    leave_side: str
    join_icon: str
    leave_icon: str
    separator: str


UNICODE_STYLE = BoxStyle(
    top_left="┌",
    top_right="┐",
    bottom_left="└",
    bottom_right="┘",
    horizontal="─",
    vertical="│",
    padding="  ",
    system_top="┏" + "━" * 44 + "┓",
    system_bottom="┗" + "━" * 44 + "┛",
    system_side="┃",
    join_top="╔" + "═" * 42 + "╗",
    join_bottom="╚" + "═" * 42 + "╝",
    join_side="║",
    leave_top="╔" + "═" * 42 + "╗",
    leave_bottom="╚" + "═" * 42 + "╝",
    leave_side="║",
    join_icon="🎉",
    leave_icon="👋",
    separator="─" * 49,
)

ASCII_STYLE = BoxStyle(
    top_left="+",
    top_right="+",
    bottom_left="+",
    bottom_right="+",
    horizontal="-",
    vertical="|",
    padding="  ",
    system_top="+" + "-" * 42 + "+",
    system_bottom="+" + "-" * 42 + "+",
    system_side="|",
    join_top="+" + "=" * 42 + "+",
    join_bottom="+" + "=" * 42 + "+",
    join_side="|",
    leave_top="+" + "=" * 42 + "+",
    leave_bottom="+" + "=" * 42 + "+",
    leave_side="|",
    join_icon="*",
    leave_icon="-",
    separator="-" * 49,
)

DEFAULT_STYLE = ASCII_STYLE if os.name == "nt" else UNICODE_STYLE

_SYSTEM_PADDING = 35
_JOIN_PADDING = 32
_LEAVE_PADDING = 33
_MIN_BOX_WIDTH = 20


def _style(style: Optional[BoxStyle]) -> BoxStyle:
    return DEFAULT_STYLE if style is None else style


class ColorRegistry:
    """Hands out a stable colour per username, cycling through a palette."""

    def __init__(self, palette: Sequence[str] = USER_PALETTE) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self._palette = tuple(palette)
        self._colors: dict[str, str] = {}
        self._lock = threading.Lock()

    def color_for(self, username: str) -> str:
        """Return the colour assigned to *username*, assigning the next one if new."""
        with self._lock:
            color = self._colors.get(username)
            if color is None:
                color = self._palette[len(self._colors) % len(self._palette)]
                self._colors[username] = color
            return color


_registry = ColorRegistry()


def init_console_colors() -> None:
    """Make sure the terminal interprets ANSI escape sequences."""
    if os.name == "nt":
        # An empty shell command switches the Windows console into VT mode.
        os.system("")


def get_user_color(username: str) -> str:
    """Return the colour of *username* from the shared registry."""
    return _registry.color_for(username)


def create_bordered_message(
    username: str,
    message: str,
    border_color: str,
    style: Optional[BoxStyle] = None,
) -> str:
    """Draw ``username: message`` inside a coloured box."""
    s = _style(style)
    content_length = len(username) + 2 + len(message)
    box_width = max(content_length + 4, _MIN_BOX_WIDTH)
    rule = s.horizontal * box_width
    padding = " " * (box_width - content_length - 2)

    top = f"{border_color}{s.top_left}{rule}{s.top_right}{RESET_COLOR}"
    middle = (
        f"{border_color}{s.vertical}{RESET_COLOR}{s.padding}"
        f"{border_color}{BOLD_TEXT}{username}{RESET_COLOR}: {message}"
        f"{padding}{border_color}{s.vertical}{RESET_COLOR}"
    )
    bottom = f"{border_color}{s.bottom_left}{rule}{s.bottom_right}{RESET_COLOR}"
    return "\n".join((top, middle, bottom))


def format_system_message(msg: str, style: Optional[BoxStyle] = None) -> str:
    """Draw a system notice in a yellow box."""
    s = _style(style)
    padding = " " * max(_SYSTEM_PADDING - len(msg), 0)
    return "\n".join(
        (
            f"{YELLOW_COLOR}{s.system_top}{RESET_COLOR}",
            f"{YELLOW_COLOR}{s.system_side}{RESET_COLOR}{BOLD_TEXT}  [SYSTEM] "
            f"{RESET_COLOR}{msg}{padding}{YELLOW_COLOR}{s.system_side}{RESET_COLOR}",
            f"{YELLOW_COLOR}{s.system_bottom}{RESET_COLOR}",
        )
    )


def _format_presence(
    user: str, color: str, top: str, side: str, bottom: str, icon: str, text: str, width: int
) -> str:
    padding = " " * max(width - len(user), 0)
    return "\n".join(
        (
            f"{color}{top}{RESET_COLOR}",
            f"{color}{side}{RESET_COLOR}  {icon} {BOLD_TEXT}{user}{text}{RESET_COLOR}"
            f"{padding}{color}{side}{RESET_COLOR}",
            f"{color}{bottom}{RESET_COLOR}",
        )
    )


def format_user_join(user: str, style: Optional[BoxStyle] = None) -> str:
    """Draw a green box announcing that *user* joined."""
    s = _style(style)
    return _format_presence(
        user, BRIGHT_GREEN_COLOR, s.join_top, s.join_side, s.join_bottom,
        s.join_icon, " joined the chat!", _JOIN_PADDING,
    )


def format_user_leave(user: str, style: Optional[BoxStyle] = None) -> str:
    """Draw a red box announcing that *user* left."""
    s = _style(style)
    return _format_presence(
        user, BRIGHT_RED_COLOR, s.leave_top, s.leave_side, s.leave_bottom,
        s.leave_icon, " left the chat", _LEAVE_PADDING,
    )


def format_sent_message(message: str, style: Optional[BoxStyle] = None) -> str:
    """Draw a message the local user sent."""
    return create_bordered_message("You", message, BRIGHT_CYAN_COLOR, style)


def format_received_message(
    username: str, message: str, style: Optional[BoxStyle] = None
) -> str:
    """Draw a message from another user in that user's colour."""
    return create_bordered_message(username, message, get_user_color(username), style)


def create_separator(style: Optional[BoxStyle] = None) -> str:
    """Return a dim horizontal rule."""
    return f"{DIM_TEXT}{_style(style).separator}{RESET_COLOR}"