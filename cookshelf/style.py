"""Terminal styles used when printing recipes for people."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import IntEnum


class Color(IntEnum):
    """The sixteen ANSI colours."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    BRIGHT_BLACK = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15

    def fg_code(self) -> int:
        return 30 + self.value if self.value < 8 else 90 + self.value - 8

    def bg_code(self) -> int:
        return 40 + self.value if self.value < 8 else 100 + self.value - 8


_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Style:
    """Foreground, background and text effects."""

    fg: Color | None = None
    bg: Color | None = None
    bold: bool = False
    dimmed: bool = False
    italic: bool = False
    underline: bool = False

    def _codes(self) -> list[int]:
        codes = [
            code
            for code, enabled in (
                (1, self.bold),
                (2, self.dimmed),
                (3, self.italic),
                (4, self.underline),
            )
            if enabled
        ]
        if self.fg is not None:
            codes.append(self.fg.fg_code())
        if self.bg is not None:
            codes.append(self.bg.bg_code())
        return codes

    def render(self, text: str) -> str:
        """Wrap the text in ANSI escapes; a plain style leaves it unchanged."""
        codes = self._codes()
        if not codes:
            return text
        return f"\x1b[{';'.join(map(str, codes))}m{text}{_RESET}"


@dataclass(frozen=True)
class CookStyles:
    title: Style = field(
        default_factory=lambda: Style(fg=Color.WHITE, bg=Color.MAGENTA, bold=True)
    )
    meta_key: Style = field(default_factory=lambda: Style(fg=Color.BRIGHT_GREEN, bold=True))
    selected_servings: Style = field(
        default_factory=lambda: Style(fg=Color.YELLOW, bold=True)
    )
    ingredient: Style = field(default_factory=lambda: Style(fg=Color.GREEN))
    cookware: Style = field(default_factory=lambda: Style(fg=Color.YELLOW))
    timer: Style = field(default_factory=lambda: Style(fg=Color.CYAN))
    inline_quantity: Style = field(default_factory=lambda: Style(fg=Color.BRIGHT_RED))
    opt_marker: Style = field(default_factory=lambda: Style(fg=Color.BRIGHT_CYAN, italic=True))
    intermediate_ref: Style = field(
        default_factory=lambda: Style(fg=Color.BRIGHT_YELLOW, italic=True)
    )
    section_name: Style = field(default_factory=lambda: Style(bold=True, underline=True))
    step_igr_quantity: Style = field(default_factory=lambda: Style(dimmed=True))

    @staticmethod
    def default_styles() -> "CookStyles":
        return CookStyles()


_lock = threading.Lock()
_current: CookStyles | None = None


def set_styles(styles: CookStyles) -> bool:
    """Set custom styles once, before any use; return whether they were set."""
    global _current
    with _lock:
        if _current is not None:
            return False
        _current = styles
        return True


def styles() -> CookStyles:
    """The styles in use, fixed to the defaults on first use if none were set."""
    global _current
    with _lock:
        if _current is None:
            _current = CookStyles.default_styles()
        return _current