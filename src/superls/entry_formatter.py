"""Icon and color rendering of listing lines."""

from typing import Optional

from rich.console import COLOR_SYSTEMS
from rich.style import Style

from superls.grep import GrepMatch
from superls.traversal.entry import Entry
from superls.types import EntryType

INDENT = "  "

ICONS = {
    EntryType.DIRECTORY: "🗂",
    EntryType.FILE: "📄",
    EntryType.SYMLINK: "🔗",
}

STYLES = {
    EntryType.DIRECTORY: "blue",
    EntryType.FILE: "rgb(255,105,180)",
    EntryType.SYMLINK: "cyan",
}


class EntryFormatter:
    """Turns entries and search matches into output lines.

    Entry lines have the form ``<indent><icon> <name>`` where the indent is two spaces
    per depth level. Symlink leaves add `` -> <target>`` when the target is known. The
    icon and the name are wrapped in the ANSI codes of their entry type's style when a
    color system is given; everything else is written as is. Names and matched lines
    are never altered, so tabs and control characters reach the output unchanged.

    Attributes:
        color_system (Optional[str]): A rich color system name ("standard", "256",
            "truecolor" or "windows"), or None for plain text.

    Example:
        >>> from superls.traversal.entry import Entry
        >>> formatter = EntryFormatter()
        >>> formatter.format_entry(Entry("root/a.txt", "a.txt", EntryType.FILE), 1)
        '  📄 a.txt'
    """

    def __init__(self, color_system: Optional[str] = None) -> None:
        self.color_system = color_system
        self._color_system = COLOR_SYSTEMS[color_system] if color_system is not None else None
        # A Style keeps the codes of its first render, so each formatter owns its styles
        self._styles = {entry_type: Style(color=color) for entry_type, color in STYLES.items()}

    def format_entry(self, entry: Entry, depth: int) -> str:
        return self.format_line(entry.entry_type, self.display_name(entry), depth)

    def format_line(self, entry_type: EntryType, name: str, depth: int) -> str:
        style = self._styles[entry_type]
        icon = style.render(ICONS[entry_type], color_system=self._color_system)
        return f"{INDENT * depth}{icon} {style.render(name, color_system=self._color_system)}"

    def format_match(self, match: GrepMatch) -> str:
        return str(match)

    @staticmethod
    def display_name(entry: Entry) -> str:
        if entry.is_symlink and entry.symlink_target:
            return f"{entry.name} -> {entry.symlink_target}"
        return entry.name
