from typing import Optional

from rich.markup import escape
from rich.panel import Panel

from letta_switch.tui.enums import UIStyle


class UISection:
    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def note(title: str, body: str, style: str) -> Panel:
        return Panel(body, title=title, border_style=style, padding=(0, 1))

    @staticmethod
    def hint(commands: list[str]) -> Panel:
        body = "\n".join(f"- {escape(command)}" for command in commands)
        return Panel(body, title="next", border_style=UIStyle.DIM.value, padding=(0, 1))
