from letta_switch.tui.renderers import LettaConsoleUI

__all__ = ["LettaConsoleUI"]
