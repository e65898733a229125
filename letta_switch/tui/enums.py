from enum import Enum

from letta_switch.config.models import ModelTier


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    CYAN = "cyan"
    DIM = "dim"
    WHITE = "white"


FAVORITE_MARKER = "★"
CURRENT_MARKER = "●"
IDLE_MARKER = "○"

MODEL_TIER_STYLE = {
    ModelTier.SUBSCRIPTION: UIStyle.GREEN.value,
    ModelTier.API: UIStyle.CYAN.value,
}
