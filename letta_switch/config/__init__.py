from letta_switch.config.models import (
    Agent,
    Config,
    CurrentProfile,
    Filters,
    Model,
    ModelSpeed,
    ModelTier,
    Profile,
    RemoteAgent,
)
from letta_switch.config.schema import (
    AGENT_SCHEMA,
    CONFIG_SCHEMA,
    PROFILE_SCHEMA,
    REMOTE_AGENT_SCHEMA,
    DocumentSchema,
)
from letta_switch.config.store import ConfigStore

__all__ = [
    "AGENT_SCHEMA",
    "CONFIG_SCHEMA",
    "PROFILE_SCHEMA",
    "REMOTE_AGENT_SCHEMA",
    "Agent",
    "Config",
    "ConfigStore",
    "CurrentProfile",
    "DocumentSchema",
    "Filters",
    "Model",
    "ModelSpeed",
    "ModelTier",
    "Profile",
    "RemoteAgent",
]
