from letta_switch.config.models import Config, Filters, Model, Profile
from letta_switch.constants import (
    CONFIG_VERSION,
    DEFAULT_AGENT_NAME,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_MEMORY_BLOCKS,
    DEFAULT_MODEL,
    DEFAULT_MODELS,
    DEFAULT_PROFILE_DESCRIPTION,
    DEFAULT_PROFILE_NAME,
)


def default_profile() -> Profile:
    return Profile(
        agent=DEFAULT_AGENT_NAME,
        model=DEFAULT_MODEL,
        memory_blocks=list(DEFAULT_MEMORY_BLOCKS),
        description=DEFAULT_PROFILE_DESCRIPTION,
    )


def default_config() -> Config:
    return Config(
        version=CONFIG_VERSION,
        profiles={DEFAULT_PROFILE_NAME: default_profile()},
        agents=[],
        models={name: Model.from_dict(item) for name, item in DEFAULT_MODELS.items()},
        filters=Filters(exclude_patterns=list(DEFAULT_EXCLUDE_PATTERNS)),
    )
