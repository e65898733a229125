"""Profile CRUD on top of the config store."""

from __future__ import annotations

import logging
from typing import Optional

from letta_switch.config.models import Config, CurrentProfile, Profile
from letta_switch.config.schema import CONFIG_SCHEMA, PROFILE_SCHEMA
from letta_switch.config.store import ConfigStore
from letta_switch.errors import ConfigNotFoundError, ProfileNotFoundError

logger = logging.getLogger(__name__)


class ProfileStore:
    def __init__(self, store: Optional[ConfigStore[Config]] = None) -> None:
        self._store = store or ConfigStore(CONFIG_SCHEMA)

    @property
    def store(self) -> ConfigStore[Config]:
        return self._store

    def load(self) -> Config:
        try:
            return self._store.load()
        except ConfigNotFoundError as exc:
            raise ConfigNotFoundError(
                exc.path,
                "Configuration not found. Run `letta-switch sync` first",
            ) from None

    def get_profile(self, name: str) -> Optional[Profile]:
        return self.load().profiles.get(name)

    def list_profiles(self) -> dict[str, Profile]:
        return self.load().profiles

    def save_profile(self, name: str, profile: Profile) -> None:
        PROFILE_SCHEMA.validate(profile.to_dict())
        config = self.load()
        config.profiles[name] = profile
        self._store.save(config)
        logger.info("Saved profile: %s", name)

    def delete_profile(self, name: str) -> None:
        config = self.load()
        if name not in config.profiles:
            raise ProfileNotFoundError(name)

        del config.profiles[name]
        if config.current_profile == name:
            config.current_profile = None

        self._store.save(config)
        logger.info("Deleted profile: %s", name)

    def set_current_profile(self, name: str) -> None:
        config = self.load()
        if name not in config.profiles:
            raise ProfileNotFoundError(name)
        config.current_profile = name
        self._store.save(config)
        logger.info("Set current profile: %s", name)

    def get_current_profile(self) -> Optional[CurrentProfile]:
        config = self.load()
        if not config.current_profile:
            return None
        # A current profile that was deleted by hand is reported as unset.
        profile = config.profiles.get(config.current_profile)
        if profile is None:
            return None
        return CurrentProfile(name=config.current_profile, profile=profile)
