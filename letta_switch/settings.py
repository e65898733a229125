"""Access to the Letta CLI settings file that holds the API key."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from letta_switch.config.models import Settings
from letta_switch.config.schema import SETTINGS_SCHEMA
from letta_switch.config.store import ConfigStore
from letta_switch.constants import API_KEY_ENV, LETTA_DIR_NAME, SETTINGS_FILE_NAME
from letta_switch.errors import ApiKeyMissingError, ConfigNotFoundError


def default_settings_path() -> Path:
    return Path.home() / LETTA_DIR_NAME / SETTINGS_FILE_NAME


class SettingsRepository:
    def __init__(self, path: Path | str | None = None, use_env: bool = True) -> None:
        self._store: ConfigStore[Settings] = ConfigStore(
            SETTINGS_SCHEMA, path or default_settings_path()
        )
        self._use_env = use_env

    @property
    def path(self) -> Path:
        return self._store.path

    def load(self) -> Settings:
        try:
            return self._store.load()
        except ConfigNotFoundError as exc:
            raise ConfigNotFoundError(
                exc.path,
                "Letta settings not found. Run `letta` to authenticate first",
            ) from None

    def get_api_key(self) -> str:
        if self._use_env:
            from_env: Optional[str] = os.environ.get(API_KEY_ENV)
            if from_env:
                return from_env

        api_key = self.load().env.get(API_KEY_ENV)
        if not api_key:
            raise ApiKeyMissingError(f"{API_KEY_ENV} not found in settings")
        return api_key
