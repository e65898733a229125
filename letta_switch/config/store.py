import json
import logging
from pathlib import Path
from typing import Generic, Optional, TypeVar

from letta_switch.config.schema import DocumentSchema, Serializable
from letta_switch.constants import BACKUP_SUFFIX, CONFIG_FILE_NAME, LETTA_DIR_NAME
from letta_switch.errors import ConfigNotFoundError, InvalidJsonFormatError
from letta_switch.utils import backup_file, expand_home, read_json, write_json

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Serializable)


def default_config_path() -> Path:
    return Path.home() / LETTA_DIR_NAME / CONFIG_FILE_NAME


class ConfigStore(Generic[T]):
    """Reads and writes one schema-validated JSON document."""

    def __init__(
        self, schema: DocumentSchema[T], path: Path | str | None = None
    ) -> None:
        self._schema = schema
        if path is None:
            self._path = default_config_path()
        else:
            self._path = Path(expand_home(str(path)))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def backup_path(self) -> Path:
        return Path(f"{self._path}{BACKUP_SUFFIX}")

    def load(self) -> T:
        try:
            payload = read_json(self._path)
        except FileNotFoundError:
            raise ConfigNotFoundError(self._path) from None
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidJsonFormatError(self._path, str(exc)) from exc
        value = self._schema.parse(payload, self._path)
        logger.debug("Loaded config from %s", self._path)
        return value

    def load_or_none(self) -> Optional[T]:
        try:
            return self.load()
        except ConfigNotFoundError:
            return None

    def save(self, value: T) -> None:
        payload = self._schema.dump(value, self._path)
        write_json(self._path, payload)
        logger.debug("Config saved to %s", self._path)

    def exists(self) -> bool:
        try:
            return self._path.is_file()
        except OSError:
            return False

    def backup(self) -> Optional[Path]:
        try:
            path = backup_file(self._path, BACKUP_SUFFIX)
        except OSError as exc:
            logger.warning("Failed to create backup: %s", exc)
            return None
        logger.debug("Created backup at %s", path)
        return path

    @staticmethod
    def expand_home(path: str) -> str:
        return expand_home(path)
