import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Generic, Iterable, Optional, Protocol, TypeVar

from jsonschema import Draft202012Validator, FormatChecker

from letta_switch.config.models import Agent, Config, Profile, RemoteAgent, Settings
from letta_switch.errors import InvalidConfigSchemaError, format_schema_error

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"

_DATETIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:\d{2})?$"
)

_FORMAT_CHECKER = FormatChecker(formats=())
_SCHEMA_CACHE: dict[str, dict[str, Any]] = {}


@_FORMAT_CHECKER.checks("date-time", raises=ValueError)
def _is_datetime(instance: Any) -> bool:
    if not isinstance(instance, str):
        return True
    if not _DATETIME_RE.match(instance):
        return False
    datetime.fromisoformat(instance.replace("Z", "+00:00"))
    return True


class Serializable(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


T = TypeVar("T", bound=Serializable)

# A semantic check returns an error detail, or None when the payload is fine.
SemanticCheck = Callable[[Any], Optional[str]]


def load_schema(path: Path = SCHEMA_PATH) -> dict[str, Any]:
    key = str(path.resolve())
    cached = _SCHEMA_CACHE.get(key)
    if cached is None:
        cached = json.loads(path.read_text(encoding="utf-8"))
        _SCHEMA_CACHE[key] = cached
    return cached


class DocumentSchema(Generic[T]):
    """Binds one ``$defs`` entry of the JSON schema to a model class."""

    def __init__(
        self,
        definition: str,
        factory: Callable[[dict[str, Any]], T],
        checks: Iterable[SemanticCheck] = (),
        schema_path: Path = SCHEMA_PATH,
    ) -> None:
        self.definition = definition
        self._factory = factory
        self._checks = tuple(checks)
        root = load_schema(schema_path)
        document = {**root, "$ref": f"#/$defs/{definition}"}
        self._validator = Draft202012Validator(
            document, format_checker=_FORMAT_CHECKER
        )

    def validate(self, payload: Any, path: Optional[Path] = None) -> None:
        error = next(iter(self._validator.iter_errors(payload)), None)
        if error is not None:
            raise InvalidConfigSchemaError(path, format_schema_error(error))
        for check in self._checks:
            detail = check(payload)
            if detail is not None:
                raise InvalidConfigSchemaError(path, detail)

    def parse(self, payload: Any, path: Optional[Path] = None) -> T:
        self.validate(payload, path)
        return self._factory(payload)

    def dump(self, value: T, path: Optional[Path] = None) -> dict[str, Any]:
        payload = value.to_dict()
        self.validate(payload, path)
        return payload


def _unique_agent_ids(payload: dict[str, Any]) -> Optional[str]:
    seen: set[str] = set()
    for index, agent in enumerate(payload["agents"]):
        if agent["id"] in seen:
            return f"duplicate agent id {agent['id']!r} at agents.{index}.id"
        seen.add(agent["id"])
    return None


def _single_favorite(payload: dict[str, Any]) -> Optional[str]:
    favorites = [agent["name"] for agent in payload["agents"] if agent.get("favorite")]
    if len(favorites) > 1:
        return f"only one favorite agent is allowed, found {', '.join(favorites)} at agents"
    return None


def _compilable_patterns(payload: dict[str, Any]) -> Optional[str]:
    for index, pattern in enumerate(payload["filters"]["excludePatterns"]):
        try:
            re.compile(pattern)
        except re.error as exc:
            return (
                f"invalid exclude pattern {pattern!r} ({exc}) "
                f"at filters.excludePatterns.{index}"
            )
    return None


CONFIG_SCHEMA: DocumentSchema[Config] = DocumentSchema(
    "Config",
    Config.from_dict,
    checks=(_unique_agent_ids, _single_favorite, _compilable_patterns),
)
PROFILE_SCHEMA: DocumentSchema[Profile] = DocumentSchema("Profile", Profile.from_dict)
AGENT_SCHEMA: DocumentSchema[Agent] = DocumentSchema("Agent", Agent.from_dict)
REMOTE_AGENT_SCHEMA: DocumentSchema[RemoteAgent] = DocumentSchema(
    "RemoteAgent", RemoteAgent.from_dict
)
SETTINGS_SCHEMA: DocumentSchema[Settings] = DocumentSchema(
    "Settings", Settings.from_dict
)
