"""Configuration data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ModelTier(str, Enum):
    SUBSCRIPTION = "subscription"
    API = "api"


class ModelSpeed(str, Enum):
    SLOW = "slow"
    FAST = "fast"


def _optional_list(value: Any) -> Optional[list[str]]:
    if value is None:
        return None
    return [str(item) for item in value]


@dataclass
class Agent:
    id: str
    name: str
    created: str
    description: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    favorite: bool = False
    last_launched: Optional[str] = None
    available_memory_blocks: Optional[list[str]] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Agent":
        return cls(
            id=raw["id"],
            name=raw["name"],
            created=raw["created"],
            description=raw.get("description"),
            tags=[str(tag) for tag in raw.get("tags", [])],
            favorite=bool(raw.get("favorite", False)),
            last_launched=raw.get("lastLaunched"),
            available_memory_blocks=_optional_list(raw.get("availableMemoryBlocks")),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.description is not None:
            payload["description"] = self.description
        payload["created"] = self.created
        payload["tags"] = list(self.tags)
        payload["favorite"] = self.favorite
        if self.available_memory_blocks is not None:
            payload["availableMemoryBlocks"] = list(self.available_memory_blocks)
        if self.last_launched is not None:
            payload["lastLaunched"] = self.last_launched
        return payload


@dataclass(frozen=True)
class RemoteAgent:
    """Agent record as returned by the Letta API."""

    id: str
    name: str
    created_at: str
    description: Optional[str] = None
    agent_type: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "RemoteAgent":
        return cls(
            id=raw["id"],
            name=raw["name"],
            created_at=raw["created_at"],
            description=raw.get("description"),
            agent_type=raw.get("agent_type"),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at,
        }
        if self.agent_type is not None:
            payload["agent_type"] = self.agent_type
        return payload


@dataclass
class Profile:
    agent: str
    model: str
    memory_blocks: list[str]
    description: Optional[str] = None
    init_blocks: Optional[list[str]] = None
    base_tools: Optional[list[str]] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Profile":
        return cls(
            agent=raw["agent"],
            model=raw["model"],
            memory_blocks=[str(item) for item in raw["memoryBlocks"]],
            description=raw.get("description"),
            init_blocks=_optional_list(raw.get("initBlocks")),
            base_tools=_optional_list(raw.get("baseTools")),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "agent": self.agent,
            "model": self.model,
            "memoryBlocks": list(self.memory_blocks),
        }
        if self.description is not None:
            payload["description"] = self.description
        if self.init_blocks is not None:
            payload["initBlocks"] = list(self.init_blocks)
        if self.base_tools is not None:
            payload["baseTools"] = list(self.base_tools)
        return payload


@dataclass(frozen=True)
class Model:
    tier: ModelTier
    speed: ModelSpeed

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Model":
        return cls(tier=ModelTier(raw["tier"]), speed=ModelSpeed(raw["speed"]))

    def to_dict(self) -> dict[str, Any]:
        return {"tier": self.tier.value, "speed": self.speed.value}


@dataclass
class Filters:
    exclude_patterns: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Filters":
        return cls(exclude_patterns=[str(item) for item in raw["excludePatterns"]])

    def to_dict(self) -> dict[str, Any]:
        return {"excludePatterns": list(self.exclude_patterns)}


@dataclass
class Config:
    version: str
    profiles: dict[str, Profile] = field(default_factory=dict)
    agents: list[Agent] = field(default_factory=list)
    models: dict[str, Model] = field(default_factory=dict)
    filters: Filters = field(default_factory=Filters)
    current_profile: Optional[str] = None
    last_sync: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Config":
        return cls(
            version=raw["version"],
            current_profile=raw.get("currentProfile"),
            profiles={
                name: Profile.from_dict(item) for name, item in raw["profiles"].items()
            },
            agents=[Agent.from_dict(item) for item in raw["agents"]],
            models={name: Model.from_dict(item) for name, item in raw["models"].items()},
            filters=Filters.from_dict(raw["filters"]),
            last_sync=raw.get("lastSync"),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"version": self.version}
        if self.current_profile is not None:
            payload["currentProfile"] = self.current_profile
        payload["profiles"] = {
            name: profile.to_dict() for name, profile in self.profiles.items()
        }
        payload["agents"] = [agent.to_dict() for agent in self.agents]
        payload["models"] = {name: model.to_dict() for name, model in self.models.items()}
        payload["filters"] = self.filters.to_dict()
        if self.last_sync is not None:
            payload["lastSync"] = self.last_sync
        return payload

    def find_agent(self, name: str) -> Optional[Agent]:
        return next((agent for agent in self.agents if agent.name == name), None)


@dataclass(frozen=True)
class CurrentProfile:
    name: str
    profile: Profile


@dataclass(frozen=True)
class Settings:
    """Subset of the Letta CLI settings file that carries credentials."""

    env: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Settings":
        env = raw.get("env") or {}
        return cls(env={str(key): str(value) for key, value in env.items()})

    def to_dict(self) -> dict[str, Any]:
        return {"env": dict(self.env)}
