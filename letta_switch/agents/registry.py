"""Agent registry: sync with the Letta API and local agent metadata."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Protocol

from letta_switch.agents.filter import convert_letta_agent, filter_agents
from letta_switch.api.client import LettaAPIClient
from letta_switch.config.defaults import default_config
from letta_switch.config.models import Agent, Config, RemoteAgent
from letta_switch.config.schema import CONFIG_SCHEMA
from letta_switch.config.store import ConfigStore
from letta_switch.errors import AgentNotFoundError, ConfigNotFoundError
from letta_switch.utils import utc_now_iso

logger = logging.getLogger(__name__)


class RemoteAgentSource(Protocol):
    def fetch_agents(self) -> list[RemoteAgent]: ...


ClientFactory = Callable[[str, Optional[str]], RemoteAgentSource]


def _default_client_factory(api_key: str, api_url: Optional[str]) -> RemoteAgentSource:
    return LettaAPIClient(api_key, api_url)


@dataclass(frozen=True)
class SyncResult:
    fetched: int
    excluded: int
    added: list[str]
    updated: list[str]
    removed: list[str]
    agents: list[Agent]


def merge_agents(existing: list[Agent], incoming: list[Agent]) -> list[Agent]:
    """Take descriptive fields from ``incoming`` and user state from ``existing``.

    The result contains exactly the incoming agents, in incoming order. Local
    agents that are no longer listed upstream are dropped.
    """
    by_id = {agent.id: agent for agent in existing}
    merged: list[Agent] = []
    for agent in incoming:
        previous = by_id.get(agent.id)
        if previous is None:
            merged.append(agent)
            continue
        merged.append(
            replace(
                agent,
                tags=list(previous.tags),
                favorite=previous.favorite,
                last_launched=previous.last_launched,
            )
        )
    return merged


class AgentRegistry:
    def __init__(
        self,
        store: Optional[ConfigStore[Config]] = None,
        client_factory: ClientFactory = _default_client_factory,
        clock: Callable[[], str] = utc_now_iso,
    ) -> None:
        self._store = store or ConfigStore(CONFIG_SCHEMA)
        self._client_factory = client_factory
        self._clock = clock

    @property
    def store(self) -> ConfigStore[Config]:
        return self._store

    def load(self) -> Config:
        try:
            return self._store.load()
        except ConfigNotFoundError:
            logger.warning("Config file not found, creating default")
            return self._create_default()

    def _create_default(self) -> Config:
        config = default_config()
        self._store.save(config)
        logger.info("Created default configuration at %s", self._store.path)
        return config

    def sync_from_api(self, api_key: str, api_url: Optional[str] = None) -> SyncResult:
        client = self._client_factory(api_key, api_url)
        config = self.load()

        logger.info("Syncing agents from Letta API...")
        remote_agents = client.fetch_agents()
        kept = filter_agents(remote_agents, config.filters.exclude_patterns)
        incoming = [convert_letta_agent(agent) for agent in kept]

        previous_ids = {agent.id for agent in config.agents}
        merged = merge_agents(config.agents, incoming)
        merged_ids = {agent.id for agent in merged}

        result = SyncResult(
            fetched=len(remote_agents),
            excluded=len(remote_agents) - len(kept),
            added=[agent.name for agent in merged if agent.id not in previous_ids],
            updated=[agent.name for agent in merged if agent.id in previous_ids],
            removed=[agent.name for agent in config.agents if agent.id not in merged_ids],
            agents=merged,
        )

        config.agents = merged
        config.last_sync = self._clock()
        self._store.save(config)

        logger.info(
            "Synced %d agents (filtered %d excluded)", len(merged), result.excluded
        )
        return result

    def list_agents(self) -> list[Agent]:
        return self.load().agents

    def get_agent(self, name_or_id: str) -> Optional[Agent]:
        agents = self.load().agents
        by_name = next((agent for agent in agents if agent.name == name_or_id), None)
        if by_name is not None:
            return by_name
        return next((agent for agent in agents if agent.id == name_or_id), None)

    def set_favorite(self, name: str) -> None:
        config = self.load()
        target = config.find_agent(name)
        if target is None:
            raise AgentNotFoundError(name)

        for agent in config.agents:
            agent.favorite = False
        target.favorite = True

        self._store.save(config)
        logger.info("Set %s as favorite agent", name)

    def update_last_launched(self, name: str) -> None:
        config = self.load()
        agent = config.find_agent(name)
        if agent is None:
            return
        agent.last_launched = self._clock()
        self._store.save(config)
