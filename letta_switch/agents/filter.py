"""Pure helpers for narrowing agent collections."""

from __future__ import annotations

import re
from typing import Iterable

from letta_switch.config.models import Agent, RemoteAgent


def _is_excluded(name: str, patterns: list[re.Pattern[str]]) -> bool:
    return any(pattern.search(name) for pattern in patterns)


def filter_agents(
    remote_agents: Iterable[RemoteAgent], exclude_patterns: Iterable[str]
) -> list[RemoteAgent]:
    compiled = [re.compile(pattern, re.IGNORECASE) for pattern in exclude_patterns]
    return [agent for agent in remote_agents if not _is_excluded(agent.name, compiled)]


def convert_letta_agent(remote: RemoteAgent) -> Agent:
    return Agent(
        id=remote.id,
        name=remote.name,
        description=remote.description or None,
        created=remote.created_at,
        tags=[],
        favorite=False,
    )


def search_agents(agents: Iterable[Agent], query: str) -> list[Agent]:
    needle = query.lower()
    return [
        agent
        for agent in agents
        if needle in agent.name.lower()
        or (agent.description is not None and needle in agent.description.lower())
    ]


def filter_by_tag(agents: Iterable[Agent], tag: str) -> list[Agent]:
    return [agent for agent in agents if tag in agent.tags]
