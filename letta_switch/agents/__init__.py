from letta_switch.agents.filter import (
    convert_letta_agent,
    filter_agents,
    filter_by_tag,
    search_agents,
)
from letta_switch.agents.registry import AgentRegistry, SyncResult, merge_agents

__all__ = [
    "AgentRegistry",
    "SyncResult",
    "convert_letta_agent",
    "filter_agents",
    "filter_by_tag",
    "merge_agents",
    "search_agents",
]
