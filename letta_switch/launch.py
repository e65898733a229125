from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from letta_switch.agents.registry import AgentRegistry
from letta_switch.config.models import Agent, Profile
from letta_switch.config.profiles import ProfileStore
from letta_switch.constants import DEFAULT_MEMORY_BLOCKS, DEFAULT_MODEL
from letta_switch.errors import AgentNotFoundError, ProfileNotFoundError
from letta_switch.launcher import LaunchRequest, Launcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchOptions:
    profile: Optional[str] = None
    model: Optional[str] = None
    memory: Optional[list[str]] = None
    init_blocks: Optional[list[str]] = None
    base_tools: Optional[list[str]] = None
    save_as: Optional[str] = None


@dataclass(frozen=True)
class LaunchPlan:
    agent: Agent
    profile: Profile
    request: LaunchRequest


class LaunchService:
    def __init__(
        self,
        registry: AgentRegistry,
        profiles: ProfileStore,
        launcher: Optional[Launcher] = None,
    ) -> None:
        self._registry = registry
        self._profiles = profiles
        self._launcher = launcher or Launcher()

    def _resolve_profile(self, agent: Agent, options: LaunchOptions) -> Profile:
        if options.profile:
            profile = self._profiles.get_profile(options.profile)
            if profile is None:
                raise ProfileNotFoundError(options.profile)
            return profile
        return Profile(
            agent=agent.name,
            model=options.model or DEFAULT_MODEL,
            memory_blocks=list(options.memory or DEFAULT_MEMORY_BLOCKS),
            init_blocks=options.init_blocks,
            base_tools=options.base_tools,
        )

    def plan(self, agent_name_or_id: str, options: LaunchOptions) -> LaunchPlan:
        agent = self._registry.get_agent(agent_name_or_id)
        if agent is None:
            raise AgentNotFoundError(agent_name_or_id)
        profile = self._resolve_profile(agent, options)
        request = LaunchRequest(
            agent_id=agent.id,
            model=profile.model,
            memory_blocks=list(profile.memory_blocks),
            init_blocks=profile.init_blocks,
            base_tools=profile.base_tools,
        )
        return LaunchPlan(agent=agent, profile=profile, request=request)

    def execute(self, plan: LaunchPlan, save_as: Optional[str] = None) -> int:
        if save_as:
            self._profiles.save_profile(save_as, plan.profile)

        self._registry.update_last_launched(plan.agent.name)
        logger.info(
            "Launching %s (%s) with %s", plan.agent.name, plan.agent.id, plan.profile.model
        )
        return self._launcher.run(plan.request)

    def plan_profile(self, profile_name: str, options: Optional[LaunchOptions] = None) -> LaunchPlan:
        profile = self._profiles.get_profile(profile_name)
        if profile is None:
            raise ProfileNotFoundError(profile_name)
        options = replace(options or LaunchOptions(), profile=profile_name)
        return self.plan(profile.agent, options)

    def _run(
        self,
        plan: LaunchPlan,
        save_as: Optional[str],
        announce: Optional[Callable[[LaunchPlan], None]],
    ) -> int:
        if announce is not None:
            announce(plan)
        return self.execute(plan, save_as)

    def launch_agent(
        self,
        agent_name_or_id: str,
        options: Optional[LaunchOptions] = None,
        announce: Optional[Callable[[LaunchPlan], None]] = None,
    ) -> int:
        options = options or LaunchOptions()
        return self._run(self.plan(agent_name_or_id, options), options.save_as, announce)

    def launch_profile(
        self,
        profile_name: str,
        options: Optional[LaunchOptions] = None,
        announce: Optional[Callable[[LaunchPlan], None]] = None,
    ) -> int:
        options = options or LaunchOptions()
        return self._run(self.plan_profile(profile_name, options), options.save_as, announce)
