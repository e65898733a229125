import json
from typing import Any

from rich.console import Console
from rich.markup import escape

from letta_switch.agents.registry import SyncResult
from letta_switch.config.models import Agent, Config, CurrentProfile, Profile
from letta_switch.launch import LaunchPlan
from letta_switch.tui.enums import UIStyle
from letta_switch.tui.sections import UISection
from letta_switch.tui.tables import AgentTable, ProfileTable, StatusTable, SyncTable
from letta_switch.utils import compact_home_path, format_timestamp


class LettaConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_json(self, payload: Any) -> None:
        self.console.print(
            json.dumps(payload, indent=2, ensure_ascii=False),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    def render_agents(self, agents: list[Agent], last_sync: str | None = None) -> None:
        if not agents:
            self.console.print(
                UISection.note("agents", "No agents found.", style=UIStyle.YELLOW.value)
            )
        else:
            self.console.print(
                UISection.wrap(
                    "agents",
                    AgentTable.list_table(agents),
                    style=UIStyle.BLUE.value,
                    subtitle=f"last synced {format_timestamp(last_sync)}" if last_sync else None,
                )
            )
        if not last_sync:
            self.console.print(UISection.hint(["letta-switch sync"]))

    def render_agent_info(self, agent: Agent) -> None:
        self.console.print(
            UISection.wrap(
                f"agent: {escape(agent.name)}",
                AgentTable.info_grid(agent),
                style=UIStyle.CYAN.value,
            )
        )

    def render_profiles(self, profiles: dict[str, Profile], current: CurrentProfile | None) -> None:
        if not profiles:
            self.console.print(
                UISection.note("profiles", "No profiles saved.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            UISection.wrap(
                "profiles",
                ProfileTable.list_table(profiles, current.name if current else None),
                style=UIStyle.BLUE.value,
            )
        )

    def render_current_profile(self, current: CurrentProfile | None) -> None:
        if current is None:
            self.console.print(
                UISection.note("profile", "No current profile set.", style=UIStyle.DIM.value)
            )
            self.console.print(
                UISection.hint(["letta-switch <agent>", "letta-switch use <profile>"])
            )
            return
        self.console.print(
            UISection.wrap(
                f"current profile: {escape(current.name)}",
                ProfileTable.detail_grid(current.profile),
                style=UIStyle.CYAN.value,
            )
        )

    def render_status(self, config: Config, current: CurrentProfile | None, config_path: str) -> None:
        self.console.print(
            UISection.wrap(
                "letta-switch status",
                StatusTable.summary_grid(config, current),
                style=UIStyle.BLUE.value,
                subtitle=escape(compact_home_path(config_path)),
            )
        )
        if config.models:
            self.console.print(
                UISection.wrap("models", StatusTable.models_table(config.models), style=UIStyle.DIM.value)
            )

    def render_sync_result(self, result: SyncResult) -> None:
        self.console.print(
            UISection.wrap(
                "sync",
                SyncTable.stats_grid(result),
                style=UIStyle.GREEN.value,
            )
        )
        if result.removed:
            removed = "\n".join(f"- {escape(name)}" for name in result.removed)
            self.console.print(
                UISection.note("removed upstream", removed, style=UIStyle.YELLOW.value)
            )

    def render_launch(self, plan: LaunchPlan) -> None:
        self.console.print(
            UISection.wrap(
                f"launching {escape(plan.agent.name)}",
                ProfileTable.detail_grid(plan.profile),
                style=UIStyle.GREEN.value,
                subtitle=escape(plan.agent.id),
            )
        )

    def render_profile_saved(self, name: str, profile: Profile) -> None:
        self.console.print(
            UISection.wrap(
                f"profile saved: {escape(name)}",
                ProfileTable.detail_grid(profile),
                style=UIStyle.GREEN.value,
            )
        )

    def render_message(self, title: str, message: str, style: str = UIStyle.GREEN.value) -> None:
        self.console.print(UISection.note(title, message, style=style))
