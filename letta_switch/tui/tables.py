from rich.markup import escape
from rich.table import Column, Table

from letta_switch.agents.registry import SyncResult
from letta_switch.config.models import Agent, Config, CurrentProfile, Model, Profile
from letta_switch.tui.enums import (
    CURRENT_MARKER,
    FAVORITE_MARKER,
    IDLE_MARKER,
    MODEL_TIER_STYLE,
    UIStyle,
)
from letta_switch.utils import format_timestamp


def _join(items: list[str] | None) -> str:
    return ", ".join(escape(item) for item in items) if items else ""


class AgentTable:
    @staticmethod
    def list_table(agents: list[Agent]) -> Table:
        table = Table(
            Column(header="", width=1),
            Column(header="Name", overflow="fold"),
            Column(header="ID", overflow="fold"),
            Column(header="Description", overflow="ellipsis"),
            Column(header="Tags", overflow="fold"),
            Column(header="Last launched", width=19),
            expand=True,
            header_style="bold",
        )
        for agent in agents:
            if agent.favorite:
                marker = f"[{UIStyle.YELLOW.value}]{FAVORITE_MARKER}[/{UIStyle.YELLOW.value}]"
                name = f"[bold {UIStyle.CYAN.value}]{escape(agent.name)}[/bold {UIStyle.CYAN.value}]"
            else:
                marker = f"[{UIStyle.DIM.value}]{IDLE_MARKER}[/{UIStyle.DIM.value}]"
                name = escape(agent.name)
            table.add_row(
                marker,
                name,
                escape(agent.id),
                escape(agent.description or ""),
                _join(agent.tags),
                format_timestamp(agent.last_launched),
            )
        return table

    @staticmethod
    def info_grid(agent: Agent) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("ID", escape(agent.id))
        if agent.description:
            table.add_row("Description", escape(agent.description))
        table.add_row("Created", format_timestamp(agent.created))
        if agent.tags:
            table.add_row("Tags", _join(agent.tags))
        if agent.favorite:
            table.add_row("Favorite", f"[{UIStyle.YELLOW.value}]{FAVORITE_MARKER} yes[/{UIStyle.YELLOW.value}]")
        if agent.last_launched:
            table.add_row("Last launched", format_timestamp(agent.last_launched))
        if agent.available_memory_blocks:
            table.add_row("Memory blocks", _join(agent.available_memory_blocks))
        return table


class ProfileTable:
    @staticmethod
    def list_table(profiles: dict[str, Profile], current: str | None) -> Table:
        table = Table(
            Column(header="", width=1),
            Column(header="Profile", overflow="fold"),
            Column(header="Agent", overflow="fold"),
            Column(header="Model", overflow="fold"),
            Column(header="Memory", overflow="fold"),
            Column(header="Description", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for name, profile in profiles.items():
            is_current = name == current
            if is_current:
                marker = f"[{UIStyle.GREEN.value}]{CURRENT_MARKER}[/{UIStyle.GREEN.value}]"
                label = f"[bold {UIStyle.CYAN.value}]{escape(name)}[/bold {UIStyle.CYAN.value}]"
            else:
                marker = f"[{UIStyle.DIM.value}]{IDLE_MARKER}[/{UIStyle.DIM.value}]"
                label = escape(name)
            table.add_row(
                marker,
                label,
                escape(profile.agent),
                escape(profile.model),
                _join(profile.memory_blocks),
                escape(profile.description or ""),
            )
        return table

    @staticmethod
    def detail_grid(profile: Profile) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Agent", escape(profile.agent))
        table.add_row("Model", escape(profile.model))
        table.add_row("Memory", _join(profile.memory_blocks))
        if profile.init_blocks:
            table.add_row("Init blocks", _join(profile.init_blocks))
        if profile.base_tools:
            table.add_row("Base tools", _join(profile.base_tools))
        if profile.description:
            table.add_row("Description", escape(profile.description))
        return table


class StatusTable:
    @staticmethod
    def summary_grid(config: Config, current: CurrentProfile | None) -> Table:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        if current is not None:
            table.add_row("Current profile", f"[{UIStyle.CYAN.value}]{escape(current.name)}[/{UIStyle.CYAN.value}]")
            table.add_row("  Agent", escape(current.profile.agent))
            table.add_row("  Model", escape(current.profile.model))
            table.add_row("  Memory", _join(current.profile.memory_blocks))
        else:
            table.add_row("Current profile", f"[{UIStyle.DIM.value}]none[/{UIStyle.DIM.value}]")
        table.add_row("Total agents", str(len(config.agents)))
        table.add_row("Total profiles", str(len(config.profiles)))
        if config.last_sync:
            table.add_row("Last synced", format_timestamp(config.last_sync))
        else:
            table.add_row(
                "Last synced",
                f"[{UIStyle.YELLOW.value}]never (run `letta-switch sync`)[/{UIStyle.YELLOW.value}]",
            )
        return table

    @staticmethod
    def models_table(models: dict[str, Model]) -> Table:
        table = Table(
            Column(header="Model", overflow="fold"),
            Column(header="Tier", width=12),
            Column(header="Speed", width=6),
            expand=True,
            header_style="bold",
        )
        for name, model in models.items():
            style = MODEL_TIER_STYLE.get(model.tier, UIStyle.WHITE.value)
            table.add_row(escape(name), f"[{style}]{model.tier.value}[/{style}]", model.speed.value)
        return table


class SyncTable:
    @staticmethod
    def stats_grid(result: SyncResult) -> Table:
        stats = {
            "fetched": str(result.fetched),
            "excluded": str(result.excluded),
            "added": str(len(result.added)),
            "updated": str(len(result.updated)),
            "removed": str(len(result.removed)),
            "total": str(len(result.agents)),
        }
        table = Table(show_header=False, box=None)
        for key, value in stats.items():
            table.add_row(f"[bold]{key}[/bold]", value)
        return table
