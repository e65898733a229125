from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import click
from rich.console import Console
from rich.markup import escape

from letta_switch import __version__
from letta_switch.agents.filter import filter_by_tag, search_agents
from letta_switch.agents.registry import AgentRegistry
from letta_switch.config.models import Profile
from letta_switch.config.profiles import ProfileStore
from letta_switch.config.schema import CONFIG_SCHEMA
from letta_switch.config.store import ConfigStore
from letta_switch.constants import CONFIG_PATH_ENV
from letta_switch.errors import LettaSwitchError
from letta_switch.launch import LaunchOptions, LaunchService
from letta_switch.logging_setup import init_logging
from letta_switch.settings import SettingsRepository
from letta_switch.tui import LettaConsoleUI
from letta_switch.tui.enums import UIStyle
from letta_switch.utils import split_csv

logger = logging.getLogger(__name__)


class LettaSwitchGroup(click.Group):
    """Group that routes unknown first arguments to the ``launch`` command.

    ``letta-switch co --model m`` is the same as ``letta-switch launch co --model m``.
    """

    aliases = {"list": "agents"}
    default_command = "launch"

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        own_options = {
            opt
            for param in self.get_params(ctx)
            for opt in [*param.opts, *param.secondary_opts]
        }
        if args and args[0].startswith("-") and args[0].split("=", 1)[0] not in own_options:
            args = [self.default_command, *args]
        return super().parse_args(ctx, args)

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and not args[0].startswith("-"):
            name = args[0]
            if name not in self.commands and name not in self.aliases:
                args = [self.default_command, *args]
        return super().resolve_command(ctx, args)


@contextmanager
def _domain_errors() -> Iterator[None]:
    try:
        yield
    except LettaSwitchError as exc:
        if exc.details is not None:
            logger.debug("Error details: %s", exc.details)
        raise click.ClickException(exc.message) from exc


def _store_from_obj(obj: Dict[str, Any]) -> ConfigStore:
    return ConfigStore(CONFIG_SCHEMA, obj.get("config_path"))


def _services_from_obj(obj: Dict[str, Any]) -> tuple[AgentRegistry, ProfileStore]:
    store = _store_from_obj(obj)
    return AgentRegistry(store), ProfileStore(store)


@click.group(
    cls=LettaSwitchGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=CONFIG_PATH_ENV,
    default=None,
    help="Path to letta-config.json (default: ~/.letta/letta-config.json).",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="letta-switch")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool) -> None:
    """Configuration manager for Letta CLI (agents + models + memory blocks)."""
    init_logging("DEBUG" if verbose else None)
    ctx.obj = {"config_path": config_path}
    if ctx.invoked_subcommand is None:
        ui = LettaConsoleUI(Console())
        _, profiles = _services_from_obj(ctx.obj)
        with _domain_errors():
            ui.render_current_profile(profiles.get_current_profile())


@cli.command(help="Launch an agent by name or ID (default command).")
@click.argument("agent", required=False)
@click.option("--profile", default=None, help="Use saved profile.")
@click.option("--model", default=None, help="Model to use (e.g. claude-pro-max/claude-opus-4-5).")
@click.option("--memory", default=None, help="Comma-separated memory blocks.")
@click.option("--init-blocks", default=None, help="Comma-separated init blocks.")
@click.option("--base-tools", default=None, help="Comma-separated base tools.")
@click.option("--save-as", default=None, help="Save this configuration as a profile.")
@click.pass_obj
def launch(
    obj: Dict[str, Any],
    agent: Optional[str],
    profile: Optional[str],
    model: Optional[str],
    memory: Optional[str],
    init_blocks: Optional[str],
    base_tools: Optional[str],
    save_as: Optional[str],
) -> None:
    ui = LettaConsoleUI(Console())
    registry, profiles = _services_from_obj(obj)
    service = LaunchService(registry, profiles)

    with _domain_errors():
        if agent is None and profile is None:
            ui.render_current_profile(profiles.get_current_profile())
            return

        options = LaunchOptions(
            profile=profile,
            model=model,
            memory=split_csv(memory),
            init_blocks=split_csv(init_blocks),
            base_tools=split_csv(base_tools),
            save_as=save_as,
        )
        if agent is None:
            exit_code = service.launch_profile(profile, options, announce=ui.render_launch)
        else:
            exit_code = service.launch_agent(agent, options, announce=ui.render_launch)
        if save_as:
            ui.render_message("profile", f"Saved configuration as profile: [bold]{escape(save_as)}[/bold]")

    if exit_code != 0:
        raise click.exceptions.Exit(exit_code)


@cli.command(help="Sync agents from the Letta API.")
@click.option("--api-url", default=None, help="Custom Letta API URL.")
@click.pass_obj
def sync(obj: Dict[str, Any], api_url: Optional[str]) -> None:
    ui = LettaConsoleUI(Console())
    registry, _ = _services_from_obj(obj)
    with _domain_errors():
        api_key = SettingsRepository().get_api_key()
        result = registry.sync_from_api(api_key, api_url)
    ui.render_sync_result(result)


@cli.command(help="List synced agents. Alias: list.")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format.")
@click.option("--search", default=None, help="Search agents by name or description.")
@click.option("--tag", default=None, help="Filter by tag.")
@click.pass_obj
def agents(obj: Dict[str, Any], as_json: bool, search: Optional[str], tag: Optional[str]) -> None:
    ui = LettaConsoleUI(Console())
    registry, _ = _services_from_obj(obj)
    with _domain_errors():
        config = registry.load()

    selected = config.agents
    if search:
        selected = search_agents(selected, search)
    if tag:
        selected = filter_by_tag(selected, tag)

    if as_json:
        ui.render_json([agent.to_dict() for agent in selected])
        return
    ui.render_agents(selected, last_sync=config.last_sync)


@cli.command(help="List saved profiles.")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format.")
@click.pass_obj
def profiles(obj: Dict[str, Any], as_json: bool) -> None:
    ui = LettaConsoleUI(Console())
    _, profile_store = _services_from_obj(obj)
    with _domain_errors():
        items = profile_store.list_profiles()
        current = profile_store.get_current_profile()

    if as_json:
        ui.render_json({name: item.to_dict() for name, item in items.items()})
        return
    ui.render_profiles(items, current)


@cli.command(help="Save a launch configuration as a named profile.")
@click.argument("name")
@click.option("--agent", required=True, help="Agent name or ID.")
@click.option("--model", required=True, help="Model identifier.")
@click.option("--memory", required=True, help="Comma-separated memory blocks.")
@click.option("--description", default=None, help="Profile description.")
@click.option("--init-blocks", default=None, help="Comma-separated init blocks.")
@click.option("--base-tools", default=None, help="Comma-separated base tools.")
@click.pass_obj
def save(
    obj: Dict[str, Any],
    name: str,
    agent: str,
    model: str,
    memory: str,
    description: Optional[str],
    init_blocks: Optional[str],
    base_tools: Optional[str],
) -> None:
    ui = LettaConsoleUI(Console())
    _, profile_store = _services_from_obj(obj)
    profile = Profile(
        agent=agent,
        model=model,
        memory_blocks=split_csv(memory) or [],
        description=description,
        init_blocks=split_csv(init_blocks),
        base_tools=split_csv(base_tools),
    )
    with _domain_errors():
        profile_store.save_profile(name, profile)
    ui.render_profile_saved(name, profile)


@cli.command(help="Delete a saved profile.")
@click.argument("name")
@click.pass_obj
def delete(obj: Dict[str, Any], name: str) -> None:
    ui = LettaConsoleUI(Console())
    _, profile_store = _services_from_obj(obj)
    with _domain_errors():
        profile_store.delete_profile(name)
    ui.render_message("profile", f"Deleted profile: [bold]{escape(name)}[/bold]", style=UIStyle.YELLOW.value)


@cli.command(help="Select the current profile.")
@click.argument("name")
@click.pass_obj
def use(obj: Dict[str, Any], name: str) -> None:
    ui = LettaConsoleUI(Console())
    _, profile_store = _services_from_obj(obj)
    with _domain_errors():
        profile_store.set_current_profile(name)
        current = profile_store.get_current_profile()
    ui.render_current_profile(current)


@cli.command(help="Mark an agent as the favorite.")
@click.argument("agent")
@click.pass_obj
def favorite(obj: Dict[str, Any], agent: str) -> None:
    ui = LettaConsoleUI(Console())
    registry, _ = _services_from_obj(obj)
    with _domain_errors():
        registry.set_favorite(agent)
    ui.render_message("favorite", f"Set [bold]{escape(agent)}[/bold] as favorite agent")


@cli.command(help="Show agent information.")
@click.argument("agent")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format.")
@click.pass_obj
def info(obj: Dict[str, Any], agent: str, as_json: bool) -> None:
    ui = LettaConsoleUI(Console())
    registry, _ = _services_from_obj(obj)
    with _domain_errors():
        found = registry.get_agent(agent)
    if found is None:
        raise click.ClickException(f"Agent not found: {agent}")

    if as_json:
        ui.render_json(found.to_dict())
        return
    ui.render_agent_info(found)


@cli.command(help="Show current configuration status.")
@click.option("--json", "as_json", is_flag=True, help="Output in JSON format.")
@click.pass_obj
def status(obj: Dict[str, Any], as_json: bool) -> None:
    ui = LettaConsoleUI(Console())
    registry, profile_store = _services_from_obj(obj)
    with _domain_errors():
        config = registry.load()
        current = profile_store.get_current_profile()

    if as_json:
        ui.render_json(
            {
                "currentProfile": (
                    {"name": current.name, "profile": current.profile.to_dict()}
                    if current is not None
                    else None
                ),
                "totalAgents": len(config.agents),
                "totalProfiles": len(config.profiles),
                "lastSync": config.last_sync,
            }
        )
        return
    ui.render_status(config, current, str(registry.store.path))


def main() -> int:
    try:
        result = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
