import io
import json
import subprocess
import sys
from pathlib import Path
from urllib.error import HTTPError

import pytest

from letta_switch.__main__ import cli, main

API_KEY = "at-let-" + "k" * 64


@pytest.fixture
def launched(monkeypatch):
    commands: list[list[str]] = []
    exit_codes = [0]

    def fake_run(command, check):
        commands.append(command)
        return subprocess.CompletedProcess(command, exit_codes[0])

    monkeypatch.setattr("letta_switch.launcher.subprocess.run", fake_run)

    class _Launched:
        def set_exit_code(self, code: int) -> None:
            exit_codes[0] = code

        @property
        def commands(self) -> list[list[str]]:
            return commands

    return _Launched()


def _config(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_agents_json(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["agents", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [agent["name"] for agent in payload] == ["co", "research"]
    assert payload[0]["id"] == "agent-co-123"


def test_list_is_alias_for_agents(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["list", "--json"])

    assert result.exit_code == 0, result.output
    assert len(json.loads(result.stdout)) == 2


def test_agents_search_and_tag(cli_runner, existing_config: Path) -> None:
    searched = cli_runner.invoke(cli, ["agents", "--json", "--search", "ASSISTANT"])
    tagged = cli_runner.invoke(cli, ["agents", "--json", "--tag", "research"])

    assert [agent["name"] for agent in json.loads(searched.stdout)] == ["co"]
    assert [agent["name"] for agent in json.loads(tagged.stdout)] == ["research"]


def test_agents_table(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["agents"])

    assert result.exit_code == 0, result.output
    assert "agent-co-123" in result.output
    assert "research" in result.output


def test_agents_without_config_creates_default(cli_runner, config_path: Path) -> None:
    result = cli_runner.invoke(cli, ["agents"])

    assert result.exit_code == 0, result.output
    assert "No agents found." in result.output
    assert "letta-switch sync" in result.output
    assert config_path.is_file()


def test_config_option_overrides_default_path(cli_runner, tmp_path: Path, valid_config_payload, write_json) -> None:
    custom = tmp_path / "elsewhere" / "config.json"
    valid_config_payload["agents"] = valid_config_payload["agents"][:1]
    write_json(custom, valid_config_payload)

    result = cli_runner.invoke(cli, ["--config", str(custom), "agents", "--json"])

    assert result.exit_code == 0, result.output
    assert [agent["name"] for agent in json.loads(result.stdout)] == ["co"]


def test_config_path_from_environment(cli_runner, tmp_path: Path, valid_config_payload, write_json) -> None:
    custom = tmp_path / "env-config.json"
    valid_config_payload["agents"] = []
    write_json(custom, valid_config_payload)

    result = cli_runner.invoke(cli, ["agents", "--json"], env={"LETTA_SWITCH_CONFIG": str(custom)})

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == []


def test_invalid_config_reports_error(cli_runner, config_path: Path) -> None:
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{not json", encoding="utf-8")

    result = cli_runner.invoke(cli, ["agents"])

    assert result.exit_code == 1
    assert "Invalid JSON format" in result.output


def test_profiles_json(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["profiles", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "default": {
            "agent": "co",
            "model": "claude-pro-max/claude-opus-4-5",
            "memoryBlocks": ["human", "persona"],
            "description": "Default profile",
        }
    }


def test_profiles_without_config(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["profiles"])

    assert result.exit_code == 1
    assert "letta-switch sync" in result.output


def test_save_use_and_delete_profile(cli_runner, existing_config: Path) -> None:
    saved = cli_runner.invoke(
        cli,
        [
            "save",
            "research",
            "--agent",
            "research",
            "--model",
            "anthropic/claude-3-5-sonnet",
            "--memory",
            "human,persona",
            "--base-tools",
            "memory,web_search",
        ],
    )
    assert saved.exit_code == 0, saved.output
    assert _config(existing_config)["profiles"]["research"] == {
        "agent": "research",
        "model": "anthropic/claude-3-5-sonnet",
        "memoryBlocks": ["human", "persona"],
        "baseTools": ["memory", "web_search"],
    }

    used = cli_runner.invoke(cli, ["use", "research"])
    assert used.exit_code == 0, used.output
    assert _config(existing_config)["currentProfile"] == "research"

    deleted = cli_runner.invoke(cli, ["delete", "research"])
    assert deleted.exit_code == 0, deleted.output
    payload = _config(existing_config)
    assert "research" not in payload["profiles"]
    assert "currentProfile" not in payload


def test_save_rejects_empty_memory(cli_runner, existing_config: Path) -> None:
    before = existing_config.read_text(encoding="utf-8")

    result = cli_runner.invoke(cli, ["save", "bad", "--agent", "co", "--model", "m", "--memory", ","])

    assert result.exit_code == 1
    assert "Invalid config schema" in result.output
    assert existing_config.read_text(encoding="utf-8") == before


def test_use_unknown_profile(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["use", "ghost"])

    assert result.exit_code == 1
    assert "Profile not found: ghost" in result.output


def test_delete_unknown_profile(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["delete", "ghost"])

    assert result.exit_code == 1
    assert "Profile not found: ghost" in result.output


def test_favorite(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["favorite", "research"])

    assert result.exit_code == 0, result.output
    favorites = [agent["name"] for agent in _config(existing_config)["agents"] if agent["favorite"]]
    assert favorites == ["research"]


def test_favorite_unknown_agent(cli_runner, existing_config: Path) -> None:
    before = existing_config.read_bytes()

    result = cli_runner.invoke(cli, ["favorite", "ghost"])

    assert result.exit_code == 1
    assert "Agent not found: ghost" in result.output
    assert existing_config.read_bytes() == before


def test_info_json(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["info", "agent-research-456", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["name"] == "research"


def test_info_text(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["info", "co"])

    assert result.exit_code == 0, result.output
    assert "agent: co" in result.output
    assert "Main coding assistant" in result.output


def test_info_unknown_agent(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["info", "ghost"])

    assert result.exit_code == 1
    assert "Agent not found: ghost" in result.output


def test_status_json(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["status", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "currentProfile": {
            "name": "default",
            "profile": {
                "agent": "co",
                "model": "claude-pro-max/claude-opus-4-5",
                "memoryBlocks": ["human", "persona"],
                "description": "Default profile",
            },
        },
        "totalAgents": 2,
        "totalProfiles": 1,
        "lastSync": "2024-01-01T00:00:00.000Z",
    }


def test_status_text(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["status"])

    assert result.exit_code == 0, result.output
    assert "letta-switch status" in result.output
    assert "~/.letta/letta-config.json" in result.output


def test_sync(
    cli_runner, existing_config: Path, settings_path: Path, write_json, fake_api, remote_agents_payload
) -> None:
    write_json(settings_path, {"env": {"LETTA_API_KEY": API_KEY}})
    fake_api.route("/agents", remote_agents_payload)

    result = cli_runner.invoke(cli, ["sync", "--api-url", "http://localhost:8283/v1"])

    assert result.exit_code == 0, result.output
    assert fake_api.calls[0].full_url == "http://localhost:8283/v1/agents"
    assert fake_api.calls[0].get_header("Authorization") == f"Bearer {API_KEY}"
    payload = _config(existing_config)
    assert [agent["name"] for agent in payload["agents"]] == ["main-agent", "research-agent"]
    assert payload["lastSync"] != "2024-01-01T00:00:00.000Z"


def test_sync_without_settings(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, ["sync"])

    assert result.exit_code == 1
    assert "Run `letta` to authenticate first" in result.output


def test_sync_unauthorized(cli_runner, existing_config: Path, fake_api) -> None:
    fake_api.route("/agents", HTTPError("http://x/v1/agents", 401, "Unauthorized", {}, io.BytesIO(b"")))

    result = cli_runner.invoke(cli, ["sync"], env={"LETTA_API_KEY": API_KEY})

    assert result.exit_code == 1
    assert "API authentication failed" in result.output
    assert API_KEY not in result.output


def test_launch_command(cli_runner, existing_config: Path, launched) -> None:
    result = cli_runner.invoke(cli, ["launch", "co", "--model", "anthropic/claude-3-5-sonnet"])

    assert result.exit_code == 0, result.output
    assert launched.commands == [
        ["letta", "--agent", "agent-co-123", "--model", "anthropic/claude-3-5-sonnet"]
    ]
    assert "lastLaunched" in _config(existing_config)["agents"][0]


def test_agent_name_routes_to_launch(cli_runner, existing_config: Path, launched) -> None:
    result = cli_runner.invoke(cli, ["research", "--init-blocks", "human,persona"])

    assert result.exit_code == 0, result.output
    assert launched.commands[0][:3] == ["letta", "--agent", "agent-research-456"]
    assert launched.commands[0][-2:] == ["--init-blocks", "human,persona"]


def test_leading_option_routes_to_launch(cli_runner, existing_config: Path, launched) -> None:
    result = cli_runner.invoke(cli, ["--profile", "default"])

    assert result.exit_code == 0, result.output
    assert launched.commands == [
        ["letta", "--agent", "agent-co-123", "--model", "claude-pro-max/claude-opus-4-5"]
    ]


def test_launch_save_as(cli_runner, existing_config: Path, launched) -> None:
    result = cli_runner.invoke(cli, ["co", "--memory", "human", "--save-as", "quick"])

    assert result.exit_code == 0, result.output
    assert _config(existing_config)["profiles"]["quick"]["memoryBlocks"] == ["human"]


def test_launch_propagates_exit_code(cli_runner, existing_config: Path, launched) -> None:
    launched.set_exit_code(3)

    result = cli_runner.invoke(cli, ["co"])

    assert result.exit_code == 3


def test_launch_unknown_agent(cli_runner, existing_config: Path, launched) -> None:
    result = cli_runner.invoke(cli, ["ghost"])

    assert result.exit_code == 1
    assert "Agent not found: ghost" in result.output
    assert launched.commands == []


def test_no_arguments_shows_current_profile(cli_runner, existing_config: Path) -> None:
    result = cli_runner.invoke(cli, [])

    assert result.exit_code == 0, result.output
    assert "current profile: default" in result.output


def test_main_returns_exit_codes(existing_config: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "argv", ["letta-switch", "status", "--json"])
    assert main() == 0
    assert json.loads(capsys.readouterr().out)["totalAgents"] == 2

    monkeypatch.setattr(sys, "argv", ["letta-switch", "info", "ghost"])
    assert main() == 1
    assert "Agent not found: ghost" in capsys.readouterr().err


def test_config_option_with_equals_sign(cli_runner, tmp_path: Path, valid_config_payload, write_json) -> None:
    custom = tmp_path / "other" / "config.json"
    write_json(custom, valid_config_payload)

    result = cli_runner.invoke(cli, [f"--config={custom}", "info", "co", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["id"] == "agent-co-123"


def test_launch_unknown_profile(cli_runner, existing_config: Path, launched) -> None:
    result = cli_runner.invoke(cli, ["launch", "--profile", "ghost"])

    assert result.exit_code == 1
    assert "Profile not found: ghost" in result.output
    assert launched.commands == []


def test_launch_profile_shows_plan(cli_runner, existing_config: Path, launched) -> None:
    result = cli_runner.invoke(cli, ["launch", "--profile", "default"])

    assert result.exit_code == 0, result.output
    assert "launching co" in result.output
    assert launched.commands[0][:3] == ["letta", "--agent", "agent-co-123"]
