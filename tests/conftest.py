import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    monkeypatch.delenv("LETTA_API_KEY", raising=False)
    monkeypatch.delenv("LETTA_SWITCH_CONFIG", raising=False)
    monkeypatch.delenv("LETTA_SWITCH_LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def letta_root(tmp_path: Path) -> Path:
    return tmp_path / ".letta"


@pytest.fixture
def config_path(letta_root: Path) -> Path:
    return letta_root / "letta-config.json"


@pytest.fixture
def settings_path(letta_root: Path) -> Path:
    return letta_root / "settings.json"


@pytest.fixture
def valid_config_payload() -> dict[str, Any]:
    return {
        "version": "1.0",
        "currentProfile": "default",
        "profiles": {
            "default": {
                "agent": "co",
                "model": "claude-pro-max/claude-opus-4-5",
                "memoryBlocks": ["human", "persona"],
                "description": "Default profile",
            },
        },
        "agents": [
            {
                "id": "agent-co-123",
                "name": "co",
                "description": "Main coding assistant",
                "created": "2024-01-01T00:00:00.000Z",
                "tags": ["coding"],
                "favorite": False,
            },
            {
                "id": "agent-research-456",
                "name": "research",
                "description": "Research agent",
                "created": "2024-01-02T00:00:00.000Z",
                "tags": ["research"],
                "favorite": False,
            },
        ],
        "models": {
            "claude-pro-max/claude-opus-4-5": {"tier": "subscription", "speed": "slow"},
            "anthropic/claude-3-5-sonnet": {"tier": "api", "speed": "fast"},
        },
        "filters": {"excludePatterns": ["-sleeptime$", "^test-"]},
        "lastSync": "2024-01-01T00:00:00.000Z",
    }


@pytest.fixture
def existing_config(config_path: Path, valid_config_payload, write_json) -> Path:
    write_json(config_path, valid_config_payload)
    return config_path


@pytest.fixture
def remote_agents_payload() -> list[dict[str, Any]]:
    return [
        {
            "id": "agent-123",
            "name": "main-agent",
            "description": "Main agent for testing",
            "created_at": "2024-01-01T00:00:00.000Z",
            "agent_type": "chat",
        },
        {
            "id": "agent-456",
            "name": "research-agent",
            "description": "Research agent",
            "created_at": "2024-01-02T00:00:00.000Z",
            "agent_type": "chat",
        },
        {
            "id": "agent-789",
            "name": "coding-sleeptime",
            "description": "Should be filtered out",
            "created_at": "2024-01-03T00:00:00.000Z",
            "agent_type": "internal",
        },
        {
            "id": "agent-101",
            "name": "test-agent",
            "description": "Test agent - should be filtered",
            "created_at": "2024-01-04T00:00:00.000Z",
            "agent_type": "test",
        },
    ]


class FakeResponse:
    def __init__(self, payload: Any) -> None:
        self._payload = payload if isinstance(payload, str) else json.dumps(payload)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return None

    def read(self) -> bytes:
        return self._payload.encode("utf-8")


@pytest.fixture
def fake_api(monkeypatch):
    """Route ``urlopen`` in the API client to canned payloads keyed by URL path."""
    routes: dict[str, Any] = {}
    calls: list[Any] = []

    def _urlopen(request, timeout=None):
        calls.append(request)
        path = request.full_url.split("/v1", 1)[-1]
        handler = routes.get(path)
        if handler is None:
            raise AssertionError(f"Unexpected request: {request.full_url}")
        if isinstance(handler, Exception):
            raise handler
        return FakeResponse(handler)

    monkeypatch.setattr("letta_switch.api.client.urlopen", _urlopen)

    class _Api:
        def route(self, path: str, payload: Any) -> None:
            routes[path] = payload

        @property
        def calls(self) -> list[Any]:
            return calls

    return _Api()


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("COLUMNS", "200")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
