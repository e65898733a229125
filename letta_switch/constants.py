from typing import Final


LETTA_DIR_NAME: Final[str] = ".letta"
CONFIG_FILE_NAME: Final[str] = "letta-config.json"
SETTINGS_FILE_NAME: Final[str] = "settings.json"
BACKUP_SUFFIX: Final[str] = ".backup"

CONFIG_PATH_ENV: Final[str] = "LETTA_SWITCH_CONFIG"
API_KEY_ENV: Final[str] = "LETTA_API_KEY"

API_BASE_URL: Final[str] = "https://api.letta.com/v1"
API_TIMEOUT_SECONDS: Final[int] = 30
HTTP_UNAUTHORIZED: Final[int] = 401
HTTP_NOT_FOUND: Final[int] = 404

CONFIG_VERSION: Final[str] = "1.0"

LETTA_EXECUTABLE: Final[str] = "letta"

DEFAULT_MODEL: Final[str] = "claude-pro-max/claude-opus-4-5"
DEFAULT_MEMORY_BLOCKS: Final[tuple[str, ...]] = ("human", "persona")
DEFAULT_AGENT_NAME: Final[str] = "co"
DEFAULT_PROFILE_NAME: Final[str] = "default"
DEFAULT_PROFILE_DESCRIPTION: Final[str] = "Default profile"

DEFAULT_MODELS: Final[dict[str, dict[str, str]]] = {
    "claude-pro-max/claude-opus-4-5": {"tier": "subscription", "speed": "slow"},
    "claude-pro-max/claude-sonnet-4-5": {"tier": "subscription", "speed": "fast"},
    "anthropic/claude-opus-4-5": {"tier": "api", "speed": "slow"},
    "z.ai/glm-4.7": {"tier": "api", "speed": "fast"},
}

# Letta-internal sleeptime agents and throwaway test agents.
DEFAULT_EXCLUDE_PATTERNS: Final[tuple[str, ...]] = (
    "-sleeptime$",
    "^test-",
)

API_KEY_PATTERN: Final[str] = r"at-let-[a-zA-Z0-9]{64}"
API_KEY_REDACTED: Final[str] = "at-let-***REDACTED***"
