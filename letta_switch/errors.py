from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ErrorCode(str, Enum):
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    INVALID_CONFIG = "INVALID_CONFIG"
    AGENT_NOT_FOUND = "AGENT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    API_ERROR = "API_ERROR"
    API_KEY_MISSING = "API_KEY_MISSING"
    SECURITY_ERROR = "SECURITY_ERROR"
    LAUNCH_FAILED = "LAUNCH_FAILED"


class LettaSwitchError(Exception):
    """Base user-facing application error."""

    code: ErrorCode = ErrorCode.INVALID_CONFIG

    def __init__(
        self,
        message: str,
        code: Optional[ErrorCode] = None,
        details: Any = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(message)


class ConfigNotFoundError(LettaSwitchError):
    code = ErrorCode.CONFIG_NOT_FOUND

    def __init__(self, path: Path, message: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message or f"Configuration not found at {path}")


class InvalidConfigError(LettaSwitchError):
    code = ErrorCode.INVALID_CONFIG


class ConfigFileError(InvalidConfigError):
    def __init__(self, path: Optional[Path], message: str) -> None:
        self.path = path
        super().__init__(f"{message}: {path}" if path is not None else message)


class InvalidJsonFormatError(ConfigFileError):
    def __init__(self, path: Optional[Path], detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(ConfigFileError):
    def __init__(self, path: Optional[Path], detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class AgentNotFoundError(LettaSwitchError):
    code = ErrorCode.AGENT_NOT_FOUND

    def __init__(self, name: str, details: Any = None) -> None:
        self.name = name
        super().__init__(f"Agent not found: {name}", details=details)


class ProfileNotFoundError(LettaSwitchError):
    code = ErrorCode.PROFILE_NOT_FOUND

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Profile not found: {name}")


class ApiError(LettaSwitchError):
    code = ErrorCode.API_ERROR


class ApiKeyMissingError(LettaSwitchError):
    code = ErrorCode.API_KEY_MISSING


class SecurityError(LettaSwitchError):
    code = ErrorCode.SECURITY_ERROR


class LaunchError(LettaSwitchError):
    code = ErrorCode.LAUNCH_FAILED


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)
