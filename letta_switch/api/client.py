"""Minimal client for the Letta agents API."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from letta_switch.config.models import RemoteAgent
from letta_switch.config.schema import REMOTE_AGENT_SCHEMA
from letta_switch.constants import (
    API_BASE_URL,
    API_TIMEOUT_SECONDS,
    HTTP_NOT_FOUND,
    HTTP_UNAUTHORIZED,
)
from letta_switch.errors import (
    AgentNotFoundError,
    ApiError,
    ApiKeyMissingError,
    InvalidConfigSchemaError,
)
from letta_switch.utils import redact_api_key

logger = logging.getLogger(__name__)


class LettaAPIClient:
    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: int = API_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "User-Agent": "letta-switch",
        }

    def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        request = Request(url, headers=self._headers(), method="GET")
        try:
            with urlopen(request, timeout=self.timeout) as response:
                payload = response.read().decode("utf-8")
        except HTTPError as exc:
            logger.debug("API request failed: %s", redact_api_key(str(exc)))
            raise
        except (URLError, OSError) as exc:
            message = redact_api_key(str(getattr(exc, "reason", exc)))
            logger.debug("API request failed: %s", message)
            raise ApiError(f"Failed to reach Letta API: {message}") from exc

        logger.debug("API request successful: %s", url)
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ApiError(f"Invalid API response: {exc}") from exc

    @staticmethod
    def _error_details(exc: HTTPError) -> tuple[str, Any]:
        body: Any = None
        try:
            raw = exc.read().decode("utf-8")
            body = json.loads(raw) if raw else None
        except (OSError, ValueError):
            body = None
        message = exc.reason if isinstance(exc.reason, str) else str(exc)
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            message = body["message"]
        return redact_api_key(message), body

    def _parse_agent(self, raw: Any) -> RemoteAgent:
        try:
            return REMOTE_AGENT_SCHEMA.parse(raw)
        except InvalidConfigSchemaError as exc:
            raise ApiError(
                f"Invalid agent in API response ({exc.detail})", details=raw
            ) from exc

    def fetch_agents(self) -> list[RemoteAgent]:
        logger.debug("Fetching agents from Letta API")
        try:
            data = self._get("/agents")
        except HTTPError as exc:
            message, body = self._error_details(exc)
            if exc.code == HTTP_UNAUTHORIZED:
                raise ApiKeyMissingError(
                    "API authentication failed. Check your LETTA_API_KEY",
                    details={"status": exc.code, "message": message},
                ) from exc
            raise ApiError(
                f"Failed to fetch agents: {message}",
                details={"status": exc.code, "data": body},
            ) from exc

        if not isinstance(data, list):
            raise ApiError("Invalid API response: expected array of agents")

        agents = [self._parse_agent(item) for item in data]
        logger.debug("Fetched %d agents", len(agents))
        return agents

    def get_agent(self, agent_id: str) -> RemoteAgent:
        logger.debug("Fetching agent %s", agent_id)
        try:
            data = self._get(f"/agents/{quote(agent_id, safe='')}")
        except HTTPError as exc:
            message, body = self._error_details(exc)
            if exc.code == HTTP_NOT_FOUND:
                raise AgentNotFoundError(agent_id, details={"id": agent_id}) from exc
            if exc.code == HTTP_UNAUTHORIZED:
                raise ApiKeyMissingError(
                    "API authentication failed. Check your LETTA_API_KEY",
                    details={"status": exc.code, "message": message},
                ) from exc
            raise ApiError(
                f"Failed to fetch agent: {message}",
                details={"status": exc.code, "data": body},
            ) from exc
        return self._parse_agent(data)
