"""Taskade connector: list, create and execute AI agents.

Responses are returned exactly as Taskade sends them.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from src.backend.integrations.errors import UpstreamAPIError
from src.backend.integrations.http_client import request_json, require_env, timeout_from_env

logger = logging.getLogger(__name__)

VENDOR = "taskade"
DEFAULT_BASE_URL = "https://www.taskade.com/api/v1"
MISSING_KEY_MESSAGE = (
    "TASKADE_API_KEY environment variable is not set. Please add it to Secrets."
)


class TaskadeClient:
    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_env(cls) -> "TaskadeClient":
        api_key = require_env(VENDOR, "TASKADE_API_KEY", MISSING_KEY_MESSAGE)
        return cls(
            api_key=api_key,
            base_url=os.environ.get("TASKADE_API_URL", DEFAULT_BASE_URL),
            timeout_seconds=timeout_from_env("TASKADE"),
        )

    def _call(self, action: str, method: str, path: str, json_body: Any = None) -> Any:
        try:
            return request_json(
                method,
                f"{self._base_url}{path}",
                vendor=VENDOR,
                headers={
                    "x-api-key": self._api_key,
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                json_body=json_body,
                timeout=self._timeout_seconds,
            )
        except UpstreamAPIError as e:
            logger.error(f"Error {action}: {e}")
            raise

    def list_agents(self) -> Any:
        return self._call("listing agents", "GET", "/agents")

    def create_agent(self, agent: dict[str, Any]) -> Any:
        return self._call("creating agent", "POST", "/agents", agent)

    def execute_agent(self, agent_id: str, payload: dict[str, Any]) -> Any:
        return self._call("executing agent", "POST", f"/agents/{agent_id}/execute", payload)
