"""Taskade agents API Router.

Mounted at the application root (`/agents`), mirroring Taskade's own paths.
Bodies go upstream untouched and upstream JSON comes back untouched.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from src.backend.api.dependencies import get_taskade_client
from src.backend.integrations.taskade_client import TaskadeClient

taskade_router = APIRouter(prefix="/agents", tags=["Taskade"])


@taskade_router.get("")
def list_agents(taskade: TaskadeClient = Depends(get_taskade_client)):
    return taskade.list_agents()


@taskade_router.post("")
def create_agent(
    agent: dict[str, Any] | None = Body(None),
    taskade: TaskadeClient = Depends(get_taskade_client),
):
    return taskade.create_agent(agent or {})


@taskade_router.post("/{agent_id}/execute")
def execute_agent(
    agent_id: str,
    payload: dict[str, Any] | None = Body(None),
    taskade: TaskadeClient = Depends(get_taskade_client),
):
    return taskade.execute_agent(agent_id, payload or {})
