"""Aggregating router: every vendor router under `/api`, Taskade at the root."""

from fastapi import APIRouter

from src.backend.api.cloudflare_router import cloudflare_router
from src.backend.api.gemini_router import gemini_router
from src.backend.api.gitlab_router import gitlab_router
from src.backend.api.google_docs_router import google_docs_router
from src.backend.api.huggingface_router import huggingface_router
from src.backend.api.taskade_router import taskade_router

api_router = APIRouter(
    prefix="/api",
    responses={404: {"description": "Not found"}},
)
api_router.include_router(cloudflare_router)
api_router.include_router(huggingface_router)
api_router.include_router(google_docs_router)
api_router.include_router(gitlab_router)
api_router.include_router(gemini_router)

# Taskade keeps its upstream-shaped paths (/agents, /agents/{id}/execute).
root_router = APIRouter()
root_router.include_router(taskade_router)
