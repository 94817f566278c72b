"""FastAPI dependencies and the shared success envelope.

Clients are built per request from the environment, so a credential added to
the environment is picked up without a restart. Tests swap them out through
`app.dependency_overrides`.
"""

from typing import Any

from src.backend.integrations.cloudflare_client import CloudflareClient
from src.backend.integrations.gemini_client import GeminiClient
from src.backend.integrations.gitlab_client import GitLabClient
from src.backend.integrations.google_docs_client import GoogleDocsClient
from src.backend.integrations.huggingface_client import HuggingFaceClient
from src.backend.integrations.taskade_client import TaskadeClient


def success(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def get_cloudflare_client() -> CloudflareClient:
    return CloudflareClient.from_env()


def get_huggingface_client() -> HuggingFaceClient:
    return HuggingFaceClient.from_env()


def get_google_docs_client() -> GoogleDocsClient:
    return GoogleDocsClient.from_env()


def get_gitlab_client() -> GitLabClient:
    return GitLabClient.from_env()


def get_gemini_client() -> GeminiClient:
    return GeminiClient.from_env()


def get_taskade_client() -> TaskadeClient:
    return TaskadeClient.from_env()
