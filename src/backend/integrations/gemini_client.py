"""Gemini (Google Generative Language API) connector.

Only single-turn text generation is used: every endpoint builds one prompt
(see `gemini_prompts`) and returns the text of the first candidate.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from src.backend.integrations.errors import UpstreamAPIError
from src.backend.integrations.gemini_prompts import (
    build_analysis_prompt,
    build_document_prompt,
    build_enhancement_prompt,
)
from src.backend.integrations.http_client import request_json, require_env, timeout_from_env

logger = logging.getLogger(__name__)

VENDOR = "gemini"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"


def extract_candidate_text(response: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate.

    A response without candidates means the prompt was blocked; surface the
    `promptFeedback` as an upstream error rather than returning "".
    """

    candidates = response.get("candidates") if isinstance(response, dict) else None
    if not candidates:
        feedback = (response or {}).get("promptFeedback") if isinstance(response, dict) else None
        raise UpstreamAPIError(VENDOR, None, feedback or "Gemini returned no candidates")

    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


class GeminiClient:
    def __init__(
        self,
        *,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_env(cls) -> "GeminiClient":
        api_key = require_env(VENDOR, "GEMINI_API_KEY")
        return cls(
            api_key=api_key,
            model=os.environ.get("GEMINI_MODEL") or DEFAULT_MODEL,
            base_url=os.environ.get("GEMINI_API_URL", DEFAULT_BASE_URL),
            timeout_seconds=timeout_from_env("GEMINI"),
        )

    @property
    def model(self) -> str:
        return self._model

    def _generate(self, action: str, prompt: str) -> str:
        url = f"{self._base_url}/models/{self._model}:generateContent"
        try:
            response = request_json(
                "POST",
                url,
                vendor=VENDOR,
                headers={"x-goog-api-key": self._api_key, "Content-Type": "application/json"},
                json_body={"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
                timeout=self._timeout_seconds,
            )
            return extract_candidate_text(response)
        except UpstreamAPIError as e:
            logger.error(f"Error {action}: {e}")
            raise

    def generate_content(self, prompt: str) -> str:
        return self._generate("generating content", prompt)

    def analyze_content(self, text: str, analysis_type: str = "summary") -> str:
        return self._generate("analyzing content", build_analysis_prompt(text, analysis_type))

    def generate_document_content(
        self, topic: str, content_type: str = "article", length: str = "medium"
    ) -> str:
        return self._generate(
            "generating document content",
            build_document_prompt(topic, content_type, length),
        )

    def enhance_content(self, text: str, enhancement_type: str = "improve") -> str:
        return self._generate(
            "enhancing content", build_enhancement_prompt(text, enhancement_type)
        )
