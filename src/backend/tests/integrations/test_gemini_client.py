from __future__ import annotations

import pytest

from src.backend.integrations.errors import UpstreamAPIError
from src.backend.integrations.gemini_client import GeminiClient, extract_candidate_text
from src.backend.integrations.gemini_prompts import (
    build_analysis_prompt,
    build_document_prompt,
    build_enhancement_prompt,
)
from src.backend.tests.fakes import FakeResp, RecordingRequests


def _candidate(*texts: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": t} for t in texts]}}]}


def test_analysis_prompts_by_type() -> None:
    assert build_analysis_prompt("abc").startswith(
        "Please provide a concise summary of the following text:\n\nabc"
    )
    assert "positive, negative, or neutral" in build_analysis_prompt("abc", "sentiment")
    assert build_analysis_prompt("abc", "unknown") == "Analyze the following text:\n\nabc"


def test_enhancement_prompts_by_type() -> None:
    assert build_enhancement_prompt("abc", "casual").startswith(
        "Rewrite the following text in a more casual and conversational tone:"
    )
    assert build_enhancement_prompt("abc", "bogus") == "Enhance the following text:\n\nabc"


def test_document_prompt_includes_topic_and_length_guide() -> None:
    prompt = build_document_prompt("Rust vs Go", "blog post", "short")
    assert 'Create a well-structured blog post about "Rust vs Go".' in prompt
    assert "around 200-300 words" in prompt
    assert "- A compelling title" in prompt
    assert "Use appropriate length" in build_document_prompt("x", length="epic")


def test_extract_candidate_text_joins_parts() -> None:
    assert extract_candidate_text(_candidate("Hello", ", world")) == "Hello, world"


def test_extract_candidate_text_blocked_prompt_is_an_error() -> None:
    with pytest.raises(UpstreamAPIError) as exc_info:
        extract_candidate_text({"promptFeedback": {"blockReason": "SAFETY"}})
    assert exc_info.value.detail == {"blockReason": "SAFETY"}
    assert exc_info.value.http_status == 500


def test_generate_content_posts_prompt_with_key_header(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "gk")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    fake = RecordingRequests(FakeResp(200, _candidate("42")))
    monkeypatch.setattr("requests.request", fake)

    text = GeminiClient.from_env().generate_content("meaning of life?")

    assert text == "42"
    assert fake.last["url"] == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-test:generateContent"
    )
    assert fake.last["headers"]["x-goog-api-key"] == "gk"
    assert fake.last["json"]["contents"][0]["parts"] == [{"text": "meaning of life?"}]


def test_enhance_content_sends_built_prompt(monkeypatch) -> None:
    fake = RecordingRequests(FakeResp(200, _candidate("better")))
    monkeypatch.setattr("requests.request", fake)

    GeminiClient(api_key="gk").enhance_content("meh", "expand")

    sent = fake.last["json"]["contents"][0]["parts"][0]["text"]
    assert sent == build_enhancement_prompt("meh", "expand")


def test_invalid_key_keeps_vendor_status(monkeypatch) -> None:
    body = {"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}}
    monkeypatch.setattr("requests.request", RecordingRequests(FakeResp(400, body)))

    with pytest.raises(UpstreamAPIError) as exc_info:
        GeminiClient(api_key="bad").analyze_content("text")

    assert exc_info.value.http_status == 400
