from __future__ import annotations

import pytest

from src.backend.integrations.errors import UpstreamAPIError
from src.backend.integrations.huggingface_client import (
    DEFAULT_BASE_URL,
    HuggingFaceClient,
    first_field,
)
from src.backend.tests.fakes import FakeResp, RecordingRequests


def test_first_field_handles_list_and_object_shapes() -> None:
    assert first_field([{"generated_text": "a"}, {"generated_text": "b"}], "generated_text") == "a"
    assert first_field({"text": "hello"}, "text") == "hello"
    assert first_field([], "text") is None
    assert first_field("unexpected", "text") is None


def test_generate_text_merges_default_parameters(monkeypatch) -> None:
    fake = RecordingRequests(FakeResp(200, [{"generated_text": "Once upon a time"}]))
    monkeypatch.setattr("requests.request", fake)

    text = HuggingFaceClient(api_key="hf").generate_text(
        "Once", parameters={"temperature": 0.2}
    )

    assert text == "Once upon a time"
    assert fake.last["url"] == f"{DEFAULT_BASE_URL}/gpt2"
    assert fake.last["headers"]["Authorization"] == "Bearer hf"
    assert fake.last["json"] == {
        "inputs": "Once",
        "parameters": {"max_new_tokens": 100, "temperature": 0.2},
    }


def test_summarize_and_translate_reshape_first_item(monkeypatch) -> None:
    fake = RecordingRequests(
        FakeResp(200, [{"summary_text": "short"}]),
        FakeResp(200, [{"translation_text": "bonjour"}]),
    )
    monkeypatch.setattr("requests.request", fake)
    hf = HuggingFaceClient(api_key="hf")

    assert hf.summarize_text("long text") == "short"
    assert fake.last["json"]["parameters"] == {"max_length": 130, "min_length": 30}
    assert fake.last["url"].endswith("/facebook/bart-large-cnn")

    assert hf.translate_text("hello", model="Helsinki-NLP/opus-mt-en-de") == "bonjour"
    assert fake.last["url"].endswith("/Helsinki-NLP/opus-mt-en-de")


def test_answer_question_nests_inputs(monkeypatch) -> None:
    answer = {"answer": "Paris", "score": 0.98, "start": 0, "end": 5}
    fake = RecordingRequests(FakeResp(200, answer))
    monkeypatch.setattr("requests.request", fake)

    result = HuggingFaceClient(api_key="hf").answer_question("Capital?", "Paris is the capital.")

    assert result == answer
    assert fake.last["json"] == {
        "inputs": {"question": "Capital?", "context": "Paris is the capital."}
    }


def test_classify_image_fetches_then_posts_bytes(monkeypatch) -> None:
    labels = [{"label": "tabby cat", "score": 0.9}]
    fake = RecordingRequests(
        FakeResp(200, content=b"\x89PNG..."),
        FakeResp(200, labels),
    )
    monkeypatch.setattr("requests.request", fake)

    result = HuggingFaceClient(api_key="hf").classify_image("https://img.test/cat.png")

    assert result == labels
    fetch, infer = fake.calls
    assert (fetch["method"], fetch["url"]) == ("GET", "https://img.test/cat.png")
    assert infer["data"] == b"\x89PNG..."
    assert infer["json"] is None
    assert infer["headers"]["Content-Type"] == "application/octet-stream"
    assert infer["url"].endswith("/google/vit-base-patch16-224")


def test_generate_image_returns_bytes_and_content_type(monkeypatch) -> None:
    fake = RecordingRequests(
        FakeResp(200, content=b"jpegbytes", headers={"Content-Type": "image/png"})
    )
    monkeypatch.setattr("requests.request", fake)

    image = HuggingFaceClient(api_key="hf").generate_image("a red fox")

    assert image.content == b"jpegbytes"
    assert image.content_type == "image/png"


def test_speech_to_text_returns_text(monkeypatch) -> None:
    fake = RecordingRequests(FakeResp(200, {"text": "hello world"}))
    monkeypatch.setattr("requests.request", fake)

    assert HuggingFaceClient(api_key="hf").speech_to_text(b"RIFF") == "hello world"
    assert fake.last["url"].endswith("/openai/whisper-base")


def test_model_loading_error_keeps_vendor_status(monkeypatch) -> None:
    monkeypatch.setattr(
        "requests.request",
        RecordingRequests(FakeResp(503, {"error": "Model gpt2 is currently loading"})),
    )

    with pytest.raises(UpstreamAPIError) as exc_info:
        HuggingFaceClient(api_key="hf").generate_text("hi")

    assert exc_info.value.http_status == 503
    assert exc_info.value.detail == {"error": "Model gpt2 is currently loading"}
