"""Hugging Face Inference API connector.

Every task is a POST to `{base}/{model}`: JSON `{inputs, parameters}` for text
tasks, raw bytes for image/audio tasks. Model ids and parameters are forwarded
as-is; only a handful of tasks reshape the response (see `first_field`).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from src.backend.integrations.errors import UpstreamAPIError
from src.backend.integrations.http_client import request_json, require_env, timeout_from_env

logger = logging.getLogger(__name__)

VENDOR = "huggingface"
DEFAULT_BASE_URL = "https://router.huggingface.co/hf-inference/models"

DEFAULT_MODELS: dict[str, str] = {
    "text_generation": "gpt2",
    "text_classification": "cardiffnlp/twitter-roberta-base-sentiment-latest",
    "question_answering": "deepset/roberta-base-squad2",
    "summarization": "facebook/bart-large-cnn",
    "token_classification": "dbmdz/bert-large-cased-finetuned-conll03-english",
    "translation": "Helsinki-NLP/opus-mt-en-fr",
    "feature_extraction": "sentence-transformers/all-MiniLM-L6-v2",
    "fill_mask": "bert-base-uncased",
    "image_classification": "google/vit-base-patch16-224",
    "object_detection": "facebook/detr-resnet-50",
    "text_to_image": "runwayml/stable-diffusion-v1-5",
    "speech_recognition": "openai/whisper-base",
}

TEXT_GENERATION_DEFAULTS: dict[str, Any] = {"max_new_tokens": 100, "temperature": 0.7}
SUMMARIZATION_DEFAULTS: dict[str, Any] = {"max_length": 130, "min_length": 30}


def first_field(result: Any, field: str) -> Any:
    """Pull `field` out of a task response.

    Pipelines answer either `[{field: ...}, ...]` or `{field: ...}`; take the
    first item in the list form. Returns None when the field is absent.
    """

    if isinstance(result, list):
        result = result[0] if result else None
    if isinstance(result, dict):
        return result.get(field)
    return None


@dataclass(frozen=True, slots=True)
class GeneratedImage:
    content: bytes
    content_type: str


class HuggingFaceClient:
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
    def from_env(cls) -> "HuggingFaceClient":
        api_key = require_env(VENDOR, "HUGGINGFACE_API_KEY")
        return cls(
            api_key=api_key,
            base_url=os.environ.get("HUGGINGFACE_API_URL", DEFAULT_BASE_URL),
            timeout_seconds=timeout_from_env("HUGGINGFACE"),
        )

    def _model_url(self, model: str) -> str:
        return f"{self._base_url}/{model}"

    def _infer(
        self,
        action: str,
        model: str,
        *,
        payload: dict[str, Any] | None = None,
        data: bytes | None = None,
        expect_json: bool = True,
    ) -> Any:
        headers = {"Authorization": f"Bearer {self._api_key}"}
        if data is not None:
            headers["Content-Type"] = "application/octet-stream"
        try:
            return request_json(
                "POST",
                self._model_url(model),
                vendor=VENDOR,
                headers=headers,
                json_body=payload,
                data=data,
                timeout=self._timeout_seconds,
                expect_json=expect_json,
            )
        except UpstreamAPIError as e:
            logger.error(f"Error {action}: {e}")
            raise

    def _fetch_bytes(self, action: str, url: str) -> bytes:
        try:
            resp = request_json(
                "GET", url, vendor=VENDOR, timeout=self._timeout_seconds, expect_json=False
            )
        except UpstreamAPIError as e:
            logger.error(f"Error {action}: {e}")
            raise
        return resp.content

    # Text tasks

    def generate_text(
        self,
        prompt: str,
        *,
        model: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> str | None:
        result = self._infer(
            "generating text",
            model or DEFAULT_MODELS["text_generation"],
            payload={
                "inputs": prompt,
                "parameters": {**TEXT_GENERATION_DEFAULTS, **(parameters or {})},
            },
        )
        return first_field(result, "generated_text")

    def classify_text(self, text: str, *, model: str | None = None) -> Any:
        return self._infer(
            "classifying text",
            model or DEFAULT_MODELS["text_classification"],
            payload={"inputs": text},
        )

    def answer_question(self, question: str, context: str, *, model: str | None = None) -> Any:
        return self._infer(
            "answering question",
            model or DEFAULT_MODELS["question_answering"],
            payload={"inputs": {"question": question, "context": context}},
        )

    def summarize_text(
        self,
        text: str,
        *,
        model: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> str | None:
        result = self._infer(
            "summarizing text",
            model or DEFAULT_MODELS["summarization"],
            payload={
                "inputs": text,
                "parameters": {**SUMMARIZATION_DEFAULTS, **(parameters or {})},
            },
        )
        return first_field(result, "summary_text")

    def extract_entities(self, text: str, *, model: str | None = None) -> Any:
        return self._infer(
            "extracting entities",
            model or DEFAULT_MODELS["token_classification"],
            payload={"inputs": text},
        )

    def translate_text(self, text: str, *, model: str | None = None) -> str | None:
        result = self._infer(
            "translating text",
            model or DEFAULT_MODELS["translation"],
            payload={"inputs": text},
        )
        return first_field(result, "translation_text")

    def get_embeddings(self, text: str | list[str], *, model: str | None = None) -> Any:
        return self._infer(
            "getting embeddings",
            model or DEFAULT_MODELS["feature_extraction"],
            payload={"inputs": text},
        )

    def fill_mask(self, text: str, *, model: str | None = None) -> Any:
        return self._infer(
            "filling mask",
            model or DEFAULT_MODELS["fill_mask"],
            payload={"inputs": text},
        )

    # Image / audio tasks

    def classify_image(self, image_url: str, *, model: str | None = None) -> Any:
        image = self._fetch_bytes("classifying image", image_url)
        return self._infer(
            "classifying image",
            model or DEFAULT_MODELS["image_classification"],
            data=image,
        )

    def detect_objects(self, image_url: str, *, model: str | None = None) -> Any:
        image = self._fetch_bytes("detecting objects", image_url)
        return self._infer(
            "detecting objects",
            model or DEFAULT_MODELS["object_detection"],
            data=image,
        )

    def generate_image(self, prompt: str, *, model: str | None = None) -> GeneratedImage:
        resp = self._infer(
            "generating image",
            model or DEFAULT_MODELS["text_to_image"],
            payload={"inputs": prompt},
            expect_json=False,
        )
        return GeneratedImage(
            content=resp.content,
            content_type=resp.headers.get("Content-Type", "image/jpeg"),
        )

    def speech_to_text(self, audio: bytes, *, model: str | None = None) -> str | None:
        result = self._infer(
            "converting speech to text",
            model or DEFAULT_MODELS["speech_recognition"],
            data=audio,
        )
        return first_field(result, "text")
