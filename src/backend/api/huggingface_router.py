"""Hugging Face Inference API Router.

One endpoint per inference task. `model` is optional everywhere and falls back
to the task's default model; `parameters` are forwarded to the model as-is.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel

from src.backend.api.dependencies import get_huggingface_client, success
from src.backend.integrations.huggingface_client import HuggingFaceClient

logger = logging.getLogger(__name__)

huggingface_router = APIRouter(prefix="/huggingface", tags=["Hugging Face"])


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------


class TextTaskRequest(BaseModel):
    text: str
    model: str | None = None


class GenerationRequest(BaseModel):
    prompt: str
    model: str | None = None
    parameters: dict[str, Any] | None = None


class SummarizationRequest(BaseModel):
    text: str
    model: str | None = None
    parameters: dict[str, Any] | None = None


class QuestionAnsweringRequest(BaseModel):
    question: str
    context: str
    model: str | None = None


class ImageTaskRequest(BaseModel):
    image_url: str
    model: str | None = None


class ImagePromptRequest(BaseModel):
    prompt: str
    model: str | None = None


# ---------------------------------------------------------------------------
# Text endpoints
# ---------------------------------------------------------------------------


@huggingface_router.post("/generate-text")
def generate_text(
    body: GenerationRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)
):
    text = hf.generate_text(body.prompt, model=body.model, parameters=body.parameters)
    return success({"generated_text": text})


@huggingface_router.post("/classify-text")
def classify_text(body: TextTaskRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)):
    return success(hf.classify_text(body.text, model=body.model))


@huggingface_router.post("/answer-question")
def answer_question(
    body: QuestionAnsweringRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)
):
    return success(hf.answer_question(body.question, body.context, model=body.model))


@huggingface_router.post("/summarize")
def summarize_text(
    body: SummarizationRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)
):
    summary = hf.summarize_text(body.text, model=body.model, parameters=body.parameters)
    return success({"summary_text": summary})


@huggingface_router.post("/extract-entities")
def extract_entities(
    body: TextTaskRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)
):
    return success(hf.extract_entities(body.text, model=body.model))


@huggingface_router.post("/translate")
def translate_text(body: TextTaskRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)):
    return success({"translation_text": hf.translate_text(body.text, model=body.model)})


@huggingface_router.post("/embeddings")
def get_embeddings(body: TextTaskRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)):
    return success(hf.get_embeddings(body.text, model=body.model))


@huggingface_router.post("/fill-mask")
def fill_mask(body: TextTaskRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)):
    return success(hf.fill_mask(body.text, model=body.model))


# ---------------------------------------------------------------------------
# Image / audio endpoints
# ---------------------------------------------------------------------------


@huggingface_router.post("/classify-image")
def classify_image(
    body: ImageTaskRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)
):
    return success(hf.classify_image(body.image_url, model=body.model))


@huggingface_router.post("/detect-objects")
def detect_objects(
    body: ImageTaskRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)
):
    return success(hf.detect_objects(body.image_url, model=body.model))


@huggingface_router.post("/generate-image")
def generate_image(
    body: ImagePromptRequest, hf: HuggingFaceClient = Depends(get_huggingface_client)
):
    """Return the generated image bytes directly (not wrapped in JSON)."""
    image = hf.generate_image(body.prompt, model=body.model)
    return Response(content=image.content, media_type=image.content_type)


@huggingface_router.post("/speech-to-text")
def speech_to_text(
    audio: UploadFile = File(...),
    model: str | None = Form(None),
    hf: HuggingFaceClient = Depends(get_huggingface_client),
):
    data = audio.file.read()
    logger.info(f"Transcribing {audio.filename} ({len(data)} bytes)")
    return success({"text": hf.speech_to_text(data, model=model)})
