"""Gemini content API Router."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.backend.api.dependencies import get_gemini_client, success
from src.backend.integrations.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

gemini_router = APIRouter(prefix="/gemini", tags=["Gemini"])


class GenerateRequest(BaseModel):
    prompt: str


class AnalyzeRequest(BaseModel):
    text: str
    analysis_type: str = "summary"


class DocumentContentRequest(BaseModel):
    topic: str
    content_type: str = "article"
    length: str = "medium"


class EnhanceRequest(BaseModel):
    text: str
    enhancement_type: str = "improve"


@gemini_router.post("/generate")
def generate_content(body: GenerateRequest, gemini: GeminiClient = Depends(get_gemini_client)):
    return success({"text": gemini.generate_content(body.prompt)})


@gemini_router.post("/analyze")
def analyze_content(body: AnalyzeRequest, gemini: GeminiClient = Depends(get_gemini_client)):
    text = gemini.analyze_content(body.text, body.analysis_type)
    return success({"analysis_type": body.analysis_type, "text": text})


@gemini_router.post("/document-content")
def generate_document_content(
    body: DocumentContentRequest, gemini: GeminiClient = Depends(get_gemini_client)
):
    text = gemini.generate_document_content(body.topic, body.content_type, body.length)
    return success({"topic": body.topic, "text": text})


@gemini_router.post("/enhance")
def enhance_content(body: EnhanceRequest, gemini: GeminiClient = Depends(get_gemini_client)):
    text = gemini.enhance_content(body.text, body.enhancement_type)
    return success({"enhancement_type": body.enhancement_type, "text": text})
