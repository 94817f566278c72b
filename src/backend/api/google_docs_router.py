"""Google Docs API Router."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.backend.api.dependencies import get_google_docs_client, success
from src.backend.integrations.google_docs_client import GoogleDocsClient

logger = logging.getLogger(__name__)

google_docs_router = APIRouter(prefix="/google-docs", tags=["Google Docs"])


class CreateDocumentRequest(BaseModel):
    title: str
    public: bool = False


class TextRequest(BaseModel):
    text: str


class ReplaceTextRequest(BaseModel):
    search_text: str
    replace_text: str


class BatchUpdateRequest(BaseModel):
    requests: list[dict[str, Any]]


@google_docs_router.post("/documents")
def create_document(
    body: CreateDocumentRequest, docs: GoogleDocsClient = Depends(get_google_docs_client)
):
    doc = docs.create_document(body.title, public=body.public)
    logger.info(f"Created document {doc.get('documentId')} (public={body.public})")
    return success(doc)


@google_docs_router.get("/documents/{document_id}")
def get_document(document_id: str, docs: GoogleDocsClient = Depends(get_google_docs_client)):
    return success(docs.get_document(document_id))


@google_docs_router.get("/documents/{document_id}/text")
def get_document_text(
    document_id: str, docs: GoogleDocsClient = Depends(get_google_docs_client)
):
    return success({"documentId": document_id, "text": docs.get_document_text(document_id)})


@google_docs_router.post("/documents/{document_id}/batch-update")
def update_document(
    document_id: str,
    body: BatchUpdateRequest,
    docs: GoogleDocsClient = Depends(get_google_docs_client),
):
    return success(docs.update_document(document_id, body.requests))


@google_docs_router.post("/documents/{document_id}/insert")
def insert_text(
    document_id: str,
    body: TextRequest,
    docs: GoogleDocsClient = Depends(get_google_docs_client),
):
    return success(docs.insert_text(document_id, body.text))


@google_docs_router.post("/documents/{document_id}/append")
def append_text(
    document_id: str,
    body: TextRequest,
    docs: GoogleDocsClient = Depends(get_google_docs_client),
):
    return success(docs.append_text(document_id, body.text))


@google_docs_router.post("/documents/{document_id}/replace")
def replace_text(
    document_id: str,
    body: ReplaceTextRequest,
    docs: GoogleDocsClient = Depends(get_google_docs_client),
):
    return success(docs.replace_text(document_id, body.search_text, body.replace_text))
