"""Google Docs connector (service-account based).

Goals
- Small wrapper around the Docs v1 API (plus one Drive v3 call for sharing).
- Keep all network calls in `GoogleDocsClient`; text extraction is a pure
  function so it can be unit-tested without Google client libs.

Credentials come either from discrete env vars (GOOGLE_CLIENT_EMAIL,
GOOGLE_PRIVATE_KEY, ...) or from a key file at GOOGLE_SA_FILE.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from src.backend.integrations.errors import MissingCredentialsError, UpstreamAPIError

logger = logging.getLogger(__name__)

VENDOR = "google_docs"
SCOPES = [
    "https://www.googleapis.com/auth/documents",
    "https://www.googleapis.com/auth/drive",
]


def service_account_info_from_env() -> dict[str, Any]:
    """Build service-account info from GOOGLE_SA_FILE or the discrete env vars."""

    sa_file = os.environ.get("GOOGLE_SA_FILE")
    if sa_file:
        path = os.path.expanduser(sa_file)
        if not os.path.exists(path):
            raise MissingCredentialsError(
                VENDOR, "GOOGLE_SA_FILE", f"Service account file not found: {path}"
            )
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    client_email = os.environ.get("GOOGLE_CLIENT_EMAIL")
    if not client_email:
        raise MissingCredentialsError(VENDOR, "GOOGLE_CLIENT_EMAIL")
    private_key = os.environ.get("GOOGLE_PRIVATE_KEY")
    if not private_key:
        raise MissingCredentialsError(VENDOR, "GOOGLE_PRIVATE_KEY")

    return {
        "type": "service_account",
        "project_id": os.environ.get("GOOGLE_PROJECT_ID"),
        "private_key_id": os.environ.get("GOOGLE_PRIVATE_KEY_ID"),
        # .env files usually carry the PEM with literal "\n" sequences
        "private_key": private_key.replace("\\n", "\n"),
        "client_email": client_email,
        "client_id": os.environ.get("GOOGLE_CLIENT_ID"),
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
        "client_x509_cert_url": (
            f"https://www.googleapis.com/robot/v1/metadata/x509/{client_email}"
        ),
    }


def extract_text_content(document: dict[str, Any]) -> str:
    """Concatenate every text run in a Docs document body, in order.

    Table cells are walked recursively; other structural elements (section
    breaks, tables of contents) contribute nothing.
    """

    chunks: list[str] = []

    def walk(content: list[dict[str, Any]]) -> None:
        for element in content:
            paragraph = element.get("paragraph")
            table = element.get("table")
            if paragraph:
                for elem in paragraph.get("elements", []):
                    text_run = elem.get("textRun")
                    if text_run:
                        chunks.append(text_run.get("content", ""))
            elif table:
                for row in table.get("tableRows", []):
                    for cell in row.get("tableCells", []):
                        walk(cell.get("content", []))

    body = document.get("body") or {}
    walk(body.get("content") or [])
    return "".join(chunks)


def end_of_body_index(document: dict[str, Any]) -> int:
    """Index just before the trailing newline of the body (where appends go)."""

    content = (document.get("body") or {}).get("content") or []
    if not content:
        return 1
    return max(int(content[-1].get("endIndex", 2)) - 1, 1)


class GoogleDocsClient:
    def __init__(
        self,
        *,
        service_account_info: dict[str, Any],
        scopes: list[str] | None = None,
    ) -> None:
        self._service_account_info = service_account_info
        self._scopes = scopes or SCOPES

    @classmethod
    def from_env(cls) -> "GoogleDocsClient":
        return cls(service_account_info=service_account_info_from_env())

    def _build_service(self, name: str, version: str) -> Any:
        # Lazy import so unit tests that only use the deterministic helpers
        # do not require Google client libs.
        from google.oauth2 import service_account
        from googleapiclient.discovery import build

        try:
            creds = service_account.Credentials.from_service_account_info(
                self._service_account_info,
                scopes=self._scopes,
            )
        except ValueError as e:
            # missing fields or a private key that is not valid PEM
            err = UpstreamAPIError(VENDOR, None, f"Invalid service account credentials: {e}")
            logger.error(f"Error loading credentials: {err}")
            raise err from e
        return build(name, version, credentials=creds, cache_discovery=False)

    def _docs(self) -> Any:
        return self._build_service("docs", "v1")

    def _drive(self) -> Any:
        return self._build_service("drive", "v3")

    def _execute(self, action: str, request: Any) -> Any:
        from google.auth.exceptions import GoogleAuthError
        from googleapiclient.errors import HttpError
        from httplib2 import HttpLib2Error

        try:
            return request.execute()
        except HttpError as e:
            err = UpstreamAPIError(VENDOR, int(e.resp.status), e.reason or str(e))
            logger.error(f"Error {action}: {err}")
            raise err from e
        except (GoogleAuthError, HttpLib2Error, OSError) as e:
            # token refresh failures, connection errors, socket timeouts
            err = UpstreamAPIError(VENDOR, None, str(e))
            logger.error(f"Error {action}: {err}")
            raise err from e

    def create_document(self, title: str, *, public: bool = False) -> dict[str, Any]:
        """Create an empty document; with `public`, anyone with the link can read it."""

        doc = self._execute(
            "creating document",
            self._docs().documents().create(body={"title": title}),
        )
        if public:
            self._execute(
                "sharing document",
                self._drive()
                .permissions()
                .create(
                    fileId=doc["documentId"],
                    body={"role": "reader", "type": "anyone"},
                ),
            )
        return doc

    def get_document(self, document_id: str) -> dict[str, Any]:
        return self._execute(
            "reading document",
            self._docs().documents().get(documentId=document_id),
        )

    def get_document_text(self, document_id: str) -> str:
        return extract_text_content(self.get_document(document_id))

    def update_document(
        self, document_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        return self._execute(
            "updating document",
            self._docs()
            .documents()
            .batchUpdate(documentId=document_id, body={"requests": requests}),
        )

    def insert_text(self, document_id: str, text: str) -> dict[str, Any]:
        return self.update_document(
            document_id,
            [{"insertText": {"location": {"index": 1}, "text": text}}],
        )

    def append_text(self, document_id: str, text: str) -> dict[str, Any]:
        index = end_of_body_index(self.get_document(document_id))
        return self.update_document(
            document_id,
            [{"insertText": {"location": {"index": index}, "text": text}}],
        )

    def replace_text(
        self, document_id: str, search_text: str, replace_text: str
    ) -> dict[str, Any]:
        return self.update_document(
            document_id,
            [
                {
                    "replaceAllText": {
                        "containsText": {"text": search_text, "matchCase": False},
                        "replaceText": replace_text,
                    }
                }
            ],
        )
