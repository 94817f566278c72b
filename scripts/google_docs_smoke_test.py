"""Smoke test: read a Google Doc with the configured service account.

Env vars:
- GOOGLE_SA_FILE, or GOOGLE_CLIENT_EMAIL + GOOGLE_PRIVATE_KEY (+ GOOGLE_PROJECT_ID, ...)
- GOOGLE_DOC_ID   a document shared with the service account's email

Optional:
- GOOGLE_DOC_APPEND=<text>   append text to the document (writes!)

Run:
  python scripts/google_docs_smoke_test.py
"""

import os
import sys

from dotenv import load_dotenv

from src.backend.integrations.errors import MissingCredentialsError, UpstreamAPIError
from src.backend.integrations.google_docs_client import GoogleDocsClient, extract_text_content

load_dotenv()
if not os.environ.get("GOOGLE_DOC_ID"):
    load_dotenv(dotenv_path=os.path.abspath(".env.example"), override=False)

DOC_ID = os.environ.get("GOOGLE_DOC_ID")

if not DOC_ID:
    print("ERROR: GOOGLE_DOC_ID not set. Export GOOGLE_DOC_ID=<id> or add it to your .env file.", file=sys.stderr)
    sys.exit(3)

try:
    docs = GoogleDocsClient.from_env()
except MissingCredentialsError as e:
    print(f"ERROR: {e}", file=sys.stderr)
    print("Set GOOGLE_SA_FILE, or GOOGLE_CLIENT_EMAIL and GOOGLE_PRIVATE_KEY.", file=sys.stderr)
    sys.exit(2)

try:
    doc = docs.get_document(DOC_ID)
except UpstreamAPIError as e:
    print(f"ERROR: {e}", file=sys.stderr)
    print("Is the document shared with the service account email?", file=sys.stderr)
    sys.exit(4)

print(f"Title: {doc.get('title')}")
text = extract_text_content(doc)
print(f"Text ({len(text)} chars):")
print(text[:500])

append = os.environ.get("GOOGLE_DOC_APPEND")
if append:
    docs.append_text(DOC_ID, append)
    print(f"Appended {len(append)} chars.")
