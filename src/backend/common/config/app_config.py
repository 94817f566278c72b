"""Application configuration.

All settings come from the process environment. A local `.env` file is loaded
once at import time (without overriding variables that are already exported).
Vendor clients read their own credentials through their `from_env()`
constructors; this module only covers app-wide settings plus a cheap
"is this vendor configured?" check used by `/health`.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv(override=False)

# vendor -> env vars that must be non-empty for the integration to work
VENDOR_CREDENTIALS: dict[str, tuple[str, ...]] = {
    "cloudflare": ("CLOUDFLARE_API_KEY",),
    "huggingface": ("HUGGINGFACE_API_KEY",),
    "google_docs": ("GOOGLE_CLIENT_EMAIL", "GOOGLE_PRIVATE_KEY"),
    "gitlab": ("GITLAB_API_KEY",),
    "gemini": ("GEMINI_API_KEY",),
    "taskade": ("TASKADE_API_KEY",),
}


def _split_csv(value: str | None) -> list[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


class AppConfig:
    """Environment-backed settings for the pass-through gateway."""

    def __init__(self) -> None:
        self.APP_TITLE = os.environ.get("APP_TITLE", "SaaS Pass-through Gateway")
        self.HOST = os.environ.get("HOST", "0.0.0.0")
        self.PORT = int(os.environ.get("PORT", "3000"))

        self.BASIC_LOGGING_LEVEL = os.environ.get("BASIC_LOGGING_LEVEL", "INFO")
        self.PACKAGE_LOGGING_LEVEL = os.environ.get("PACKAGE_LOGGING_LEVEL", "WARNING")
        self.LOGGING_PACKAGES = os.environ.get(
            "LOGGING_PACKAGES", "urllib3,googleapiclient"
        )

        self.CORS_ALLOW_ORIGINS = _split_csv(os.environ.get("CORS_ALLOW_ORIGINS", "*")) or ["*"]

    @property
    def logging_packages(self) -> list[str]:
        return _split_csv(self.LOGGING_PACKAGES)

    @staticmethod
    def is_configured(vendor: str) -> bool:
        """True when every credential variable the vendor needs is set."""
        names = VENDOR_CREDENTIALS.get(vendor)
        if not names:
            return False
        if vendor == "google_docs" and os.environ.get("GOOGLE_SA_FILE"):
            return True
        return all(os.environ.get(name) for name in names)

    def integration_status(self) -> dict[str, bool]:
        return {vendor: self.is_configured(vendor) for vendor in VENDOR_CREDENTIALS}


config = AppConfig()
