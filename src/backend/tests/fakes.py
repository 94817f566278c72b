"""Shared fakes for the `requests.request`-based integration tests."""

from __future__ import annotations

import json
from typing import Any


class FakeResp:
    def __init__(
        self,
        status_code: int,
        payload: Any = None,
        text: str = "",
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        if content is not None:
            self.content = content
            self.text = text or content.decode("utf-8", errors="replace")
        else:
            self.text = text or (json.dumps(payload) if payload is not None else "")
            self.content = self.text.encode("utf-8")
        self.headers = headers or {}
        self.reason = "Error" if status_code >= 400 else "OK"

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class RecordingRequests:
    """Stand-in for `requests.request` that records calls and replays responses."""

    def __init__(self, *responses: FakeResp) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self,
        method,
        url,
        headers=None,
        params=None,
        json=None,
        data=None,
        timeout=None,
    ):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": headers,
                "params": params,
                "json": json,
                "data": data,
                "timeout": timeout,
            }
        )
        if len(self._responses) > 1:
            return self._responses.pop(0)
        return self._responses[0]

    @property
    def last(self) -> dict[str, Any]:
        return self.calls[-1]
