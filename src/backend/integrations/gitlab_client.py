"""GitLab connector (REST API v4).

Purpose
- Wrap the project-level GitLab endpoints the gateway exposes: projects,
  branches, commits, issues, merge requests, pipelines, members and
  repository files.
- List calls follow `X-Next-Page` so callers get every page, like the
  official SDKs' `all()` helpers.

Project ids may be numeric or a `namespace/project` path; both are URL-encoded
before they go into the path, as are repository file paths.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping
from urllib.parse import quote

from src.backend.integrations.errors import UpstreamAPIError
from src.backend.integrations.http_client import request_json, require_env, timeout_from_env

logger = logging.getLogger(__name__)

VENDOR = "gitlab"
DEFAULT_HOST = "https://gitlab.com"
PER_PAGE = 100


def _enc(value: str | int) -> str:
    return quote(str(value), safe="")


class GitLabClient:
    def __init__(
        self,
        *,
        token: str,
        host: str = DEFAULT_HOST,
        timeout_seconds: float = 30,
        max_pages: int = 20,
    ) -> None:
        self._token = token
        self._api_base = f"{host.rstrip('/')}/api/v4"
        self._timeout_seconds = timeout_seconds
        self._max_pages = max_pages

    @classmethod
    def from_env(cls) -> "GitLabClient":
        token = require_env(VENDOR, "GITLAB_API_KEY")
        return cls(
            token=token,
            host=os.environ.get("GITLAB_HOST") or DEFAULT_HOST,
            timeout_seconds=timeout_from_env("GITLAB"),
            max_pages=int(os.environ.get("GITLAB_MAX_PAGES", "20")),
        )

    def _headers(self) -> dict[str, str]:
        return {"PRIVATE-TOKEN": self._token, "Accept": "application/json"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json_body: Any = None,
        expect_json: bool = True,
    ) -> Any:
        return request_json(
            method,
            f"{self._api_base}{path}",
            vendor=VENDOR,
            headers=self._headers(),
            params=dict(params) if params else None,
            json_body=json_body,
            timeout=self._timeout_seconds,
            expect_json=expect_json,
        )

    def _call(self, action: str, method: str, path: str, **kwargs: Any) -> Any:
        try:
            return self._request(method, path, **kwargs)
        except UpstreamAPIError as e:
            logger.error(f"Error {action}: {e}")
            raise

    def _paginate(
        self, action: str, path: str, params: Mapping[str, Any] | None = None
    ) -> list[Any]:
        query: dict[str, Any] = {"per_page": PER_PAGE, **(params or {})}
        items: list[Any] = []
        page: str | None = str(query.pop("page", 1))
        fetched = 0
        try:
            while page and fetched < self._max_pages:
                resp = self._request("GET", path, params={**query, "page": page}, expect_json=False)
                try:
                    body = resp.json()
                except ValueError as e:
                    raise UpstreamAPIError(
                        VENDOR, resp.status_code, f"Invalid JSON in response: {resp.text[:200]}"
                    ) from e
                if isinstance(body, list):
                    items.extend(body)
                else:
                    return body
                fetched += 1
                page = (resp.headers.get("X-Next-Page") or "").strip() or None
        except UpstreamAPIError as e:
            logger.error(f"Error {action}: {e}")
            raise
        if page:
            logger.warning(f"{action}: stopped after {fetched} pages (GITLAB_MAX_PAGES)")
        return items

    def _project(self, project_id: str | int) -> str:
        return f"/projects/{_enc(project_id)}"

    def _file(self, project_id: str | int, file_path: str) -> str:
        return f"{self._project(project_id)}/repository/files/{_enc(file_path)}"

    # Users + projects

    def get_current_user(self) -> dict[str, Any]:
        return self._call("fetching current user", "GET", "/user")

    def get_projects(self, options: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        params = {"owned": "true", "membership": "true", **(options or {})}
        return self._paginate("fetching projects", "/projects", params)

    def get_project(self, project_id: str | int) -> dict[str, Any]:
        return self._call("fetching project", "GET", self._project(project_id))

    def create_project(self, project: dict[str, Any]) -> dict[str, Any]:
        return self._call("creating project", "POST", "/projects", json_body=project)

    def get_project_statistics(self, project_id: str | int) -> dict[str, Any]:
        return self._call(
            "fetching project statistics", "GET", f"{self._project(project_id)}/statistics"
        )

    # Branches + commits

    def get_branches(self, project_id: str | int) -> list[dict[str, Any]]:
        return self._paginate(
            "fetching branches", f"{self._project(project_id)}/repository/branches"
        )

    def create_branch(
        self, project_id: str | int, branch_name: str, ref: str = "main"
    ) -> dict[str, Any]:
        return self._call(
            "creating branch",
            "POST",
            f"{self._project(project_id)}/repository/branches",
            params={"branch": branch_name, "ref": ref},
        )

    def get_commits(
        self, project_id: str | int, options: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._paginate(
            "fetching commits", f"{self._project(project_id)}/repository/commits", options
        )

    def get_commit(self, project_id: str | int, commit_sha: str) -> dict[str, Any]:
        return self._call(
            "fetching commit",
            "GET",
            f"{self._project(project_id)}/repository/commits/{_enc(commit_sha)}",
        )

    # Issues + merge requests

    def get_issues(
        self, project_id: str | int, options: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._paginate("fetching issues", f"{self._project(project_id)}/issues", options)

    def create_issue(self, project_id: str | int, issue: dict[str, Any]) -> dict[str, Any]:
        return self._call(
            "creating issue", "POST", f"{self._project(project_id)}/issues", json_body=issue
        )

    def update_issue(
        self, project_id: str | int, issue_iid: int, update: dict[str, Any]
    ) -> dict[str, Any]:
        return self._call(
            "updating issue",
            "PUT",
            f"{self._project(project_id)}/issues/{issue_iid}",
            json_body=update,
        )

    def get_merge_requests(
        self, project_id: str | int, options: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._paginate(
            "fetching merge requests", f"{self._project(project_id)}/merge_requests", options
        )

    def create_merge_request(
        self, project_id: str | int, merge_request: dict[str, Any]
    ) -> dict[str, Any]:
        return self._call(
            "creating merge request",
            "POST",
            f"{self._project(project_id)}/merge_requests",
            json_body=merge_request,
        )

    # Pipelines

    def get_pipelines(
        self, project_id: str | int, options: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        return self._paginate(
            "fetching pipelines", f"{self._project(project_id)}/pipelines", options
        )

    def create_pipeline(
        self,
        project_id: str | int,
        ref: str,
        variables: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"ref": ref}
        if variables:
            body["variables"] = [{"key": k, "value": v} for k, v in variables.items()]
        return self._call(
            "creating pipeline", "POST", f"{self._project(project_id)}/pipeline", json_body=body
        )

    # Members

    def get_project_members(self, project_id: str | int) -> list[dict[str, Any]]:
        return self._paginate("fetching project members", f"{self._project(project_id)}/members")

    def add_project_member(
        self, project_id: str | int, user_id: int, access_level: int
    ) -> dict[str, Any]:
        return self._call(
            "adding project member",
            "POST",
            f"{self._project(project_id)}/members",
            json_body={"user_id": user_id, "access_level": access_level},
        )

    # Repository files

    def get_repository_file(
        self, project_id: str | int, file_path: str, ref: str = "main"
    ) -> str:
        """Return the raw contents of `file_path` at `ref`."""

        resp = self._call(
            "fetching repository file",
            "GET",
            f"{self._file(project_id, file_path)}/raw",
            params={"ref": ref},
            expect_json=False,
        )
        return resp.text

    def _file_exists(self, project_id: str | int, file_path: str, branch: str) -> bool:
        try:
            self._request("GET", self._file(project_id, file_path), params={"ref": branch})
        except UpstreamAPIError as e:
            if e.status_code == 404:
                return False
            raise
        return True

    def create_or_update_file(
        self,
        project_id: str | int,
        file_path: str,
        content: str,
        commit_message: str,
        branch: str = "main",
    ) -> dict[str, Any]:
        """Commit `content` to `file_path`, creating the file if it is missing."""

        body = {
            "file_path": file_path,
            "branch": branch,
            "content": content,
            "commit_message": commit_message,
        }
        try:
            method = "PUT" if self._file_exists(project_id, file_path, branch) else "POST"
            return self._request(method, self._file(project_id, file_path), json_body=body)
        except UpstreamAPIError as e:
            logger.error(f"Error creating/updating file: {e}")
            raise

    def delete_file(
        self,
        project_id: str | int,
        file_path: str,
        commit_message: str,
        branch: str = "main",
    ) -> Any:
        return self._call(
            "deleting file",
            "DELETE",
            self._file(project_id, file_path),
            json_body={"branch": branch, "commit_message": commit_message},
        )
