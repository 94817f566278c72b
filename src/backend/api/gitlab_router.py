"""GitLab API Router.

List endpoints forward their query string to GitLab as filter options
(e.g. `?state=opened&labels=bug`); every page is fetched.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from src.backend.api.dependencies import get_gitlab_client, success
from src.backend.integrations.gitlab_client import GitLabClient

logger = logging.getLogger(__name__)

gitlab_router = APIRouter(prefix="/gitlab", tags=["GitLab"])


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------


class CreateBranchRequest(BaseModel):
    branch: str
    ref: str = "main"


class CreatePipelineRequest(BaseModel):
    ref: str
    variables: dict[str, str] = Field(default_factory=dict)


class AddMemberRequest(BaseModel):
    user_id: int
    access_level: int


class FileWriteRequest(BaseModel):
    content: str
    commit_message: str
    branch: str = "main"


def _options(request: Request) -> dict[str, Any]:
    return dict(request.query_params)


# ---------------------------------------------------------------------------
# Users + projects
# ---------------------------------------------------------------------------


@gitlab_router.get("/user")
def get_current_user(gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_current_user())


@gitlab_router.get("/projects")
def list_projects(request: Request, gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_projects(_options(request)))


@gitlab_router.post("/projects")
def create_project(project: dict[str, Any], gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.create_project(project))


@gitlab_router.get("/projects/{project_id}")
def get_project(project_id: str, gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_project(project_id))


@gitlab_router.get("/projects/{project_id}/statistics")
def get_project_statistics(project_id: str, gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_project_statistics(project_id))


# ---------------------------------------------------------------------------
# Branches + commits
# ---------------------------------------------------------------------------


@gitlab_router.get("/projects/{project_id}/branches")
def list_branches(project_id: str, gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_branches(project_id))


@gitlab_router.post("/projects/{project_id}/branches")
def create_branch(
    project_id: str,
    body: CreateBranchRequest,
    gl: GitLabClient = Depends(get_gitlab_client),
):
    return success(gl.create_branch(project_id, body.branch, body.ref))


@gitlab_router.get("/projects/{project_id}/commits")
def list_commits(project_id: str, request: Request, gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_commits(project_id, _options(request)))


@gitlab_router.get("/projects/{project_id}/commits/{commit_sha}")
def get_commit(project_id: str, commit_sha: str, gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_commit(project_id, commit_sha))


# ---------------------------------------------------------------------------
# Issues + merge requests
# ---------------------------------------------------------------------------


@gitlab_router.get("/projects/{project_id}/issues")
def list_issues(project_id: str, request: Request, gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_issues(project_id, _options(request)))


@gitlab_router.post("/projects/{project_id}/issues")
def create_issue(
    project_id: str, issue: dict[str, Any], gl: GitLabClient = Depends(get_gitlab_client)
):
    return success(gl.create_issue(project_id, issue))


@gitlab_router.put("/projects/{project_id}/issues/{issue_iid}")
def update_issue(
    project_id: str,
    issue_iid: int,
    update: dict[str, Any],
    gl: GitLabClient = Depends(get_gitlab_client),
):
    return success(gl.update_issue(project_id, issue_iid, update))


@gitlab_router.get("/projects/{project_id}/merge_requests")
def list_merge_requests(
    project_id: str, request: Request, gl: GitLabClient = Depends(get_gitlab_client)
):
    return success(gl.get_merge_requests(project_id, _options(request)))


@gitlab_router.post("/projects/{project_id}/merge_requests")
def create_merge_request(
    project_id: str,
    merge_request: dict[str, Any],
    gl: GitLabClient = Depends(get_gitlab_client),
):
    return success(gl.create_merge_request(project_id, merge_request))


# ---------------------------------------------------------------------------
# Pipelines + members
# ---------------------------------------------------------------------------


@gitlab_router.get("/projects/{project_id}/pipelines")
def list_pipelines(
    project_id: str, request: Request, gl: GitLabClient = Depends(get_gitlab_client)
):
    return success(gl.get_pipelines(project_id, _options(request)))


@gitlab_router.post("/projects/{project_id}/pipelines")
def create_pipeline(
    project_id: str,
    body: CreatePipelineRequest,
    gl: GitLabClient = Depends(get_gitlab_client),
):
    return success(gl.create_pipeline(project_id, body.ref, body.variables))


@gitlab_router.get("/projects/{project_id}/members")
def list_members(project_id: str, gl: GitLabClient = Depends(get_gitlab_client)):
    return success(gl.get_project_members(project_id))


@gitlab_router.post("/projects/{project_id}/members")
def add_member(
    project_id: str,
    body: AddMemberRequest,
    gl: GitLabClient = Depends(get_gitlab_client),
):
    return success(gl.add_project_member(project_id, body.user_id, body.access_level))


# ---------------------------------------------------------------------------
# Repository files (file_path may contain slashes)
# ---------------------------------------------------------------------------


@gitlab_router.get("/projects/{project_id}/files/{file_path:path}")
def get_repository_file(
    project_id: str,
    file_path: str,
    ref: str = "main",
    gl: GitLabClient = Depends(get_gitlab_client),
):
    return success(gl.get_repository_file(project_id, file_path, ref))


@gitlab_router.put("/projects/{project_id}/files/{file_path:path}")
def create_or_update_file(
    project_id: str,
    file_path: str,
    body: FileWriteRequest,
    gl: GitLabClient = Depends(get_gitlab_client),
):
    result = gl.create_or_update_file(
        project_id, file_path, body.content, body.commit_message, body.branch
    )
    logger.info(f"Committed {file_path} to project {project_id}@{body.branch}")
    return success(result)


@gitlab_router.delete("/projects/{project_id}/files/{file_path:path}")
def delete_file(
    project_id: str,
    file_path: str,
    commit_message: str,
    branch: str = "main",
    gl: GitLabClient = Depends(get_gitlab_client),
):
    return success(gl.delete_file(project_id, file_path, commit_message, branch))
