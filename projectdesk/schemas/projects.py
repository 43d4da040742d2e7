from typing import Literal

from pydantic import BaseModel, Field

IDENTIFIER_PATTERN = r"^[a-z][a-z0-9_-]*$"

StatusCode = Literal["on_track", "at_risk", "off_track"]
SortKey = Literal["lft", "name", "identifier", "created_at"]
SortDirection = Literal["asc", "desc"]


class ProjectOut(BaseModel):
    id: str
    name: str
    identifier: str
    description: str
    shortDescription: str
    parentId: str | None
    active: bool
    public: bool
    templated: bool
    statusCode: str | None
    hasChildren: bool
    level: int
    createdAt: str
    updatedAt: str


class GetProjectsResponse(BaseModel):
    projects: list[ProjectOut]
    sort: str
    direction: str


class GetProjectResponse(BaseModel):
    project: ProjectOut


class ProjectLevelItem(BaseModel):
    id: str
    name: str
    identifier: str
    hasChildren: bool
    level: int


class ProjectLevelListResponse(BaseModel):
    projects: list[ProjectLevelItem]


class CreateProjectRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    identifier: str | None = Field(None, min_length=1, max_length=100, pattern=IDENTIFIER_PATTERN)
    description: str | None = None
    parentId: str | None = None
    public: bool = False
    templated: bool = False
    statusCode: StatusCode | None = None


class CreateProjectResponse(BaseModel):
    project: ProjectOut


class UpdateProjectRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    public: bool | None = None
    statusCode: StatusCode | None = None
    parentId: str | None = None
    # parentId=None is ambiguous; moveToRoot makes "no parent" explicit.
    moveToRoot: bool = False


class UpdateProjectResponse(BaseModel):
    project: ProjectOut


class ArchiveProjectResponse(BaseModel):
    project: ProjectOut
    affectedProjectIds: list[str]


class CopyProjectRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    identifier: str | None = Field(None, min_length=1, max_length=100, pattern=IDENTIFIER_PATTERN)


class DeleteProjectResponse(BaseModel):
    deletedProjectId: str
    deletedProjectIds: list[str]


class ProjectMenuItem(BaseModel):
    action: str
    label: str
    method: str
    href: str
    confirm: str | None = None
    payload: dict[str, str] | None = None


class ProjectMenuResponse(BaseModel):
    projectId: str
    items: list[ProjectMenuItem]


class StatusOption(BaseModel):
    code: str
    label: str


class StatusOptionsResponse(BaseModel):
    options: list[StatusOption]


class NoResultsResponse(BaseModel):
    displayAction: bool = False
    actionUrl: str | None = None
