from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from projectdesk.config.settings import get_settings
from projectdesk.db.models.project import STATUS_CODES, Project
from projectdesk.db.repositories.project_repo import ProjectFilters, ProjectRepository
from projectdesk.hierarchy.leveler import LevelStrategy, iter_levels, strategy_for_sort
from projectdesk.middleware.error_handler import PermissionDeniedError, ProjectNotFoundError
from projectdesk.schemas.projects import (
    ArchiveProjectResponse,
    CreateProjectResponse,
    DeleteProjectResponse,
    GetProjectResponse,
    GetProjectsResponse,
    NoResultsResponse,
    ProjectLevelItem,
    ProjectLevelListResponse,
    ProjectMenuResponse,
    ProjectOut,
    StatusOption,
    StatusOptionsResponse,
    UpdateProjectResponse,
)
from projectdesk.services.actor import ANONYMOUS, Actor
from projectdesk.services.project_menu import project_menu_items
from projectdesk.utils.ids import generate_id, identifier_from_name
from projectdesk.utils.text import short_project_description
from projectdesk.utils.time import utc_now_iso

logger = logging.getLogger(__name__)

# Marks a nullable field that the caller did not send.
UNSET = object()

STATUS_LABELS = {
    "on_track": "On track",
    "at_risk": "At risk",
    "off_track": "Off track",
}


class ProjectService:
    def __init__(self, db: Session, actor: Actor = ANONYMOUS):
        self.repo = ProjectRepository(db)
        self.actor = actor
        self._preview_length = get_settings().description_preview_length

    @staticmethod
    def _now() -> str:
        return utc_now_iso()

    def _require(self, permission: str) -> None:
        if not self.actor.allowed_to(permission):
            raise PermissionDeniedError(permission.replace("_", " "))

    def _require_admin(self, action: str) -> None:
        if not self.actor.admin:
            raise PermissionDeniedError(action)

    def _get_or_raise(self, project_id: str) -> Project:
        project = self.repo.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def _project_out(self, project: Project, level: int) -> ProjectOut:
        return ProjectOut(
            id=project.id,
            name=project.name,
            identifier=project.identifier,
            description=project.description or "",
            shortDescription=short_project_description(project.description, self._preview_length),
            parentId=project.parent_id,
            active=bool(project.active),
            public=bool(project.public),
            templated=bool(project.templated),
            statusCode=project.status_code,
            hasChildren=not project.is_leaf(),
            level=level,
            createdAt=project.created_at,
            updatedAt=project.updated_at,
        )

    def _single_out(self, project: Project) -> ProjectOut:
        return self._project_out(project, self.repo.count_ancestors(project))

    @staticmethod
    def _level_item(project: Project, level: int) -> ProjectLevelItem:
        return ProjectLevelItem(
            id=project.id,
            name=project.name,
            identifier=project.identifier,
            hasChildren=not project.is_leaf(),
            level=level,
        )

    def _unique_identifier(self, base: str, *, requested: bool) -> str:
        if not self.repo.identifier_taken(base):
            return base
        if requested:
            raise ValueError(f"Identifier has already been taken: {base}")
        suffix = 2
        while self.repo.identifier_taken(f"{base}-{suffix}"):
            suffix += 1
        return f"{base}-{suffix}"

    def _resolve_parent(self, parent_id: str | None, *, moving: Project | None = None) -> Project | None:
        if parent_id is None:
            return None
        parent = self.repo.get_project(parent_id)
        if parent is None:
            raise ValueError(f"Parent project not found: {parent_id}")
        if parent.archived:
            raise ValueError(f"Parent project is archived: {parent.identifier}")
        if moving is not None and (parent.id == moving.id or parent.is_descendant_of(moving)):
            raise ValueError("A project cannot be moved below itself or one of its subprojects")
        return parent

    # -- listing -----------------------------------------------------------

    def get_projects(
        self,
        filters: ProjectFilters | None = None,
        *,
        sort: str = "lft",
        direction: str = "asc",
    ) -> GetProjectsResponse:
        rows = self.repo.list_projects(filters, sort=sort, direction=direction)
        strategy = strategy_for_sort(sort)
        projects = [self._project_out(project, depth) for project, depth in iter_levels(rows, strategy)]
        return GetProjectsResponse(projects=projects, sort=sort, direction=direction)

    def get_level_list(
        self,
        filters: ProjectFilters | None = None,
        *,
        sort: str = "lft",
        direction: str = "asc",
    ) -> ProjectLevelListResponse:
        rows = self.repo.list_projects(filters, sort=sort, direction=direction)
        items = [self._level_item(p, depth) for p, depth in iter_levels(rows, strategy_for_sort(sort))]
        return ProjectLevelListResponse(projects=items)

    def get_project(self, project_id: str) -> GetProjectResponse:
        return GetProjectResponse(project=self._single_out(self._get_or_raise(project_id)))

    def get_assignable_parents(self, project_id: str | None = None) -> ProjectLevelListResponse:
        project = self._get_or_raise(project_id) if project_id is not None else None
        rows = self.repo.list_assignable_parents(project)
        items = [self._level_item(p, depth) for p, depth in iter_levels(rows, LevelStrategy.NESTED_SET)]
        return ProjectLevelListResponse(projects=items)

    def get_menu(self, project_id: str) -> ProjectMenuResponse:
        project = self._get_or_raise(project_id)
        return ProjectMenuResponse(projectId=project.id, items=project_menu_items(project, self.actor))

    @staticmethod
    def get_status_options() -> StatusOptionsResponse:
        return StatusOptionsResponse(
            options=[StatusOption(code=code, label=STATUS_LABELS[code]) for code in STATUS_CODES]
        )

    def get_no_results(self) -> NoResultsResponse:
        if self.actor.allowed_to("add_project"):
            return NoResultsResponse(displayAction=True, actionUrl="/api/projects")
        return NoResultsResponse()

    # -- changes -----------------------------------------------------------

    def create_project(
        self,
        *,
        name: str,
        identifier: str | None = None,
        description: str | None = None,
        parent_id: str | None = None,
        public: bool = False,
        templated: bool = False,
        status_code: str | None = None,
    ) -> CreateProjectResponse:
        self._require("add_subprojects" if parent_id is not None else "add_project")
        parent = self._resolve_parent(parent_id)
        base = identifier or identifier_from_name(name)
        now = self._now()
        project = Project(
            id=generate_id("proj"),
            name=name.strip(),
            identifier=self._unique_identifier(base, requested=identifier is not None),
            description=description,
            parent_id=parent.id if parent else None,
            active=1,
            public=1 if public else 0,
            templated=1 if templated else 0,
            status_code=status_code,
            created_at=now,
            updated_at=now,
        )
        self.repo.create_project(project)
        self.repo.rebuild_nested_set()
        self.repo.commit()
        logger.info("Created project %s (parent=%s)", project.identifier, project.parent_id)
        return CreateProjectResponse(project=self._single_out(project))

    def update_project(
        self,
        *,
        project_id: str,
        name: str | None = None,
        description: str | None | object = UNSET,
        public: bool | None = None,
        status_code: str | None | object = UNSET,
        parent_id: str | None = None,
        move_to_root: bool = False,
    ) -> UpdateProjectResponse:
        """Apply a partial update. ``UNSET`` leaves a nullable field alone, ``None`` clears it."""
        self._require("edit_project")
        project = self._get_or_raise(project_id)
        # Validate the move before touching any field so a rejected request changes nothing.
        new_parent = None
        moving = not move_to_root and parent_id is not None and parent_id != project.parent_id
        if moving:
            new_parent = self._resolve_parent(parent_id, moving=project)

        restructure = False
        if name is not None and name.strip() != project.name:
            project.name = name.strip()
            restructure = True
        if description is not UNSET:
            project.description = description
        if public is not None:
            project.public = 1 if public else 0
        if status_code is not UNSET:
            project.status_code = status_code
        if move_to_root and project.parent_id is not None:
            project.parent_id = None
            project.parent = None
            restructure = True
        elif moving:
            project.parent = new_parent
            restructure = True
            logger.info("Moving project %s below %s", project.identifier, new_parent.identifier)
        project.updated_at = self._now()
        if restructure:
            self.repo.rebuild_nested_set()
        self.repo.commit()
        return UpdateProjectResponse(project=self._single_out(project))

    def archive_project(self, *, project_id: str) -> ArchiveProjectResponse:
        self._require_admin("archive projects")
        project = self._get_or_raise(project_id)
        if project.archived:
            raise ValueError(f"Project is already archived: {project.identifier}")
        now = self._now()
        affected = [project, *self.repo.list_descendants(project)]
        for row in affected:
            row.active = 0
            row.updated_at = now
        self.repo.commit()
        logger.info("Archived project %s and %d subprojects", project.identifier, len(affected) - 1)
        return ArchiveProjectResponse(
            project=self._single_out(project), affectedProjectIds=[row.id for row in affected]
        )

    def unarchive_project(self, *, project_id: str) -> ArchiveProjectResponse:
        self._require_admin("unarchive projects")
        project = self._get_or_raise(project_id)
        if project.active:
            raise ValueError(f"Project is not archived: {project.identifier}")
        if project.parent is not None and project.parent.archived:
            raise ValueError("The parent project is archived, unarchive it first")
        project.active = 1
        project.updated_at = self._now()
        self.repo.commit()
        logger.info("Unarchived project %s", project.identifier)
        return ArchiveProjectResponse(project=self._single_out(project), affectedProjectIds=[project.id])

    def copy_project(
        self, *, project_id: str, name: str, identifier: str | None = None
    ) -> CreateProjectResponse:
        self._require("copy_projects")
        source = self._get_or_raise(project_id)
        if source.archived:
            raise ValueError(f"Archived projects cannot be copied: {source.identifier}")
        now = self._now()
        base = identifier or identifier_from_name(name)
        copy = Project(
            id=generate_id("proj"),
            name=name.strip(),
            identifier=self._unique_identifier(base, requested=identifier is not None),
            description=source.description,
            parent_id=source.parent_id,
            active=1,
            public=source.public,
            templated=0,
            status_code=source.status_code,
            created_at=now,
            updated_at=now,
        )
        self.repo.create_project(copy)
        self.repo.rebuild_nested_set()
        self.repo.commit()
        logger.info("Copied project %s to %s", source.identifier, copy.identifier)
        return CreateProjectResponse(project=self._single_out(copy))

    def delete_project(self, *, project_id: str) -> DeleteProjectResponse:
        self._require_admin("delete projects")
        project = self._get_or_raise(project_id)
        deleted_ids = self.repo.delete_project(project)
        self.repo.rebuild_nested_set()
        self.repo.commit()
        logger.info("Deleted project %s with %d subprojects", project.identifier, len(deleted_ids) - 1)
        return DeleteProjectResponse(deletedProjectId=project_id, deletedProjectIds=deleted_ids)
