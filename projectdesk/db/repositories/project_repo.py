from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete, func, or_, select

from projectdesk.db.models.project import Project
from projectdesk.db.repositories.base_repo import BaseRepository
from projectdesk.hierarchy.nested_set import TreeNode, compute_bounds

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "lft": Project.lft,
    "name": Project.name,
    "identifier": Project.identifier,
    "created_at": Project.created_at,
}


@dataclass
class ProjectFilters:
    active: bool | None = None
    public: bool | None = None
    templated: bool | None = None
    name_and_identifier: str | None = None


class ProjectRepository(BaseRepository):
    def list_projects(
        self,
        filters: ProjectFilters | None = None,
        *,
        sort: str = "lft",
        direction: str = "asc",
    ) -> list[Project]:
        filters = filters or ProjectFilters()
        stmt = select(Project)
        if filters.active is not None:
            stmt = stmt.where(Project.active == int(filters.active))
        if filters.public is not None:
            stmt = stmt.where(Project.public == int(filters.public))
        if filters.templated is not None:
            stmt = stmt.where(Project.templated == int(filters.templated))
        if filters.name_and_identifier:
            needle = f"%{filters.name_and_identifier.strip().lower()}%"
            stmt = stmt.where(
                or_(func.lower(Project.name).like(needle), func.lower(Project.identifier).like(needle))
            )

        column = SORTABLE_COLUMNS.get(sort)
        if column is None:
            raise ValueError(f"Unsupported sort key: {sort}")
        # lft only makes sense ascending; descending would break pre-order.
        if sort != "lft" and direction == "desc":
            stmt = stmt.order_by(column.desc(), Project.lft.asc())
        else:
            stmt = stmt.order_by(column.asc(), Project.lft.asc())
        return list(self.db.scalars(stmt).all())

    def get_project(self, project_id: str) -> Project | None:
        return self.db.get(Project, project_id)

    def get_by_identifier(self, identifier: str) -> Project | None:
        stmt = select(Project).where(Project.identifier == identifier).limit(1)
        return self.db.scalars(stmt).first()

    def identifier_taken(self, identifier: str) -> bool:
        stmt = select(func.count(Project.id)).where(Project.identifier == identifier)
        return int(self.db.scalar(stmt) or 0) > 0

    def list_descendants(self, project: Project) -> list[Project]:
        stmt = (
            select(Project)
            .where(Project.lft > project.lft, Project.rgt < project.rgt)
            .order_by(Project.lft.asc())
        )
        return list(self.db.scalars(stmt).all())

    def list_assignable_parents(self, project: Project | None) -> list[Project]:
        """Active projects that ``project`` may be moved under, in tree order."""
        stmt = select(Project).where(Project.active == 1)
        if project is not None:
            stmt = stmt.where(
                Project.id != project.id,
                or_(Project.lft < project.lft, Project.lft > project.rgt),
            )
        return list(self.db.scalars(stmt.order_by(Project.lft.asc())).all())

    def create_project(self, project: Project) -> Project:
        self.db.add(project)
        return project

    def delete_project(self, project: Project) -> list[str]:
        """Delete ``project`` and its subtree in one statement; returns the deleted ids."""
        stmt = (
            select(Project.id)
            .where(Project.lft >= project.lft, Project.rgt <= project.rgt)
            .order_by(Project.lft.asc())
        )
        doomed = list(self.db.scalars(stmt).all())
        if project.id not in doomed:
            doomed.insert(0, project.id)
        self.db.execute(delete(Project).where(Project.id.in_(doomed)))
        return doomed

    def rebuild_nested_set(self) -> None:
        self.flush()
        projects = list(self.db.scalars(select(Project)).all())
        bounds = compute_bounds(
            TreeNode(id=p.id, parent_id=p.parent_id, name=p.name) for p in projects
        )
        for project in projects:
            project.lft, project.rgt = bounds[project.id]
        self.flush()
        logger.info("Rebuilt nested set for %d projects", len(projects))

    def count_ancestors(self, project: Project) -> int:
        stmt = select(func.count(Project.id)).where(
            Project.lft < project.lft, Project.rgt > project.rgt
        )
        return int(self.db.scalar(stmt) or 0)
