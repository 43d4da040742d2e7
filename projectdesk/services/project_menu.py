"""Per-project action menu, filtered by what the actor is allowed to do."""

from __future__ import annotations

from collections.abc import Callable

from projectdesk.db.models.project import Project
from projectdesk.schemas.projects import ProjectMenuItem
from projectdesk.services.actor import Actor


def _subproject_item(project: Project, actor: Actor) -> ProjectMenuItem | None:
    if not actor.allowed_to("add_subprojects"):
        return None
    return ProjectMenuItem(
        action="new_subproject",
        label="New subproject",
        method="POST",
        href="/api/projects",
        payload={"parentId": project.id},
    )


def _settings_item(project: Project, actor: Actor) -> ProjectMenuItem | None:
    if not actor.allowed_to("edit_project"):
        return None
    return ProjectMenuItem(
        action="settings",
        label="Project settings",
        method="PATCH",
        href=f"/api/projects/{project.id}",
    )


def _archive_item(project: Project, actor: Actor) -> ProjectMenuItem | None:
    if not (actor.admin and project.active):
        return None
    return ProjectMenuItem(
        action="archive",
        label="Archive",
        method="PUT",
        href=f"/api/projects/{project.id}/archive",
        confirm=f"Are you sure you want to archive the project '{project.name}'?",
    )


def _unarchive_item(project: Project, actor: Actor) -> ProjectMenuItem | None:
    parent_active = project.parent is None or bool(project.parent.active)
    if not (actor.admin and project.archived and parent_active):
        return None
    return ProjectMenuItem(
        action="unarchive",
        label="Unarchive",
        method="PUT",
        href=f"/api/projects/{project.id}/unarchive",
    )


def _copy_item(project: Project, actor: Actor) -> ProjectMenuItem | None:
    if not actor.allowed_to("copy_projects") or project.archived:
        return None
    return ProjectMenuItem(
        action="copy",
        label="Copy",
        method="POST",
        href=f"/api/projects/{project.id}/copy",
    )


def _delete_item(project: Project, actor: Actor) -> ProjectMenuItem | None:
    if not actor.admin:
        return None
    return ProjectMenuItem(
        action="delete",
        label="Delete",
        method="DELETE",
        href=f"/api/projects/{project.id}",
        confirm=f"Are you sure you want to delete the project '{project.name}' and all of its subprojects?",
    )


MENU_BUILDERS: tuple[Callable[[Project, Actor], ProjectMenuItem | None], ...] = (
    _subproject_item,
    _settings_item,
    _archive_item,
    _unarchive_item,
    _copy_item,
    _delete_item,
)


def project_menu_items(project: Project, actor: Actor) -> list[ProjectMenuItem]:
    items = (build(project, actor) for build in MENU_BUILDERS)
    return [item for item in items if item is not None]
