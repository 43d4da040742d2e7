from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from projectdesk.api.deps import get_current_actor, get_db
from projectdesk.api.envelope import fail, ok
from projectdesk.db.repositories.project_repo import ProjectFilters
from projectdesk.middleware.error_handler import ServiceError, full_error_message
from projectdesk.schemas.projects import (
    CopyProjectRequest,
    CreateProjectRequest,
    SortDirection,
    SortKey,
    UpdateProjectRequest,
)
from projectdesk.services.actor import Actor
from projectdesk.services.project_service import UNSET, ProjectService

router = APIRouter(tags=["projects"])


def project_filters(
    active: bool | None = Query(default=None),
    public: bool | None = Query(default=None),
    templated: bool | None = Query(default=None),
    nameAndIdentifier: str | None = Query(default=None, max_length=255),
) -> ProjectFilters:
    # Only whitelisted filters exist as parameters; anything else in the query is ignored.
    return ProjectFilters(
        active=active,
        public=public,
        templated=templated,
        name_and_identifier=nameAndIdentifier,
    )


def _service(db: Session, actor: Actor) -> ProjectService:
    return ProjectService(db, actor=actor)


def _failed(db: Session, status_code: int, message: str):
    # get_db commits once the handler returns; a failed request must leave nothing behind.
    db.rollback()
    return fail(status_code, message)


@router.get("/api/projects")
def get_projects(
    filters: ProjectFilters = Depends(project_filters),
    sort: SortKey = Query(default="lft"),
    direction: SortDirection = Query(default="asc"),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    try:
        data = _service(db, actor).get_projects(filters, sort=sort, direction=direction)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except ValueError as exc:
        return _failed(db, 400, str(exc))
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


# Static paths must be registered BEFORE the dynamic "/{project_id}" path
# so they are not captured as a project_id.
@router.get("/api/projects/level-list")
def get_level_list(
    filters: ProjectFilters = Depends(project_filters),
    sort: SortKey = Query(default="lft"),
    direction: SortDirection = Query(default="asc"),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    try:
        data = _service(db, actor).get_level_list(filters, sort=sort, direction=direction)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except ValueError as exc:
        return _failed(db, 400, str(exc))
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.get("/api/projects/status-options")
def get_status_options():
    return ok(ProjectService.get_status_options().model_dump())


@router.get("/api/projects/no-results")
def get_no_results(db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    return ok(_service(db, actor).get_no_results().model_dump())


@router.get("/api/projects/assignable-parents")
def get_assignable_parents_for_new(
    db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)
):
    try:
        data = _service(db, actor).get_assignable_parents(None)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.post("/api/projects")
def create_project(
    request: CreateProjectRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    try:
        data = _service(db, actor).create_project(
            name=request.name,
            identifier=request.identifier,
            description=request.description,
            parent_id=request.parentId,
            public=request.public,
            templated=request.templated,
            status_code=request.statusCode,
        )
        return ok(data.model_dump())
    except ServiceError:
        raise
    except ValueError as exc:
        return _failed(db, 400, str(exc))
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.get("/api/projects/{project_id}")
def get_project(project_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    try:
        data = _service(db, actor).get_project(project_id)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.patch("/api/projects/{project_id}")
def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    try:
        sent = request.model_fields_set
        data = _service(db, actor).update_project(
            project_id=project_id,
            name=request.name,
            description=request.description if "description" in sent else UNSET,
            public=request.public,
            status_code=request.statusCode if "statusCode" in sent else UNSET,
            parent_id=request.parentId,
            move_to_root=request.moveToRoot,
        )
        return ok(data.model_dump())
    except ServiceError:
        raise
    except ValueError as exc:
        return _failed(db, 400, str(exc))
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.put("/api/projects/{project_id}/archive")
def archive_project(project_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    try:
        data = _service(db, actor).archive_project(project_id=project_id)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except ValueError as exc:
        return _failed(db, 400, str(exc))
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.put("/api/projects/{project_id}/unarchive")
def unarchive_project(project_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    try:
        data = _service(db, actor).unarchive_project(project_id=project_id)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except ValueError as exc:
        return _failed(db, 400, str(exc))
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.post("/api/projects/{project_id}/copy")
def copy_project(
    project_id: str,
    request: CopyProjectRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    try:
        data = _service(db, actor).copy_project(
            project_id=project_id, name=request.name, identifier=request.identifier
        )
        return ok(data.model_dump())
    except ServiceError:
        raise
    except ValueError as exc:
        return _failed(db, 400, str(exc))
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.delete("/api/projects/{project_id}")
def delete_project(project_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    try:
        data = _service(db, actor).delete_project(project_id=project_id)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except ValueError as exc:
        return _failed(db, 400, str(exc))
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.get("/api/projects/{project_id}/menu")
def get_project_menu(project_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)):
    try:
        data = _service(db, actor).get_menu(project_id)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))


@router.get("/api/projects/{project_id}/assignable-parents")
def get_assignable_parents(
    project_id: str, db: Session = Depends(get_db), actor: Actor = Depends(get_current_actor)
):
    try:
        data = _service(db, actor).get_assignable_parents(project_id)
        return ok(data.model_dump())
    except ServiceError:
        raise
    except Exception as exc:
        return _failed(db, 500, full_error_message(exc))
