from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from projectdesk.config.settings import get_settings
from projectdesk.db.base import Base
from projectdesk.db.models.project import Project
from projectdesk.db.repositories.project_repo import ProjectRepository
from projectdesk.db.repositories.user_repo import UserRepository
from projectdesk.utils.time import utc_now_iso

logger = logging.getLogger(__name__)

# (id, name, identifier, parent id, active, public)
DEMO_PROJECTS: tuple[tuple[str, str, str, str | None, int, int], ...] = (
    ("proj-portfolio", "Portfolio", "portfolio", None, 1, 0),
    ("proj-webshop", "Web Shop", "web-shop", "proj-portfolio", 1, 1),
    ("proj-checkout", "Checkout", "checkout", "proj-webshop", 1, 0),
    ("proj-mobile", "Mobile App", "mobile-app", "proj-portfolio", 1, 0),
    ("proj-internal", "Internal Tools", "internal-tools", None, 1, 1),
    ("proj-legacy", "Legacy CRM", "legacy-crm", "proj-internal", 0, 0),
)


def _ensure_schema(db: Session) -> None:
    """Create missing tables on fresh databases that have not been migrated yet."""
    bind = db.get_bind()
    existing = set(inspect(bind).get_table_names())
    if {"projects", "users"} <= existing:
        return
    import projectdesk.db.models  # noqa: F401

    Base.metadata.create_all(bind=bind, checkfirst=True)
    logger.info("Created missing database tables during startup seed")


def seed_app_data(db: Session) -> None:
    _ensure_schema(db)
    settings = get_settings()
    users = UserRepository(db)
    if users.get_by_login(settings.seed_admin_login) is None:
        users.create_user(
            user_id="user-admin",
            login=settings.seed_admin_login,
            admin=True,
            permissions=[],
            created_at=utc_now_iso(),
        )
        logger.info("Seeded admin user %s", settings.seed_admin_login)


def seed_demo_data(db: Session) -> None:
    seed_app_data(db)
    now = utc_now_iso()
    users = UserRepository(db)
    if users.get_by_login("h.wurst") is None:
        users.create_user(
            user_id="user-manager",
            login="h.wurst",
            admin=False,
            permissions=["add_project", "add_subprojects", "edit_project", "copy_projects"],
            created_at=now,
        )
    if users.get_by_login("viewer") is None:
        users.create_user(
            user_id="user-viewer", login="viewer", admin=False, permissions=[], created_at=now
        )

    projects = ProjectRepository(db)
    for project_id, name, identifier, parent_id, active, public in DEMO_PROJECTS:
        if projects.get_project(project_id) is not None:
            continue
        projects.create_project(
            Project(
                id=project_id,
                name=name,
                identifier=identifier,
                description=f"{name} demo project.",
                parent_id=parent_id,
                active=active,
                public=public,
                templated=0,
                created_at=now,
                updated_at=now,
            )
        )
    projects.rebuild_nested_set()
