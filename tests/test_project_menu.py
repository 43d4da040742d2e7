from projectdesk.db.models.project import Project
from projectdesk.services.actor import ANONYMOUS, Actor
from projectdesk.services.project_menu import project_menu_items

ADMIN = Actor(login="admin", admin=True)
MANAGER = Actor(
    login="h.wurst",
    permissions=frozenset({"add_subprojects", "edit_project", "copy_projects"}),
)


def _project(name: str = "Web Shop", *, active: int = 1, parent: Project | None = None) -> Project:
    project = Project(
        id=f"proj-{name.lower().replace(' ', '-')}",
        name=name,
        identifier=name.lower().replace(" ", "-"),
        active=active,
        lft=1,
        rgt=2,
        created_at="2026-01-01T00:00:00+00:00",
        updated_at="2026-01-01T00:00:00+00:00",
    )
    project.parent = parent
    return project


def _actions(project: Project, actor: Actor) -> list[str]:
    return [item.action for item in project_menu_items(project, actor)]


def test_admin_sees_archive_and_delete_for_active_project() -> None:
    assert _actions(_project(), ADMIN) == ["new_subproject", "settings", "archive", "copy", "delete"]


def test_archive_item_asks_for_confirmation() -> None:
    items = project_menu_items(_project("Web Shop"), ADMIN)
    archive = next(item for item in items if item.action == "archive")

    assert archive.method == "PUT"
    assert archive.href == "/api/projects/proj-web-shop/archive"
    assert "Web Shop" in archive.confirm


def test_archived_project_offers_unarchive_but_not_copy() -> None:
    assert _actions(_project(active=0), ADMIN) == ["new_subproject", "settings", "unarchive", "delete"]


def test_unarchive_hidden_while_parent_archived() -> None:
    parent = _project("Portfolio", active=0)
    child = _project("Checkout", active=0, parent=parent)

    assert "unarchive" not in _actions(child, ADMIN)


def test_unarchive_shown_when_parent_active() -> None:
    parent = _project("Portfolio", active=1)
    child = _project("Checkout", active=0, parent=parent)

    assert "unarchive" in _actions(child, ADMIN)


def test_permission_holder_without_admin_rights() -> None:
    assert _actions(_project(), MANAGER) == ["new_subproject", "settings", "copy"]


def test_subproject_item_carries_parent_payload() -> None:
    item = project_menu_items(_project(), MANAGER)[0]
    assert item.payload == {"parentId": "proj-web-shop"}


def test_anonymous_actor_gets_no_items() -> None:
    assert project_menu_items(_project(), ANONYMOUS) == []
