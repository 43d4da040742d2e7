from tests.conftest import as_user

ADMIN = as_user("admin")
MANAGER = as_user("h.wurst")
VIEWER = as_user("viewer")


def _assert_envelope(payload: dict) -> None:
    assert isinstance(payload.get("ok"), bool)
    assert "timestamp" in payload


def _levels(payload: dict) -> list[tuple[str, int]]:
    return [(p["identifier"], p["level"]) for p in payload["data"]["projects"]]


def test_list_projects_in_tree_order_with_levels(client) -> None:
    response = client.get("/api/projects")
    assert response.status_code == 200
    body = response.json()
    _assert_envelope(body)
    assert body["data"]["sort"] == "lft"
    assert _levels(body) == [
        ("internal-tools", 0),
        ("legacy-crm", 1),
        ("portfolio", 0),
        ("mobile-app", 1),
        ("web-shop", 1),
        ("checkout", 2),
    ]


def test_list_projects_sorted_by_name_uses_ancestry(client) -> None:
    body = client.get("/api/projects", params={"sort": "name"}).json()
    assert _levels(body) == [
        ("checkout", 0),
        ("internal-tools", 0),
        ("legacy-crm", 1),
        ("mobile-app", 0),
        ("portfolio", 0),
        ("web-shop", 1),
    ]


def test_list_projects_filters(client) -> None:
    active = client.get("/api/projects", params={"active": "true"}).json()
    assert "legacy-crm" not in [identifier for identifier, _ in _levels(active)]

    matches = client.get("/api/projects", params={"nameAndIdentifier": "shop"}).json()
    assert _levels(matches) == [("web-shop", 0)]


def test_unknown_filters_are_ignored(client) -> None:
    body = client.get("/api/projects", params={"ownerId": "42"}).json()
    assert len(body["data"]["projects"]) == 6


def test_invalid_sort_key_is_rejected(client) -> None:
    response = client.get("/api/projects", params={"sort": "lft; drop"})
    assert response.status_code == 422
    assert response.json()["ok"] is False


def test_level_list_payload(client) -> None:
    response = client.get("/api/projects/level-list", params={"active": "true"})
    assert response.status_code == 200
    projects = response.json()["data"]["projects"]
    assert projects[0] == {
        "id": "proj-internal",
        "name": "Internal Tools",
        "identifier": "internal-tools",
        # the archived child still counts for the tree shape
        "hasChildren": True,
        "level": 0,
    }
    assert [(p["identifier"], p["level"]) for p in projects[1:]] == [
        ("portfolio", 0),
        ("mobile-app", 1),
        ("web-shop", 1),
        ("checkout", 2),
    ]


def test_get_project_reports_depth(client) -> None:
    response = client.get("/api/projects/proj-checkout")
    assert response.status_code == 200
    project = response.json()["data"]["project"]
    assert project["level"] == 2
    assert project["hasChildren"] is False
    assert project["shortDescription"] == "Checkout demo project."


def test_get_missing_project(client) -> None:
    response = client.get("/api/projects/proj-missing")
    assert response.status_code == 404
    body = response.json()
    assert body["ok"] is False
    assert "proj-missing" in body["error"]


def test_create_root_and_subproject(client) -> None:
    created = client.post("/api/projects", json={"name": "New Portal"}, headers=MANAGER)
    assert created.status_code == 200
    root = created.json()["data"]["project"]
    assert root["identifier"] == "new-portal"
    assert root["level"] == 0

    child = client.post(
        "/api/projects",
        json={"name": "Portal API", "parentId": root["id"], "statusCode": "at_risk"},
        headers=MANAGER,
    )
    assert child.status_code == 200
    child_data = child.json()["data"]["project"]
    assert child_data["level"] == 1
    assert child_data["statusCode"] == "at_risk"

    listing = _levels(client.get("/api/projects").json())
    assert listing.index(("new-portal", 0)) + 1 == listing.index(("portal-api", 1))


def test_create_derives_unique_identifier(client) -> None:
    response = client.post("/api/projects", json={"name": "Portfolio"}, headers=ADMIN)
    assert response.status_code == 200
    assert response.json()["data"]["project"]["identifier"] == "portfolio-2"


def test_create_with_taken_identifier(client) -> None:
    response = client.post(
        "/api/projects", json={"name": "Other", "identifier": "portfolio"}, headers=ADMIN
    )
    assert response.status_code == 400
    assert "already been taken" in response.json()["error"]


def test_create_below_archived_parent(client) -> None:
    response = client.post(
        "/api/projects", json={"name": "Revival", "parentId": "proj-legacy"}, headers=ADMIN
    )
    assert response.status_code == 400


def test_create_requires_permission(client) -> None:
    assert client.post("/api/projects", json={"name": "Nope"}, headers=VIEWER).status_code == 403
    assert client.post("/api/projects", json={"name": "Nope"}).status_code == 403


def test_actor_header_is_case_insensitive(client) -> None:
    response = client.post("/api/projects", json={"name": "Case Test"}, headers=as_user("H.WURST"))
    assert response.status_code == 200


def test_move_project_to_root(client) -> None:
    response = client.patch(
        "/api/projects/proj-webshop", json={"moveToRoot": True}, headers=MANAGER
    )
    assert response.status_code == 200
    assert response.json()["data"]["project"]["parentId"] is None

    levels = dict(_levels(client.get("/api/projects").json()))
    assert levels["web-shop"] == 0
    assert levels["checkout"] == 1


def test_move_project_below_its_descendant_is_rejected(client) -> None:
    response = client.patch(
        "/api/projects/proj-portfolio", json={"parentId": "proj-checkout"}, headers=MANAGER
    )
    assert response.status_code == 400
    assert response.json()["ok"] is False


def test_rejected_move_leaves_other_fields_unsaved(client) -> None:
    response = client.patch(
        "/api/projects/proj-portfolio",
        json={"name": "Renamed", "description": "changed", "parentId": "proj-checkout"},
        headers=ADMIN,
    )
    assert response.status_code == 400
    _assert_envelope(response.json())

    project = client.get("/api/projects/proj-portfolio").json()["data"]["project"]
    assert project["name"] == "Portfolio"
    assert project["description"] == "Portfolio demo project."
    assert project["parentId"] is None


def test_update_clears_status_and_description(client) -> None:
    response = client.patch(
        "/api/projects/proj-mobile", json={"statusCode": "at_risk"}, headers=MANAGER
    )
    assert response.json()["data"]["project"]["statusCode"] == "at_risk"

    response = client.patch(
        "/api/projects/proj-mobile", json={"name": "Mobile App 2"}, headers=MANAGER
    )
    project = response.json()["data"]["project"]
    assert project["statusCode"] == "at_risk"
    assert project["description"] == "Mobile App demo project."

    response = client.patch(
        "/api/projects/proj-mobile",
        json={"statusCode": None, "description": None},
        headers=MANAGER,
    )
    assert response.status_code == 200
    project = response.json()["data"]["project"]
    assert project["statusCode"] is None
    assert project["description"] == ""
    assert project["shortDescription"] == ""


def test_rename_updates_sibling_order(client) -> None:
    response = client.patch(
        "/api/projects/proj-webshop", json={"name": "Android Shop"}, headers=MANAGER
    )
    assert response.status_code == 200
    identifiers = [identifier for identifier, _ in _levels(client.get("/api/projects").json())]
    assert identifiers.index("web-shop") < identifiers.index("mobile-app")


def test_archive_and_unarchive(client) -> None:
    denied = client.put("/api/projects/proj-portfolio/archive", headers=MANAGER)
    assert denied.status_code == 403

    archived = client.put("/api/projects/proj-portfolio/archive", headers=ADMIN)
    assert archived.status_code == 200
    data = archived.json()["data"]
    assert data["project"]["active"] is False
    assert set(data["affectedProjectIds"]) == {
        "proj-portfolio",
        "proj-webshop",
        "proj-checkout",
        "proj-mobile",
    }

    blocked = client.put("/api/projects/proj-checkout/unarchive", headers=ADMIN)
    assert blocked.status_code == 400

    restored = client.put("/api/projects/proj-portfolio/unarchive", headers=ADMIN)
    assert restored.status_code == 200
    assert restored.json()["data"]["project"]["active"] is True


def test_copy_project(client) -> None:
    response = client.post(
        "/api/projects/proj-webshop/copy", json={"name": "Web Shop Copy"}, headers=MANAGER
    )
    assert response.status_code == 200
    project = response.json()["data"]["project"]
    assert project["identifier"] == "web-shop-copy"
    assert project["parentId"] == "proj-portfolio"
    assert project["level"] == 1
    assert project["description"] == "Web Shop demo project."


def test_copy_archived_project_is_rejected(client) -> None:
    response = client.post("/api/projects/proj-legacy/copy", json={"name": "Again"}, headers=MANAGER)
    assert response.status_code == 400


def test_delete_project_with_subprojects(client) -> None:
    assert client.delete("/api/projects/proj-portfolio", headers=MANAGER).status_code == 403

    response = client.delete("/api/projects/proj-portfolio", headers=ADMIN)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["deletedProjectId"] == "proj-portfolio"
    assert set(data["deletedProjectIds"]) == {
        "proj-portfolio",
        "proj-webshop",
        "proj-checkout",
        "proj-mobile",
    }
    assert _levels(client.get("/api/projects").json()) == [
        ("internal-tools", 0),
        ("legacy-crm", 1),
    ]


def test_menu_items_per_actor(client) -> None:
    admin_items = client.get("/api/projects/proj-legacy/menu", headers=ADMIN).json()["data"]["items"]
    assert [item["action"] for item in admin_items] == [
        "new_subproject",
        "settings",
        "unarchive",
        "delete",
    ]

    manager_items = client.get("/api/projects/proj-webshop/menu", headers=MANAGER).json()["data"]["items"]
    assert [item["action"] for item in manager_items] == ["new_subproject", "settings", "copy"]

    viewer_items = client.get("/api/projects/proj-webshop/menu", headers=VIEWER).json()["data"]["items"]
    assert viewer_items == []


def test_assignable_parents_exclude_subtree(client) -> None:
    response = client.get("/api/projects/proj-webshop/assignable-parents")
    assert response.status_code == 200
    assert _levels(response.json()) == [
        ("internal-tools", 0),
        ("portfolio", 0),
        ("mobile-app", 1),
    ]


def test_assignable_parents_for_new_project(client) -> None:
    response = client.get("/api/projects/assignable-parents")
    assert response.status_code == 200
    assert _levels(response.json()) == [
        ("internal-tools", 0),
        ("portfolio", 0),
        ("mobile-app", 1),
        ("web-shop", 1),
        ("checkout", 2),
    ]


def test_status_options(client) -> None:
    options = client.get("/api/projects/status-options").json()["data"]["options"]
    assert [option["code"] for option in options] == ["on_track", "at_risk", "off_track"]


def test_no_results_action_depends_on_permission(client) -> None:
    allowed = client.get("/api/projects/no-results", headers=MANAGER).json()["data"]
    assert allowed == {"displayAction": True, "actionUrl": "/api/projects"}

    anonymous = client.get("/api/projects/no-results").json()["data"]
    assert anonymous == {"displayAction": False, "actionUrl": None}


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
