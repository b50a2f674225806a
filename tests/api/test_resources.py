"""API resource tests."""

from uuid import uuid4

from falcon.testing import TestClient


class TestHealth:
    def test_health_liveness(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/health")
        assert r.status_code == 200
        assert r.json["status"] == "ok"

    def test_health_ready_without_pool(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/health/ready")
        assert r.status_code == 200
        assert r.json["status"] == "ready"


class TestIcons:
    def test_create_icon(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/icons", json={"display_name": "Home"})
        assert r.status_code == 201
        assert r.json["message"] == "Icon Home was successfully created"
        data = r.json["data"]
        assert data["slug"] == "home"
        assert data["type"] == "icon"
        assert data["active"] is True
        assert data["created_by"] == "user-1"
        assert "created_at" in data and "updated_at" in data

    def test_create_requires_display_name(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/icons", json={"active": True})
        assert r.status_code == 400
        assert "display_name" in r.json["error"]

    def test_create_rejects_unknown_fields(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/icons", json={"display_name": "Home", "slug": "x"})
        assert r.status_code == 400
        assert "slug" in r.json["error"]

    def test_list_sorted(self, client: TestClient) -> None:
        for name in ["Star", "Home", "Bell"]:
            client.simulate_post("/v1/icons", json={"display_name": name})
        r = client.simulate_get("/v1/icons")
        assert r.status_code == 200
        assert [i["display_name"] for i in r.json["data"]] == ["Bell", "Home", "Star"]

    def test_list_empty(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/icons")
        assert r.status_code == 200
        assert r.json == {"data": []}

    def test_list_active_filter(self, client: TestClient) -> None:
        client.simulate_post("/v1/icons", json={"display_name": "Home"})
        client.simulate_post("/v1/icons", json={"display_name": "Old", "active": False})
        r = client.simulate_get("/v1/icons", params={"active": "false"})
        assert [i["slug"] for i in r.json["data"]] == ["old"]

    def test_get_update_toggle_delete_flow(self, client: TestClient) -> None:
        icon_id = client.simulate_post("/v1/icons", json={"display_name": "Home"}).json["data"]["id"]

        r = client.simulate_get(f"/v1/icons/{icon_id}")
        assert r.status_code == 200
        assert r.json["slug"] == "home"

        r = client.simulate_patch(f"/v1/icons/{icon_id}", json={"display_name": "New Home"})
        assert r.status_code == 200
        assert r.json["data"]["display_name"] == "New Home"
        assert r.json["data"]["slug"] == "home"

        for _ in range(2):
            r = client.simulate_patch(f"/v1/icons/toggle/{icon_id}", json={"active": False})
            assert r.status_code == 200
            assert r.json["data"]["active"] is False

        r = client.simulate_delete(f"/v1/icons/{icon_id}")
        assert r.status_code == 200
        assert r.json["message"] == f"Icon with {icon_id} was successfully deleted"

        r = client.simulate_get(f"/v1/icons/{icon_id}")
        assert r.status_code == 404

    def test_invalid_id(self, client: TestClient) -> None:
        r = client.simulate_get("/v1/icons/not-a-uuid")
        assert r.status_code == 400
        assert r.json["error"] == "Invalid icon ID"

    def test_update_unknown_is_404(self, client: TestClient) -> None:
        r = client.simulate_patch(f"/v1/icons/{uuid4()}", json={"display_name": "x"})
        assert r.status_code == 404

    def test_delete_unknown_is_404(self, client: TestClient) -> None:
        r = client.simulate_delete(f"/v1/icons/{uuid4()}")
        assert r.status_code == 404

    def test_update_cannot_change_slug(self, client: TestClient) -> None:
        icon_id = client.simulate_post("/v1/icons", json={"display_name": "Home"}).json["data"]["id"]
        r = client.simulate_patch(f"/v1/icons/{icon_id}", json={"slug": "other"})
        assert r.status_code == 400

    def test_duplicate_display_name_is_409(self, client: TestClient) -> None:
        first = client.simulate_post("/v1/icons", json={"display_name": "Home"}).json["data"]
        r = client.simulate_post("/v1/icons", json={"display_name": "Home"})
        assert r.status_code == 409
        assert r.json["error"] == "Icon with display_name 'home' already exists"

        r = client.simulate_get(f"/v1/icons/{first['id']}")
        assert r.status_code == 200
        assert r.json["display_name"] == "Home"
        assert r.json["slug"] == "home"
        assert len(client.simulate_get("/v1/icons").json["data"]) == 1

    def test_distinct_names_with_same_slug_get_suffix(self, client: TestClient) -> None:
        client.simulate_post("/v1/icons", json={"display_name": "Home"})
        r = client.simulate_post("/v1/icons", json={"display_name": "Home!"})
        assert r.status_code == 201
        assert r.json["data"]["slug"] == "home-2"

    def test_toggle_rejects_other_fields(self, client: TestClient) -> None:
        icon_id = client.simulate_post("/v1/icons", json={"display_name": "Home"}).json["data"]["id"]
        r = client.simulate_patch(
            f"/v1/icons/toggle/{icon_id}", json={"active": False, "display_name": "Renamed"}
        )
        assert r.status_code == 400
        assert "display_name" in r.json["error"]

        r = client.simulate_get(f"/v1/icons/{icon_id}")
        assert r.json["display_name"] == "Home"
        assert r.json["active"] is True

    def test_toggle_requires_boolean(self, client: TestClient) -> None:
        icon_id = client.simulate_post("/v1/icons", json={"display_name": "Home"}).json["data"]["id"]
        r = client.simulate_patch(f"/v1/icons/toggle/{icon_id}", json={"active": "no"})
        assert r.status_code == 400

    def test_body_must_be_object(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/icons", json=["Home"])
        assert r.status_code == 400

    def test_unauthorized(self, unauthenticated_client: TestClient) -> None:
        r = unauthenticated_client.simulate_get("/v1/icons")
        assert r.status_code == 401


class TestRoles:
    def test_create_role_with_description(self, client: TestClient) -> None:
        r = client.simulate_post(
            "/v1/roles/organization",
            json={"display_name": "Billing Admin", "description": "Manages invoices"},
        )
        assert r.status_code == 201
        data = r.json["data"]
        assert data["slug"] == "billing-admin"
        assert data["type"] == "organization"
        assert data["description"] == "Manages invoices"

    def test_invalid_role_type(self, client: TestClient) -> None:
        r = client.simulate_post("/v1/roles/galaxy", json={"display_name": "Admin"})
        assert r.status_code == 400
        assert "galaxy" in r.json["error"]

    def test_list_is_scoped_by_type(self, client: TestClient) -> None:
        client.simulate_post("/v1/roles/platform", json={"display_name": "Admin"})
        client.simulate_post("/v1/roles/project", json={"display_name": "Maintainer"})
        r = client.simulate_get("/v1/roles/project")
        assert r.status_code == 200
        assert [x["slug"] for x in r.json["data"]] == ["maintainer"]

    def test_get_in_other_type_is_404(self, client: TestClient) -> None:
        role_id = client.simulate_post(
            "/v1/roles/platform", json={"display_name": "Admin"}
        ).json["data"]["id"]
        assert client.simulate_get(f"/v1/roles/platform/{role_id}").status_code == 200
        assert client.simulate_get(f"/v1/roles/project/{role_id}").status_code == 404

    def test_toggle_and_update(self, client: TestClient) -> None:
        role_id = client.simulate_post(
            "/v1/roles/project", json={"display_name": "Maintainer"}
        ).json["data"]["id"]

        r = client.simulate_patch(f"/v1/roles/project/toggle/{role_id}", json={"active": False})
        assert r.status_code == 200
        assert r.json["data"]["active"] is False

        r = client.simulate_patch(
            f"/v1/roles/project/{role_id}", json={"description": "Merges code"}
        )
        assert r.status_code == 200
        assert r.json["data"]["description"] == "Merges code"
        assert r.json["data"]["active"] is False

    def test_toggle_rejects_description(self, client: TestClient) -> None:
        role_id = client.simulate_post(
            "/v1/roles/project", json={"display_name": "Maintainer"}
        ).json["data"]["id"]
        r = client.simulate_patch(
            f"/v1/roles/project/toggle/{role_id}",
            json={"active": False, "description": "Merges code"},
        )
        assert r.status_code == 400
        assert "description" in r.json["error"]

    def test_delete_role(self, client: TestClient) -> None:
        role_id = client.simulate_post(
            "/v1/roles/platform", json={"display_name": "Admin"}
        ).json["data"]["id"]
        r = client.simulate_delete(f"/v1/roles/platform/{role_id}")
        assert r.status_code == 200
        assert client.simulate_delete(f"/v1/roles/platform/{role_id}").status_code == 404


class TestErrors:
    def test_conflict_is_409(self, client: TestClient, fake_uow) -> None:
        client.simulate_post("/v1/icons", json={"display_name": "Home"})
        fake_uow.icons.phantom_slugs.add("home")
        r = client.simulate_post("/v1/icons", json={"display_name": "Home!"})
        assert r.status_code == 409
        assert r.json["error"] == "Icon with slug 'home' already exists"

    def test_store_failure_is_opaque_500(self, client: TestClient, fake_uow) -> None:
        from tests.conftest import FakeStoreFailure

        fake_uow.icons.fail_with = FakeStoreFailure("password authentication failed")
        r = client.simulate_get("/v1/icons")
        assert r.status_code == 500
        assert "password" not in r.json["error"]
