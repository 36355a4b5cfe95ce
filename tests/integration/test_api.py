"""Integration tests for the REST API using the FastAPI TestClient."""

import pytest
from fastapi.testclient import TestClient

from furnish.application.settings import EngineSettings
from furnish.domain.capability import set_render_probe
from furnish.domain.constraints import DimensionPolicy
from furnish.web import create_app


@pytest.fixture
def client() -> TestClient:
    """A client for a fresh application with an empty cart."""
    return TestClient(create_app())


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestFurnitureEndpoints:
    """Tests for the furniture catalog endpoints."""

    def test_list_types(self, client: TestClient) -> None:
        response = client.get("/api/v1/furniture")

        assert response.status_code == 200
        types = {item["type"]: item for item in response.json()["furniture_types"]}
        assert "wardrobe" in types
        assert types["wardrobe"]["default_dimensions"]["width"] == 150
        assert types["wardrobe"]["default_sections"] == 2

    def test_constraints(self, client: TestClient) -> None:
        response = client.get("/api/v1/furniture/stand/constraints")

        assert response.status_code == 200
        data = response.json()
        assert data["height"]["step"] == 5
        assert data["default_column_type"] == "DRAWERS_3"

    def test_constraints_of_unknown_type(self, client: TestClient) -> None:
        response = client.get("/api/v1/furniture/sofa/constraints")

        assert response.status_code == 404
        data = response.json()
        assert data["error_type"] == "unknown_furniture_type"
        assert data["details"] == {"type": "sofa"}

    def test_viewer(self, client: TestClient) -> None:
        response = client.get("/api/v1/furniture/wardrobe/viewer", params={"width": 150})

        assert response.status_code == 200
        assert response.json()["shadow_x"] == -125

    def test_viewer_of_unknown_type(self, client: TestClient) -> None:
        response = client.get("/api/v1/furniture/sofa/viewer")

        assert response.status_code == 200
        assert response.json()["shadow_x"] is None


class TestConfigurationEndpoints:
    """Tests for opening and editing configurations."""

    def test_open_defaults(self, client: TestClient) -> None:
        response = client.get("/api/v1/furniture/wardrobe/configuration")

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "type=wardrobe&colCfg=DD,SDLF&color=%23fcfbf5"
        assert [c["width"] for c in data["layout"]["columns"]] == [96, 48]
        assert data["validation"]["is_valid"] is True
        assert data["issues"] == []

    def test_open_from_link(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/furniture/wardrobe/configuration",
            params={"height": "210", "colCfg": "DD,SDRT"},
        )

        data = response.json()
        assert data["configuration"]["dimensions"]["height"] == 210
        assert data["layout"]["columns"][1]["door_opening_side"] == "right"

    def test_bad_link_is_reset_not_rejected(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/furniture/stand/configuration", params={"width": "500"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["configuration"]["dimensions"]["width"] == 80
        assert data["issues"][0]["field"] == "width"

    def test_unknown_type(self, client: TestClient) -> None:
        response = client.get("/api/v1/furniture/sofa/configuration")

        assert response.status_code == 404

    def test_render_capability_reported(self, client: TestClient) -> None:
        set_render_probe(lambda: False)

        response = client.get("/api/v1/furniture/stand/configuration")

        assert response.json()["render_3d"] is False

    def test_apply_edit(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/furniture/wardrobe/configuration",
            json={"query": "", "patch": {"dimensions": {"height": 210}}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["validation"]["is_valid"] is True
        assert data["query"] == "type=wardrobe&height=210&colCfg=DD,SDLF&color=%23fcfbf5"
        assert data["layout"]["columns"][1]["arrangement_image"].startswith(
            "/wardrobe/white/h210/"
        )

    def test_apply_edit_to_link(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/furniture/stand/configuration",
            json={
                "query": "type=stand&width=100",
                "patch": {"color": "Grey", "furniture_options": {"guides": "premium"}},
            },
        )

        data = response.json()
        assert data["configuration"]["dimensions"]["width"] == 100
        assert data["configuration"]["color"] == "Grey"
        assert "guides=premium" in data["query"]

    def test_column_objects(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/furniture/wardrobe/configuration",
            json={
                "patch": {
                    "columns": [
                        {"type": "DOUBLE_DOOR"},
                        {"type": "SINGLE_DOOR_LEFT", "door_opening_side": "right"},
                    ]
                }
            },
        )

        data = response.json()
        assert data["validation"]["is_valid"] is True
        assert data["layout"]["columns"][1]["door_opening_side"] == "right"

    def test_rejected_edit_keeps_previous(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/furniture/stand/configuration",
            json={"patch": {"selected_sections": 4}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["validation"]["is_valid"] is False
        assert data["validation"]["errors"][0]["path"] == "selected_sections"
        assert data["configuration"]["selected_sections"] == 1

    def test_clamp_settings(self) -> None:
        client = TestClient(create_app(EngineSettings(dimension_policy=DimensionPolicy.CLAMP)))

        response = client.post(
            "/api/v1/furniture/stand/configuration",
            json={"patch": {"dimensions": {"height": 72}}},
        )

        data = response.json()
        assert data["validation"]["is_valid"] is True
        assert data["configuration"]["dimensions"]["height"] == 70
        assert data["validation"]["warnings"][0]["path"] == "dimensions.height"

    def test_unknown_field(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/furniture/stand/configuration",
            json={"patch": {"colour": "Grey"}},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "invalid_patch"

    def test_read_only_field(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/furniture/stand/configuration",
            json={"patch": {"price": 1}},
        )

        assert response.status_code == 422
        assert "price" in response.json()["error"]

    def test_malformed_body(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/furniture/stand/configuration",
            json={"patch": {"dimensions": {"width": -5}}},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "validation_error"

    @pytest.mark.parametrize(
        "body",
        [
            '{"patch": {"dimensions": {"width": Infinity}}}',
            '{"patch": {"dimensions": {"height": NaN}}}',
            '{"patch": {"width": -Infinity}}',
        ],
    )
    def test_non_finite_dimensions(self, client: TestClient, body: str) -> None:
        response = client.post(
            "/api/v1/furniture/wardrobe/configuration",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "validation_error"

    def test_unknown_nested_field(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/furniture/stand/configuration",
            json={"patch": {"dimensions": {"wdth": 100}}},
        )

        assert response.status_code == 422
        assert response.json()["details"][0]["loc"][-1] == "wdth"


class TestCartEndpoints:
    """Tests for the cart endpoints."""

    def test_empty_cart(self, client: TestClient) -> None:
        response = client.get("/api/v1/cart")

        assert response.status_code == 200
        assert response.json() == {"items": [], "item_count": 0, "total": 0}

    def test_add_line_item(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/cart/line-items",
            json={"furniture_type": "stand", "query": "type=stand", "name": "Hall stand"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["item_count"] == 1
        assert data["total"] == 3040
        assert data["items"][0]["name"] == "Hall stand"
        assert data["items"][0]["section_count"] == 1

    def test_cart_accumulates(self, client: TestClient) -> None:
        client.post("/api/v1/cart/line-items", json={"furniture_type": "stand"})
        client.post(
            "/api/v1/cart/line-items",
            json={"furniture_type": "stand", "query": "guides=premium"},
        )

        data = client.get("/api/v1/cart").json()

        assert data["item_count"] == 2
        assert data["total"] == 3040 + 3550

    def test_unknown_type(self, client: TestClient) -> None:
        response = client.post("/api/v1/cart/line-items", json={"furniture_type": "sofa"})

        assert response.status_code == 404


class TestPresetEndpoints:
    """Tests for the preset endpoints."""

    def test_list(self, client: TestClient) -> None:
        response = client.get("/api/v1/presets")

        assert response.status_code == 200
        presets = response.json()["presets"]
        assert len(presets) == 10
        assert presets[0]["href"].startswith("/configurator/")

    def test_list_by_type(self, client: TestClient) -> None:
        response = client.get("/api/v1/presets", params={"type": "stand"})

        assert {p["id"] for p in response.json()["presets"]} == {"ST-201", "ST-202"}

    def test_list_by_unknown_type(self, client: TestClient) -> None:
        response = client.get("/api/v1/presets", params={"type": "sofa"})

        assert response.status_code == 404

    def test_detail(self, client: TestClient) -> None:
        response = client.get("/api/v1/presets/WR-101")

        assert response.status_code == 200
        data = response.json()
        assert data["configuration"]["dimensions"]["plinth_height"] == 5
        assert data["configuration"]["furniture_options"]["opening_type"] == "round"
        assert data["layout"]["source"] == "preset"
        assert [c["width"] for c in data["layout"]["columns"]] == [96, 48]

    def test_detail_not_found(self, client: TestClient) -> None:
        response = client.get("/api/v1/presets/XX-1")

        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"
