"""Unit tests for the viewer projection and render capability."""

import math

import pytest

from furnish.domain.capability import (
    RENDER_ENV_VAR,
    detect_render_capability,
    reset_render_capability,
    set_render_probe,
)
from furnish.domain.entities import ColumnConfiguration
from furnish.domain.section_resolver import derive_layout
from furnish.domain.value_objects import ColumnConfigurationType as CT
from furnish.domain.value_objects import Dimensions, FurnitureType
from furnish.domain.viewer import (
    DEFAULT_VIEWER,
    WARDROBE_VIEWER,
    get_viewer_config,
    project_viewer,
    shadow_position,
)


class TestViewerConfig:
    """Tests for viewer config lookup."""

    def test_wardrobe_has_its_own_rig(self) -> None:
        assert get_viewer_config(FurnitureType.WARDROBE) == WARDROBE_VIEWER

    def test_other_types_use_default(self) -> None:
        assert get_viewer_config("stand") == DEFAULT_VIEWER

    @pytest.mark.parametrize("tag", ["sofa", "", None])
    def test_unknown_tag_falls_back(self, tag: str | None) -> None:
        assert get_viewer_config(tag) == DEFAULT_VIEWER

    def test_width_places_shadow(self) -> None:
        config = get_viewer_config(FurnitureType.WARDROBE, 150)

        assert config.shadow_x == -125
        assert config.camera_position == WARDROBE_VIEWER.camera_position

    def test_shadow_position(self) -> None:
        assert shadow_position(80) == -90

    def test_wardrobe_bounds(self) -> None:
        assert WARDROBE_VIEWER.camera_distance == (200, 500)
        assert WARDROBE_VIEWER.polar == (math.pi / 4, math.pi / 2)

    def test_project_viewer_uses_layout_width(self) -> None:
        layout = derive_layout(
            FurnitureType.STAND,
            Dimensions(100, 70, 40, 2),
            [ColumnConfiguration(CT.DRAWERS_3)],
        ).layout

        assert project_viewer(layout).shadow_x == -100

    def test_to_dict_is_json_friendly(self) -> None:
        data = DEFAULT_VIEWER.to_dict()

        assert data["camera_position"] == [-100, 100, 150]
        assert data["shadow_x"] is None


class TestRenderCapability:
    """Tests for the memoized 3D capability check."""

    def test_probe_runs_once(self) -> None:
        calls: list[int] = []

        def probe() -> bool:
            calls.append(1)
            return True

        set_render_probe(probe)

        assert detect_render_capability()
        assert detect_render_capability()
        assert len(calls) == 1

    def test_reset_probes_again(self) -> None:
        calls: list[int] = []

        def probe() -> bool:
            calls.append(1)
            return False

        set_render_probe(probe)
        detect_render_capability()
        reset_render_capability()
        detect_render_capability()

        assert len(calls) == 2

    def test_env_var_disables_rendering(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(RENDER_ENV_VAR, "off")
        reset_render_capability()

        assert detect_render_capability() is False

    def test_enabled_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(RENDER_ENV_VAR, raising=False)
        reset_render_capability()

        assert detect_render_capability() is True
