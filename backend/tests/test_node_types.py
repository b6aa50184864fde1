"""Tests for node-type registration, discovery and default settings."""
import pytest

import patchbay.nodes  # noqa: F401  (triggers discovery)
from patchbay.engine.connector import ConnectorConfig
from patchbay.nodes.base import BaseNodeType, NodeSettings
from patchbay.nodes.registry import NodeRegistry


EXPECTED_TYPES = {
    "ImageSource", "VideoSource", "Control", "Blend",
    "FrameGrab", "Gain", "Preview", "Output",
}


class TestDiscovery:
    def test_media_types_registered(self):
        assert EXPECTED_TYPES <= set(NodeRegistry.all_definitions())

    def test_get_unknown_raises(self):
        with pytest.raises(KeyError):
            NodeRegistry.get("NoSuchNode")

    def test_has(self):
        assert NodeRegistry.has("Blend")
        assert not NodeRegistry.has("NoSuchNode")

    def test_palette(self):
        palette = NodeRegistry.by_category()
        assert "ImageSource" in palette["Sources"]
        assert "Output" in palette["Sinks"]
        assert palette["Filters"] == sorted(palette["Filters"])


class TestDefinitions:
    def test_definition_fields(self):
        defn = NodeRegistry.all_definitions()["FrameGrab"]
        assert defn.display_name == "Frame Grab"
        assert defn.category == "Filters"
        assert [c.name for c in defn.inputs] == ["in"]
        assert defn.outputs[0].scopes == ["image", "video"]

    def test_default_settings(self):
        settings = NodeRegistry.settings_for("Output")
        assert settings.can_remove is False
        assert settings.label == "Output"
        assert settings.width == 250
        assert [c.name for c in settings.inputs] == ["video", "audio"]

    def test_overrides_win(self):
        settings = NodeRegistry.settings_for("Preview", x=40, label="Monitor")
        assert (settings.x, settings.label) == (40, "Monitor")

    def test_settings_are_fresh(self):
        a = NodeRegistry.settings_for("Blend")
        b = NodeRegistry.settings_for("Blend")
        a.inputs.append(ConnectorConfig("extra", ["image"]))
        assert len(b.inputs) == 3


class TestCustomType:
    def test_register_decorator(self):
        @NodeRegistry.register("TestOnlyTap")
        class TapNode(BaseNodeType):
            """Tap an audio stream."""

            @classmethod
            def INPUTS(cls):
                return [ConnectorConfig("in", ["audio"])]

            @classmethod
            def OUTPUTS(cls):
                return [ConnectorConfig("out", ["audio"])]

        try:
            assert NodeRegistry.get("TestOnlyTap") is TapNode
            defn = NodeRegistry.all_definitions()["TestOnlyTap"]
            assert defn.display_name == "TapNode"
            assert defn.description == "Tap an audio stream."
            assert defn.category == "Uncategorized"
        finally:
            NodeRegistry.unregister("TestOnlyTap")

    def test_name_clash_rejected(self):
        class OtherBlend(BaseNodeType):
            @classmethod
            def INPUTS(cls):
                return []

            @classmethod
            def OUTPUTS(cls):
                return []

        with pytest.raises(ValueError, match="already registered"):
            NodeRegistry.register("Blend")(OtherBlend)
        assert NodeRegistry.get("Blend").__name__ == "BlendNode"

    def test_discover_returns_modules(self):
        assert "media" in NodeRegistry.discover("patchbay.nodes")
        assert "base" not in NodeRegistry.discover("patchbay.nodes")


class TestNodeSettings:
    def test_defaults(self):
        s = NodeSettings()
        assert (s.width, s.color, s.font_color, s.border_color) == (
            250, "#000055", "white", "black",
        )
        assert s.can_remove is True

    def test_dict_round_trip_ignores_extra_keys(self):
        s = NodeSettings(x=5, inputs=[ConnectorConfig("a", ["image"], "A")])
        data = {"id": "node-1", "node_type": None, **s.to_dict()}
        assert NodeSettings.from_dict(data) == s
