"""Tests for geometry helpers and scope color resolution."""
from patchbay.config import settings
from patchbay.engine.geometry import Point, Rect, line_path, shorten_line, wire_path
from patchbay.engine.scopes import connector_color, resolve_wire_scope, wire_color

from conftest import SCOPES


class TestShortenLine:
    def test_horizontal(self):
        assert shorten_line(Point(0, 0), Point(100, 0), 5) == Point(95, 0)

    def test_diagonal(self):
        assert shorten_line(Point(0, 0), Point(30, 40), 5) == Point(27, 36)

    def test_zero_length(self):
        assert shorten_line(Point(7, 7), Point(7, 7), 5) == Point(7, 7)

    def test_shorter_than_margin(self):
        assert shorten_line(Point(10, 10), Point(12, 10), 5) == Point(10, 10)

    def test_rounds(self):
        end = shorten_line(Point(0.4, 0), Point(100.4, 0), 0)
        assert end == Point(100, 0)


class TestPaths:
    def test_wire_path_is_bezier(self):
        path = wire_path(Point(0, 0), Point(100, 50))
        assert path.startswith("M 0, 0 C")
        assert path.endswith("100, 50")

    def test_line_path(self):
        assert line_path(Point(1, 2), Point(3, 4)) == "M1,2 L3,4"


class TestRect:
    def test_center_and_contains(self):
        r = Rect(0, 0, 100, 40)
        assert r.center == Point(50, 20)
        assert r.contains(Point(100, 40))
        assert not r.contains(Point(101, 0))


class TestScopeColors:
    def test_single_known_scope(self):
        assert wire_color({"audio"}, SCOPES) == SCOPES["audio"].color

    def test_several_scopes_ambiguous(self):
        assert wire_color({"image", "video"}, SCOPES) == settings.ambiguous_color

    def test_unknown_scope(self):
        assert wire_color({"midi"}, SCOPES) == settings.unknown_wire_color

    def test_resolve_wire_scope(self):
        assert resolve_wire_scope({"video"}) == "video"
        assert resolve_wire_scope({"image", "video"}) is None

    def test_connector_color(self):
        assert connector_color({"image"}, SCOPES) == SCOPES["image"].color
        assert connector_color({"image", "audio"}, SCOPES) == settings.ambiguous_color
        assert connector_color({"midi"}, SCOPES) == settings.unknown_connector_color
