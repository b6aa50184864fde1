"""Screen geometry helpers for wires and connector handles."""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, p: Point) -> bool:
        return (self.x <= p.x <= self.x + self.width and
                self.y <= p.y <= self.y + self.height)


def shorten_line(start: Point, end: Point, margin: float) -> Point:
    """Return the point ``margin`` short of ``end`` on the segment start→end.

    Used for the preview wire so its tip never sits under the cursor or the
    hovered connector. Coordinates are rounded to whole pixels.
    """
    vx = end.x - start.x
    vy = end.y - start.y
    d = math.hypot(vx, vy)
    if d == 0:
        return Point(round(start.x), round(start.y))
    vx /= d
    vy /= d
    d = max(0.0, d - margin)
    return Point(round(start.x + vx * d), round(start.y + vy * d))


def wire_path(start: Point, end: Point) -> str:
    """SVG path data for a committed wire: a horizontal-tangent cubic bezier."""
    mid = (end.x - start.x) / 2
    return (
        f"M {start.x}, {start.y} "
        f"C {start.x + mid}, {start.y} {end.x - mid}, {end.y} {end.x}, {end.y}"
    )


def line_path(start: Point, end: Point) -> str:
    """SVG path data for a straight preview line."""
    return f"M{start.x},{start.y} L{end.x},{end.y}"
