"""2D cross sections — arcs, rounded rectangles, clip and hole profiles.

Cross sections are plain point lists kept in pure Python so they can be
built and checked without the CSG kernel. The kernel only sees them at
extrusion time.
"""
from __future__ import annotations

import math
from typing import Iterable, Sequence

from .. import config
from .types import Point2D

_EPS = 1e-9

# Right clip hook, before the 180 deg turn. Counter-clockwise.
CLIP_OUTLINE: tuple[Point2D, ...] = (
    (0.95, 0.0),
    (2.45, 0.0),
    (2.45, 3.7),
    (3.05, 4.3),
    (3.05, 5.9),
    (2.45, 6.5),
    (0.95, 6.5),
)


def _same(a: Point2D, b: Point2D) -> bool:
    return abs(a[0] - b[0]) < _EPS and abs(a[1] - b[1]) < _EPS


class CrossSection:
    """Closed simple polygon, counter-clockwise for positive area.

    Consecutive coincident vertices (including last/first) are dropped on
    construction.
    """

    __slots__ = ("points",)

    def __init__(self, points: Iterable[Sequence[float]]):
        cleaned: list[Point2D] = []
        for x, y in points:
            pt = (float(x) + 0.0, float(y) + 0.0)
            if cleaned and _same(cleaned[-1], pt):
                continue
            cleaned.append(pt)
        while len(cleaned) > 1 and _same(cleaned[0], cleaned[-1]):
            cleaned.pop()
        self.points: tuple[Point2D, ...] = tuple(cleaned)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __repr__(self) -> str:
        return f"CrossSection({len(self.points)} points, area={self.signed_area():.3f})"

    def signed_area(self) -> float:
        """Shoelace area; positive when wound counter-clockwise."""
        pts = self.points
        total = 0.0
        for i, (x0, y0) in enumerate(pts):
            x1, y1 = pts[(i + 1) % len(pts)]
            total += x0 * y1 - x1 * y0
        return total / 2

    def bounds(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax)"""
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return min(xs), min(ys), max(xs), max(ys)

    def rotate(self, degrees: float) -> "CrossSection":
        """Rotate counter-clockwise about the origin."""
        a = math.radians(degrees)
        c, s = math.cos(a), math.sin(a)
        return CrossSection((x * c - y * s, x * s + y * c) for x, y in self.points)

    def mirror_x(self) -> "CrossSection":
        """Mirror across the Y axis (x -> -x), keeping CCW winding."""
        return CrossSection((-x, y) for x, y in reversed(self.points))

    def translate(self, dx: float, dy: float) -> "CrossSection":
        return CrossSection((x + dx, y + dy) for x, y in self.points)


def generate_arc(
    center: Point2D, radius: float, segments: int = config.ARC_SEGMENTS
) -> list[Point2D]:
    """CCW quarter arc from 0 to 90 deg, ``segments + 2`` points."""
    n_points = segments + 2
    cx, cy = center
    pts = []
    for i in range(n_points):
        angle = i * (math.pi / 2) / (n_points - 1)
        pts.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return pts


def rounded_rectangle(width: float, height: float, corner_radius: float) -> CrossSection:
    """Rounded rectangle centred at the origin.

    One arc is built for the top-right corner and mirrored into the other
    three. ``corner_radius`` is not clamped; above ``min(width, height) / 2``
    the outline self-intersects.
    """
    arc = generate_arc((width / 2 - corner_radius, height / 2 - corner_radius), corner_radius)

    top_right = arc
    top_left = [(-x, y) for x, y in reversed(arc)]
    bottom_left = [(-x, -y) for x, y in arc]
    bottom_right = [(x, -y) for x, y in reversed(arc)]

    return CrossSection(top_right + top_left + bottom_left + bottom_right)


def rectangle(width: float, height: float, center: Point2D = (0.0, 0.0)) -> CrossSection:
    """CCW rectangle centred on *center*."""
    cx, cy = center
    hw, hh = width / 2, height / 2
    return CrossSection([
        (cx - hw, cy - hh),
        (cx + hw, cy - hh),
        (cx + hw, cy + hh),
        (cx - hw, cy + hh),
    ])


def clip_profile() -> CrossSection:
    """Cross section of the right-hand pegboard clip."""
    return CrossSection(CLIP_OUTLINE).rotate(180)


def hole_profile(
    long: float = config.HOLE_LONG,
    short: float = config.HOLE_SHORT,
    tilt: float = config.HOLE_TILT,
) -> CrossSection:
    """Vent slot: a ``long x short`` rectangle tilted in-plane by *tilt* deg."""
    return rectangle(long, short).rotate(tilt)


def hole_span(long: float, short: float, tilt: float = config.HOLE_TILT) -> float:
    """Axis-aligned extent of the tilted slot along either in-plane axis.

    Equals ``(long + short) / sqrt(2)`` at 45 deg; for other tilts the
    larger of the two extents is used so the slot fits both ways.
    """
    a = math.radians(tilt)
    c, s = abs(math.cos(a)), abs(math.sin(a))
    return max(long * c + short * s, long * s + short * c)
