"""Value types shared by the geometry pipeline."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from .. import config

Point2D = tuple[float, float]


@dataclass(frozen=True)
class BoxParameters:
    """Outer dimensions of the enclosure, all in mm.

    Fixed for the duration of one generation pass. The invariants listed in
    ``violations()`` are not enforced here: a degenerate box fails later, in
    the kernel.
    """

    height: float = config.DEFAULT_HEIGHT
    width: float = config.DEFAULT_WIDTH
    depth: float = config.DEFAULT_DEPTH
    corner_radius: float = config.DEFAULT_RADIUS
    wall_thickness: float = config.DEFAULT_WALL
    bottom_thickness: float = config.DEFAULT_BOTTOM
    vent_hole_width: Optional[float] = None
    vent_hole_height: Optional[float] = None

    @property
    def inner_width(self) -> float:
        return self.width - 2 * self.wall_thickness

    @property
    def inner_depth(self) -> float:
        return self.depth - 2 * self.wall_thickness

    @property
    def inner_radius(self) -> float:
        return max(0.0, self.corner_radius - self.wall_thickness)

    @property
    def hole_long(self) -> float:
        return self.vent_hole_width if self.vent_hole_width is not None else config.HOLE_LONG

    @property
    def hole_short(self) -> float:
        return self.vent_hole_height if self.vent_hole_height is not None else config.HOLE_SHORT

    def violations(self) -> list[str]:
        """Return a description of every violated box invariant."""
        problems = []
        for name in ("height", "width", "depth", "wall_thickness", "bottom_thickness"):
            if getattr(self, name) <= 0:
                problems.append(f"{name} must be positive")
        if self.corner_radius < 0:
            problems.append("corner_radius must be >= 0")
        if self.wall_thickness >= min(self.width, self.depth) / 2:
            problems.append("wall_thickness must be < min(width, depth) / 2")
        if self.bottom_thickness >= self.height:
            problems.append("bottom_thickness must be < height")
        if self.corner_radius > min(self.width, self.depth) / 2:
            problems.append("corner_radius must be <= min(width, depth) / 2")
        for name in ("vent_hole_width", "vent_hole_height"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                problems.append(f"{name} must be positive")
        return problems

    def filename(self, ext: str) -> str:
        return f"skapa-{self.width:g}-{self.depth:g}-{self.height:g}.{ext}"


class BuildStatus(str, enum.Enum):
    COMPLETE = "complete"   # every feature present
    DEGRADED = "degraded"   # printable, vent holes dropped
    FAILED = "failed"       # no model


@dataclass(frozen=True)
class BuildOutcome:
    """Result of an assembly step.

    ``solid`` is None only when ``status`` is FAILED. ``error`` holds the
    exception behind a DEGRADED or FAILED outcome.
    """

    status: BuildStatus
    solid: Any = None
    vents: Any = None
    clips: tuple = ()
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is not BuildStatus.FAILED

    @classmethod
    def failed(cls, error: BaseException, vents: Any = None) -> "BuildOutcome":
        return cls(status=BuildStatus.FAILED, vents=vents, error=error)
