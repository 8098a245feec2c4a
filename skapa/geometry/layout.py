"""Vent hole layout — how many holes fit on each face, and where.

Pure arithmetic, no kernel calls. ``solve_axis`` handles one linear span;
``plan_vents`` crosses the per-axis results into a grid for every perforated
face and sizes the bottom cutout.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from .. import config
from .sections import hole_span
from .types import BoxParameters, Point2D

log = logging.getLogger(__name__)

# The back face carries the clips and any connectors: never perforated.
PERFORATED_FACES = ("left", "right", "front")


@dataclass(frozen=True)
class AxisLayout:
    positions: tuple[float, ...] = ()
    gap: float = 0.0

    @property
    def count(self) -> int:
        return len(self.positions)


def _fit_count(usable: float, footprint: float, gap: float) -> int:
    return max(1, math.floor((usable + gap) / (footprint + gap)))


def solve_axis(
    span: float,
    footprint: float,
    edge_clearance: float,
    min_gap: float,
    max_count: Optional[int] = None,
    gap_step: float = config.GAP_STEP,
    max_gap: float = config.MAX_GAP,
) -> AxisLayout:
    """Evenly distribute same-size holes over a span centred at 0.

    Holes keep at least *edge_clearance* from both ends and at least
    *min_gap* between each other. With *max_count*, the gap grows in
    *gap_step* increments until the count drops to the cap or the gap passes
    *max_gap*; the returned count never exceeds the cap. Leftover space is
    spread over the gaps so the holes cover the whole usable span.
    """
    usable = span - 2 * edge_clearance
    if usable < footprint or (max_count is not None and max_count < 1):
        return AxisLayout()

    count = _fit_count(usable, footprint, min_gap)
    gap = min_gap
    if max_count is not None and count > max_count:
        while count > max_count and gap <= max_gap:
            gap += gap_step
            count = _fit_count(usable, footprint, gap)
        count = min(count, max_count)

    if count > 1:
        used = count * footprint + (count - 1) * gap
        leftover = max(0.0, usable - used)
        final_gap = gap + leftover / (count - 1)
        start = -span / 2 + edge_clearance + footprint / 2
    else:
        final_gap = 0.0
        start = 0.0

    step = footprint + final_gap
    return AxisLayout(tuple(start + i * step for i in range(count)), final_gap)


@dataclass(frozen=True)
class HoleLayoutPlan:
    """Hole centres on one side face.

    ``positions`` are ``(u, z)`` pairs: *u* runs along the face (Y for
    left/right, X for front), *z* is measured up from the floor.
    """

    face: str
    footprint: tuple[float, float]
    positions: tuple[Point2D, ...] = ()

    @property
    def hole_count(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class BottomCutout:
    width: float
    depth: float
    corner_radius: float
    rib_width: float
    rib_positions: tuple[float, ...] = ()


@dataclass(frozen=True)
class VentPlan:
    faces: dict[str, HoleLayoutPlan] = field(default_factory=dict)
    bottom: Optional[BottomCutout] = None

    @property
    def hole_count(self) -> int:
        return sum(p.hole_count for p in self.faces.values())

    @property
    def is_empty(self) -> bool:
        return self.hole_count == 0 and self.bottom is None

    def summary(self) -> dict:
        counts = {name: plan.hole_count for name, plan in self.faces.items()}
        counts["bottom"] = 1 if self.bottom is not None else 0
        return counts


def _grid(us: AxisLayout, zs: AxisLayout, z_shift: float) -> tuple[Point2D, ...]:
    return tuple((u, z + z_shift) for u in us.positions for z in zs.positions)


def plan_bottom(
    params: BoxParameters,
    margin: float = config.BOTTOM_MARGIN,
    rib_width: float = config.RIB_WIDTH,
    rib_count: int = config.RIB_COUNT,
) -> Optional[BottomCutout]:
    """Single rounded cutout in the floor, split by stiffening ribs."""
    width = params.width - 2 * (params.wall_thickness + margin)
    depth = params.depth - 2 * (params.wall_thickness + margin)
    if width <= 0 or depth <= 0 or width <= rib_count * rib_width:
        return None

    radius = max(0.0, params.inner_radius - margin)
    radius = min(radius, width / 2, depth / 2)

    pitch = width / (rib_count + 1)
    ribs = tuple(-width / 2 + pitch * (k + 1) for k in range(rib_count))
    return BottomCutout(width, depth, radius, rib_width, ribs)


def plan_vents(params: BoxParameters, max_count: Optional[int] = config.MAX_AXIS_COUNT) -> VentPlan:
    """Lay out vent holes on the left, right and front faces plus the floor.

    Horizontal spans only count the flat part of each wall (between the
    rounded corners). A face too short for a single hole gets no holes.
    """
    long, short = params.hole_long, params.hole_short
    footprint = hole_span(long, short)
    r = params.corner_radius

    def axis(span: float) -> AxisLayout:
        return solve_axis(span, footprint, config.EDGE_CLEARANCE, config.MIN_GAP, max_count)

    along_width = axis(params.width - 2 * r)
    along_depth = axis(params.depth - 2 * r)
    along_height = axis(params.height)
    z_shift = params.height / 2

    faces = {
        "left": HoleLayoutPlan("left", (long, short), _grid(along_depth, along_height, z_shift)),
        "right": HoleLayoutPlan("right", (long, short), _grid(along_depth, along_height, z_shift)),
        "front": HoleLayoutPlan("front", (long, short), _grid(along_width, along_height, z_shift)),
    }
    plan = VentPlan(faces=faces, bottom=plan_bottom(params))
    log.debug("Vent plan: %s", plan.summary())
    return plan
