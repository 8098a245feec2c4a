"""Vent hole solids — turn a ``VentPlan`` into one solid to subtract."""
from __future__ import annotations

import logging
from typing import Optional

from .. import config
from .kernel import Kernel, Solid
from .layout import PERFORATED_FACES, BottomCutout, HoleLayoutPlan, VentPlan, plan_vents
from .sections import hole_profile, rectangle, rounded_rectangle
from .types import BoxParameters

log = logging.getLogger(__name__)

# Turns a +Z prism so it points into the box through the given face.
FACE_ROTATIONS = {
    "left": (0.0, 90.0, 0.0),
    "right": (0.0, -90.0, 0.0),
    "front": (90.0, 0.0, 0.0),
}


def face_origin(face: str, params: BoxParameters, u: float, z: float) -> tuple[float, float, float]:
    """Where a rotated hole prism starts, just outside *face*."""
    if face == "left":
        return (-params.width / 2 - config.FACE_OFFSET, u, z)
    if face == "right":
        return (params.width / 2 + config.FACE_OFFSET, u, z)
    if face == "front":
        return (u, params.depth / 2 + config.FACE_OFFSET, z)
    raise ValueError(f"Face not perforated: {face!r}")


def make_face_holes(kernel: Kernel, plan: HoleLayoutPlan, params: BoxParameters) -> Optional[Solid]:
    """Union of all holes on one side face, or None when the face has none."""
    if not plan.positions:
        return None
    long, short = plan.footprint
    prism = kernel.extrude(hole_profile(long, short), params.wall_thickness + config.WALL_OVERSHOOT)
    prism = kernel.rotate(prism, FACE_ROTATIONS[plan.face])
    holes = [kernel.translate(prism, face_origin(plan.face, params, u, z)) for u, z in plan.positions]
    return kernel.union_all(holes)


def make_bottom_cutout(kernel: Kernel, cutout: BottomCutout, params: BoxParameters) -> Solid:
    """Rounded floor opening with the ribs left standing."""
    over = config.BOTTOM_OVERSHOOT
    opening = kernel.extrude(
        rounded_rectangle(cutout.width, cutout.depth, cutout.corner_radius),
        params.bottom_thickness + 2 * over,
    )
    opening = kernel.translate(opening, (0.0, 0.0, -over))
    if not cutout.rib_positions:
        return opening

    # Ribs overshoot the opening on every side
    ribs = [
        kernel.translate(
            kernel.extrude(
                rectangle(cutout.rib_width, cutout.depth + 2 * over, center=(x, 0.0)),
                params.bottom_thickness + 4 * over,
            ),
            (0.0, 0.0, -2 * over),
        )
        for x in cutout.rib_positions
    ]
    return kernel.subtract(opening, kernel.union_all(ribs))


def make_placeholder(kernel: Kernel) -> Solid:
    """Tiny prism far below the model: subtracting it changes nothing."""
    return kernel.translate(kernel.extrude(rectangle(1.0, 1.0), 1.0), (0.0, 0.0, config.PLACEHOLDER_Z))


def make_vent_holes(
    kernel: Kernel, params: BoxParameters, plan: Optional[VentPlan] = None
) -> tuple[Solid, VentPlan]:
    """Every hole to cut from the shell, fused into one solid.

    Returns the solid and the plan it was built from.
    """
    if plan is None:
        plan = plan_vents(params)

    parts = []
    for face in PERFORATED_FACES:
        face_plan = plan.faces.get(face)
        if face_plan is None:
            continue
        holes = make_face_holes(kernel, face_plan, params)
        if holes is None:
            log.info("No vent holes fit on the %s face", face)
            continue
        parts.append(holes)

    if plan.bottom is not None:
        parts.append(make_bottom_cutout(kernel, plan.bottom, params))

    if not parts:
        return make_placeholder(kernel), plan
    return kernel.union_all(parts), plan
