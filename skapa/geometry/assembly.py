"""Box assembly — hollow shell, vent holes, pegboard clips.

Two failure policies live here and show up in the returned ``BuildOutcome``:

- vent holes are optional: if anything goes wrong while building or cutting
  them, the shell is returned without vents (status DEGRADED);
- clips are the only way to mount the box: a failure while adding them (or
  while building the shell itself) fails the whole pass (status FAILED, no
  solid).
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

from .. import config
from ..errors import GenerationError
from .kernel import Kernel, Solid
from .sections import CLIP_OUTLINE, clip_profile, rounded_rectangle
from .types import BoxParameters, BuildOutcome, BuildStatus
from .vents import make_vent_holes

log = logging.getLogger(__name__)

# half the x-extent of a mirrored clip pair
CLIP_REACH = max(abs(x) for x, _ in CLIP_OUTLINE)


def make_shell(kernel: Kernel, params: BoxParameters) -> Solid:
    """Rounded box, open at the top, floor ``bottom_thickness`` thick.

    Origin at the centre of the bottom face.
    """
    outer = kernel.extrude(
        rounded_rectangle(params.width, params.depth, params.corner_radius),
        params.height,
    )
    cavity = kernel.extrude(
        rounded_rectangle(params.inner_width, params.inner_depth, params.inner_radius),
        params.height - params.bottom_thickness + config.TOP_OVERSHOOT,
    )
    cavity = kernel.translate(cavity, (0.0, 0.0, params.bottom_thickness))
    return kernel.subtract(outer, cavity)


def assemble_base(kernel: Kernel, params: BoxParameters) -> BuildOutcome:
    """Shell minus vent holes; falls back to the plain shell if vents fail."""
    shell = make_shell(kernel, params)
    try:
        holes, plan = make_vent_holes(kernel, params)
        solid = kernel.subtract(shell, holes)
    except Exception as e:
        log.warning("Vent holes failed, continuing without them: %s", e, exc_info=True)
        return BuildOutcome(status=BuildStatus.DEGRADED, solid=shell, error=e)

    log.info("Vent holes subtracted: %s", plan.summary())
    return BuildOutcome(status=BuildStatus.COMPLETE, solid=solid, vents=plan)


def base(kernel: Kernel, params: BoxParameters) -> Solid:
    """The box without clips."""
    return assemble_base(kernel, params).solid


# === CLIPS ===


@dataclass(frozen=True)
class ClipPlacement:
    x_offset: float
    level: int
    chamfered: bool
    z: float


def plan_clips(
    params: BoxParameters,
    padding: float = config.CLIP_PADDING,
    pitch: float = config.CLIP_PITCH,
    clip_height: float = config.CLIP_HEIGHT,
) -> tuple[ClipPlacement, ...]:
    """Grid of clip pairs on the back face, centred in X, from the floor up.

    The lowest level stays unchamfered for the strongest grip; every level
    above it is chamfered to print without supports.

    Returns no placements when the back face has no flat strip wide enough
    for a clip pair: clips there would float beside the curved corners.
    """
    flat_width = params.width - 2 * params.corner_radius
    usable_width = flat_width - 2 * padding
    columns = max(0, math.floor(usable_width / pitch) + 1)
    if columns == 0 and flat_width >= 2 * CLIP_REACH:
        # one centred pair still lands on the flat part of the back face
        columns = 1
    dx = -(columns - 1) / 2 * pitch

    usable_height = params.height - clip_height
    levels = max(1, math.floor(usable_height / pitch) + 1)

    return tuple(
        ClipPlacement(x_offset=dx + i * pitch, level=j, chamfered=j > 0, z=j * pitch)
        for i in range(columns)
        for j in range(levels)
    )


def make_clips(kernel: Kernel, chamfer: bool = False) -> tuple[Solid, Solid]:
    """Right and left clip, hooking from the origin towards -Y."""
    profile = clip_profile()
    right = kernel.extrude(profile, config.CLIP_HEIGHT)
    left = kernel.extrude(profile.mirror_x(), config.CLIP_HEIGHT)
    if not chamfer:
        return right, left
    return (
        kernel.trim_by_plane(right, config.CHAMFER_NORMAL, 0.0),
        kernel.trim_by_plane(left, config.CHAMFER_NORMAL, 0.0),
    )


def add_clips(kernel: Kernel, body: Solid, placements) -> Solid:
    """Union every clip pair onto *body* (back face on y=0)."""
    pairs = {}
    parts = [body]
    for p in placements:
        if p.chamfered not in pairs:
            pairs[p.chamfered] = make_clips(kernel, p.chamfered)
        for clip in pairs[p.chamfered]:
            parts.append(kernel.translate(clip, (p.x_offset, 0.0, p.z)))
    return kernel.union_all(parts)


def build_box(kernel: Kernel, params: BoxParameters) -> BuildOutcome:
    """Full box with clips, origin on the seam between box and clips."""
    start = time.monotonic()
    try:
        outcome = assemble_base(kernel, params)
    except Exception as e:
        log.error("Shell construction failed: %s", e)
        return BuildOutcome.failed(e)

    placements = plan_clips(params)
    try:
        body = kernel.translate(outcome.solid, (0.0, params.depth / 2, 0.0))
        solid = add_clips(kernel, body, placements)
    except Exception as e:
        log.error("Adding %d clip pairs failed: %s", len(placements), e)
        return BuildOutcome.failed(e, vents=outcome.vents)

    log.info(
        "Box %gx%gx%g built in %.2fs (%s, %d clip pairs)",
        params.width, params.depth, params.height,
        time.monotonic() - start, outcome.status.value, len(placements),
    )
    return BuildOutcome(
        status=outcome.status,
        solid=solid,
        vents=outcome.vents,
        clips=placements,
        error=outcome.error,
    )


def make_box(kernel: Kernel, params: BoxParameters) -> Solid:
    """Like ``build_box`` but returns the solid, raising on failure."""
    outcome = build_box(kernel, params)
    if outcome.status is BuildStatus.FAILED:
        raise GenerationError(f"Box generation failed: {outcome.error}") from outcome.error
    return outcome.solid
