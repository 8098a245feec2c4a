"""Generation passes — parameters in, measured and exported model out.

Each pass is independent: nothing is shared between passes except the
kernel, so a caller may start a new pass while an older one is still running
and drop whichever result is stale.
"""
from __future__ import annotations

import asyncio
import base64
import logging
from typing import Optional

from ..errors import KernelError
from ..geometry.assembly import build_box, make_box
from ..geometry.kernel import Kernel, Solid, get_kernel
from ..geometry.types import BoxParameters, BuildStatus
from .export import export_stl, measure, mesh_report, volume_ratio

log = logging.getLogger(__name__)


async def generate(
    height: float,
    width: float,
    depth: float,
    corner_radius: float,
    wall_thickness: float,
    bottom_thickness: float,
    vent_hole_width: Optional[float] = None,
    vent_hole_height: Optional[float] = None,
) -> Solid:
    """Build the box with clips and vents. Raises ``GenerationError``."""
    params = BoxParameters(
        height=height,
        width=width,
        depth=depth,
        corner_radius=corner_radius,
        wall_thickness=wall_thickness,
        bottom_thickness=bottom_thickness,
        vent_hole_width=vent_hole_width,
        vent_hole_height=vent_hole_height,
    )
    kernel = await get_kernel()
    return await asyncio.to_thread(make_box, kernel, params)


def _failure(error: str) -> dict:
    return {
        "success": False,
        "status": BuildStatus.FAILED.value,
        "filename": None,
        "metrics": None,
        "mesh": None,
        "stl_base64": None,
        "error": error[:500],
        "hole_count": 0,
        "clip_count": 0,
    }


def run_generation(params: BoxParameters, kernel: Kernel, export: bool = True) -> dict:
    """Run one pass and return a result dict.

    Returns dict with keys: success, status, filename, metrics, mesh,
    stl_base64, error, hole_count, clip_count
    """
    outcome = build_box(kernel, params)
    if outcome.status is BuildStatus.FAILED:
        log.error("Generation failed for %s: %s", params, outcome.error)
        return _failure(f"{type(outcome.error).__name__}: {outcome.error}")

    metrics = measure(kernel, outcome.solid)
    mesh = None
    stl_b64 = None
    if export:
        try:
            stl = export_stl(kernel, outcome.solid)
            mesh = mesh_report(stl)
        except Exception as e:
            log.error("STL export or mesh check failed: %s", e)
            return _failure(f"STL export failed: {e}")
        mesh["volume_ratio"] = volume_ratio(mesh["volume"], metrics["volume"])
        stl_b64 = base64.b64encode(stl).decode()

    return {
        "success": True,
        "status": outcome.status.value,
        "filename": params.filename("stl"),
        "metrics": metrics,
        "mesh": mesh,
        "stl_base64": stl_b64,
        "error": str(outcome.error)[:500] if outcome.error is not None else None,
        "hole_count": outcome.vents.hole_count if outcome.vents is not None else 0,
        "clip_count": len(outcome.clips),
    }


async def generate_model(params: BoxParameters, export: bool = True) -> dict:
    """``run_generation`` with the shared kernel, off the event loop."""
    try:
        kernel = await get_kernel()
    except KernelError as e:
        return _failure(str(e))
    return await asyncio.to_thread(run_generation, params, kernel, export)
