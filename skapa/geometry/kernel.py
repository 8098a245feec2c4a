"""CSG kernel — the narrow capability set the pipeline builds on.

The layout and assembly code only talk to a ``Kernel``: extrude a cross
section, move/rotate solids, union, subtract and trim by a plane. The
production implementation wraps CadQuery (OpenCascade). Loading CadQuery is
slow, so the process-wide instance is created once, on first use, by
``get_kernel()``.
"""
from __future__ import annotations

import asyncio
import importlib
import logging
import time
from typing import Any, Optional, Protocol, Sequence

from .. import config
from ..errors import KernelError
from .sections import CrossSection

log = logging.getLogger(__name__)

Solid = Any
Vec3 = tuple[float, float, float]


class Kernel(Protocol):
    name: str

    def extrude(self, section: CrossSection, height: float) -> Solid: ...

    def translate(self, solid: Solid, offset: Vec3) -> Solid: ...

    def rotate(self, solid: Solid, angles: Vec3) -> Solid: ...

    def union_all(self, solids: Sequence[Solid]) -> Solid: ...

    def subtract(self, a: Solid, b: Solid) -> Solid: ...

    def trim_by_plane(self, solid: Solid, normal: Vec3, offset: float) -> Solid: ...

    def bounding_box(self, solid: Solid) -> tuple[float, ...]: ...

    def volume(self, solid: Solid) -> float: ...

    def solid_count(self, solid: Solid) -> int: ...


class CadQueryKernel:
    """``Kernel`` on top of ``cadquery.Workplane`` objects."""

    name = "cadquery"

    def __init__(self, cq_module=None):
        if cq_module is None:
            cq_module = importlib.import_module("cadquery")
        self.cq = cq_module

    def extrude(self, section: CrossSection, height: float) -> Solid:
        """Extrude along +Z from z=0."""
        if len(section) < 3:
            raise ValueError(f"Cross section needs 3+ points, got {len(section)}")
        return self.cq.Workplane("XY").polyline(list(section.points)).close().extrude(height)

    def translate(self, solid: Solid, offset: Vec3) -> Solid:
        return solid.translate(tuple(offset))

    def rotate(self, solid: Solid, angles: Vec3) -> Solid:
        """Euler rotation in degrees: about X, then Y, then Z."""
        for axis, angle in zip(((1, 0, 0), (0, 1, 0), (0, 0, 1)), angles):
            if angle:
                solid = solid.rotate((0, 0, 0), axis, angle)
        return solid

    def union_all(self, solids: Sequence[Solid]) -> Solid:
        """Fuse many solids in one boolean operation."""
        if not solids:
            raise ValueError("union_all needs at least one solid")
        first, *rest = solids
        if not rest:
            return first
        fused = first.val().fuse(*[s.val() for s in rest]).clean()
        return self.cq.Workplane("XY").add(fused)

    def subtract(self, a: Solid, b: Solid) -> Solid:
        return a.cut(b)

    def trim_by_plane(self, solid: Solid, normal: Vec3, offset: float) -> Solid:
        """Keep the part of *solid* on the side *normal* points to."""
        n = self.cq.Vector(*normal).normalized()
        plane = self.cq.Plane(origin=n.multiply(offset), normal=n)
        extent = config.TRIM_EXTENT
        half_space = self.cq.Workplane(plane).rect(extent, extent).extrude(extent)
        return solid.intersect(half_space)

    def bounding_box(self, solid: Solid) -> tuple[float, ...]:
        """(xmin, ymin, zmin, xmax, ymax, zmax)"""
        bb = solid.val().BoundingBox()
        return (bb.xmin, bb.ymin, bb.zmin, bb.xmax, bb.ymax, bb.zmax)

    def volume(self, solid: Solid) -> float:
        return solid.val().Volume()

    def solid_count(self, solid: Solid) -> int:
        return len(solid.val().Solids())


# === PROCESS-WIDE INSTANCE ===

_kernel: Optional[Kernel] = None
_kernel_task: Optional[asyncio.Future] = None


def _load_cadquery():
    return importlib.import_module("cadquery")


async def _initialize() -> Kernel:
    global _kernel, _kernel_task
    start = time.monotonic()
    try:
        cq = await asyncio.to_thread(_load_cadquery)
        kernel = CadQueryKernel(cq)
    except Exception as e:
        _kernel_task = None
        log.error("CSG kernel initialization failed: %s", e)
        raise KernelError(f"CadQuery unavailable: {e}") from e
    _kernel = kernel
    log.info("CSG kernel '%s' ready in %.2fs", kernel.name, time.monotonic() - start)
    return kernel


async def get_kernel() -> Kernel:
    """Return the shared kernel, initializing it on first use.

    Concurrent first callers all await the same initialization task. A
    failed initialization is not cached: the next call tries again.
    """
    global _kernel_task
    if _kernel is not None:
        return _kernel
    if _kernel_task is None:
        _kernel_task = asyncio.ensure_future(_initialize())
    return await asyncio.shield(_kernel_task)


def kernel_ready() -> bool:
    return _kernel is not None


def reset_kernel() -> None:
    """Forget the shared kernel (tests only)."""
    global _kernel, _kernel_task
    _kernel = None
    _kernel_task = None
