"""Solid hand-off — measurements, STEP/STL export and mesh checks.

Trimesh is used on the exported STL to confirm what the slicer will see:
a watertight mesh made of a single connected body.
"""
from __future__ import annotations

import io
import logging
import tempfile
from pathlib import Path

import numpy as np
import trimesh

log = logging.getLogger(__name__)


def measure(kernel, solid) -> dict:
    """Bounding box, size, volume and solid count of a kernel solid."""
    xmin, ymin, zmin, xmax, ymax, zmax = kernel.bounding_box(solid)
    return {
        "bounding_box": {
            "min": [round(xmin, 3), round(ymin, 3), round(zmin, 3)],
            "max": [round(xmax, 3), round(ymax, 3), round(zmax, 3)],
        },
        "size": [round(xmax - xmin, 3), round(ymax - ymin, 3), round(zmax - zmin, 3)],
        "volume": round(kernel.volume(solid), 2),
        "solid_count": kernel.solid_count(solid),
    }


def _export(kernel, solid, suffix: str) -> bytes:
    with tempfile.TemporaryDirectory(prefix="skapa_") as tmpdir:
        path = Path(tmpdir) / f"output{suffix}"
        kernel.cq.exporters.export(solid, str(path))
        if not path.exists():
            raise RuntimeError(f"{suffix} file not produced")
        return path.read_bytes()


def export_stl(kernel, solid) -> bytes:
    return _export(kernel, solid, ".stl")


def export_step(kernel, solid) -> bytes:
    return _export(kernel, solid, ".step")


def mesh_report(stl: bytes) -> dict:
    """Watertightness, connected bodies and volume of an STL mesh."""
    mesh = trimesh.load(io.BytesIO(stl), file_type="stl", force="mesh")
    if not isinstance(mesh, trimesh.Trimesh):
        raise ValueError(f"Expected single mesh, got {type(mesh).__name__}")

    dims = (mesh.bounds[1] - mesh.bounds[0]).tolist()
    watertight = bool(mesh.is_watertight)
    report = {
        "watertight": watertight,
        "body_count": int(mesh.body_count),
        "volume": round(abs(float(mesh.volume)), 2) if watertight else None,
        "size": [round(float(d), 3) for d in dims],
        "triangles": int(len(mesh.faces)),
    }
    if not watertight:
        log.warning("Exported mesh is not watertight (%d triangles)", report["triangles"])
    return report


def volume_ratio(mesh_volume: float | None, solid_volume: float) -> float | None:
    """Tessellated over exact volume; ~1.0 for a faithful mesh."""
    if mesh_volume is None or solid_volume < 1e-12:
        return None
    return float(np.round(mesh_volume / solid_volume, 4))
