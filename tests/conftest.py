"""Shared fixtures: a bounding-box-tracking fake kernel and the real one."""
from __future__ import annotations

import math
from dataclasses import dataclass

import pytest

from skapa.geometry import kernel as kernel_mod


@dataclass(frozen=True)
class FakeSolid:
    bbox: tuple[float, float, float, float, float, float]
    volume: float
    count: int = 1


def _rotate_point(p, angles):
    x, y, z = p
    rx, ry, rz = (math.radians(a) for a in angles)
    # about X
    y, z = y * math.cos(rx) - z * math.sin(rx), y * math.sin(rx) + z * math.cos(rx)
    # about Y
    x, z = x * math.cos(ry) + z * math.sin(ry), -x * math.sin(ry) + z * math.cos(ry)
    # about Z
    x, y = x * math.cos(rz) - y * math.sin(rz), x * math.sin(rz) + y * math.cos(rz)
    return x, y, z


def _merge(boxes):
    return (
        min(b[0] for b in boxes), min(b[1] for b in boxes), min(b[2] for b in boxes),
        max(b[3] for b in boxes), max(b[4] for b in boxes), max(b[5] for b in boxes),
    )


class FakeKernel:
    """Kernel stand-in tracking axis-aligned bounding boxes.

    Every call is appended to ``ops`` as ``(name, detail)``. Set
    ``fail_on`` to an operation name to make that operation raise.
    """

    name = "fake"

    def __init__(self, fail_on: str | None = None):
        self.ops: list[tuple[str, object]] = []
        self.fail_on = fail_on

    def _record(self, name, detail=None):
        self.ops.append((name, detail))
        if name == self.fail_on:
            raise RuntimeError(f"{name} failed")

    def count(self, name: str) -> int:
        return sum(1 for op, _ in self.ops if op == name)

    def translations(self) -> list[tuple[float, float, float]]:
        return [detail for op, detail in self.ops if op == "translate"]

    def extrude(self, section, height):
        self._record("extrude", (len(section), height))
        xmin, ymin, xmax, ymax = section.bounds()
        return FakeSolid((xmin, ymin, 0.0, xmax, ymax, height), abs(section.signed_area()) * height)

    def translate(self, solid, offset):
        self._record("translate", tuple(offset))
        dx, dy, dz = offset
        b = solid.bbox
        return FakeSolid((b[0] + dx, b[1] + dy, b[2] + dz, b[3] + dx, b[4] + dy, b[5] + dz),
                         solid.volume, solid.count)

    def rotate(self, solid, angles):
        self._record("rotate", tuple(angles))
        b = solid.bbox
        corners = [_rotate_point((x, y, z), angles)
                   for x in (b[0], b[3]) for y in (b[1], b[4]) for z in (b[2], b[5])]
        bbox = (
            min(c[0] for c in corners), min(c[1] for c in corners), min(c[2] for c in corners),
            max(c[0] for c in corners), max(c[1] for c in corners), max(c[2] for c in corners),
        )
        return FakeSolid(bbox, solid.volume, solid.count)

    def union_all(self, solids):
        self._record("union_all", len(solids))
        return FakeSolid(_merge([s.bbox for s in solids]),
                         sum(s.volume for s in solids), sum(s.count for s in solids))

    def subtract(self, a, b):
        self._record("subtract")
        return FakeSolid(a.bbox, a.volume, a.count)

    def trim_by_plane(self, solid, normal, offset):
        self._record("trim_by_plane", (tuple(normal), offset))
        return solid

    def bounding_box(self, solid):
        return solid.bbox

    def volume(self, solid):
        return solid.volume

    def solid_count(self, solid):
        return solid.count


@pytest.fixture
def fake_kernel():
    return FakeKernel()


@pytest.fixture(scope="session")
def cq_kernel():
    cq = pytest.importorskip("cadquery")
    return kernel_mod.CadQueryKernel(cq)


@pytest.fixture(autouse=True)
def _fresh_kernel_singleton():
    kernel_mod.reset_kernel()
    yield
    kernel_mod.reset_kernel()
