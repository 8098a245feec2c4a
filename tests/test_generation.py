import asyncio

import pytest

from skapa.errors import GenerationError
from skapa.geometry.types import BoxParameters
from skapa.services import generation

from .conftest import FakeKernel


def test_run_generation_reports_metrics(fake_kernel):
    result = generation.run_generation(BoxParameters(), fake_kernel, export=False)
    assert result["success"] is True
    assert result["status"] == "complete"
    assert result["filename"] == "skapa-80-60-52.stl"
    assert result["hole_count"] == 52
    assert result["clip_count"] == 4
    assert result["metrics"]["size"] == pytest.approx([80, 66.5, 52])
    assert result["metrics"]["solid_count"] >= 1
    assert result["stl_base64"] is None


def test_run_generation_failure_dict():
    result = generation.run_generation(BoxParameters(), FakeKernel(fail_on="trim_by_plane"), export=False)
    assert result["success"] is False
    assert result["status"] == "failed"
    assert result["error"].startswith("RuntimeError")
    assert result["metrics"] is None


def test_generate_uses_shared_kernel(monkeypatch):
    kernel = FakeKernel()

    async def fake_get_kernel():
        return kernel

    monkeypatch.setattr(generation, "get_kernel", fake_get_kernel)
    solid = asyncio.run(generation.generate(52, 80, 60, 6, 2, 3))
    assert solid.bbox == pytest.approx((-40, -6.5, 0, 40, 60, 52))


def test_generate_raises_when_clips_fail(monkeypatch):
    async def fake_get_kernel():
        return FakeKernel(fail_on="trim_by_plane")

    monkeypatch.setattr(generation, "get_kernel", fake_get_kernel)
    with pytest.raises(GenerationError):
        asyncio.run(generation.generate(52, 80, 60, 6, 2, 3))


def test_concurrent_passes_are_independent(monkeypatch):
    async def fake_get_kernel():
        return FakeKernel()

    monkeypatch.setattr(generation, "get_kernel", fake_get_kernel)

    async def main():
        return await asyncio.gather(
            generation.generate(52, 80, 60, 6, 2, 3),
            generation.generate(100, 120, 40, 3, 2, 3, vent_hole_width=5),
            generation.generate(52, 80, 60, 6, 2, 3),
        )

    a, b, c = asyncio.run(main())
    assert a == c
    assert b.bbox == pytest.approx((-60, -6.5, 0, 60, 40, 100))


def test_mesh_check_failure_is_reported(fake_kernel, monkeypatch):
    def broken_report(stl):
        raise ValueError("not a mesh")

    monkeypatch.setattr(generation, "export_stl", lambda kernel, solid: b"solid")
    monkeypatch.setattr(generation, "mesh_report", broken_report)
    result = generation.run_generation(BoxParameters(), fake_kernel)
    assert result["success"] is False
    assert result["status"] == "failed"
    assert "not a mesh" in result["error"]
