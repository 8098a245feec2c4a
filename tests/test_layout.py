import pytest

from skapa.geometry.layout import PERFORATED_FACES, plan_bottom, plan_vents, solve_axis
from skapa.geometry.sections import hole_span
from skapa.geometry.types import BoxParameters

SPAN = hole_span(7, 3)


@pytest.mark.parametrize(
    "span,footprint,clearance,gap",
    [
        (68, SPAN, 3, 4),
        (48, SPAN, 3, 4),
        (52, SPAN, 3, 4),
        (13.1, SPAN, 3, 4),
        (250, 5, 1, 2),
        (11, 5, 3, 4),
    ],
)
def test_positions_fit_span_and_keep_gap(span, footprint, clearance, gap):
    layout = solve_axis(span, footprint, clearance, gap)
    assert layout.count >= 1
    lo, hi = -span / 2 + clearance, span / 2 - clearance
    for p in layout.positions:
        assert lo - 1e-9 <= p - footprint / 2
        assert p + footprint / 2 <= hi + 1e-9
    for a, b in zip(layout.positions, layout.positions[1:]):
        assert b - a >= footprint + gap - 1e-9


def test_holes_spread_over_whole_usable_span():
    layout = solve_axis(68, SPAN, 3, 4)
    assert layout.count == 5
    assert layout.positions[0] - SPAN / 2 == pytest.approx(-31)
    assert layout.positions[-1] + SPAN / 2 == pytest.approx(31)
    assert layout.positions[2] == pytest.approx(0)
    assert layout.gap > 4


def test_no_holes_when_span_too_short():
    assert solve_axis(10, 5, 3, 4).positions == ()
    assert solve_axis(12.9, SPAN, 3, 4).count == 0


def test_single_hole_is_centered():
    layout = solve_axis(12, 5, 3, 4)
    assert layout.positions == (0.0,)
    assert layout.gap == 0.0


def test_cap_grows_gap_until_count_fits():
    layout = solve_axis(100, 5, 0, 1, max_count=5)
    assert layout.count == 5
    assert layout.gap == pytest.approx(18.75)
    assert layout.positions[0] == pytest.approx(-47.5)
    assert layout.positions[-1] == pytest.approx(47.5)


def test_zero_cap_gives_no_positions():
    assert solve_axis(100, 5, 0, 1, max_count=0) == solve_axis(1, 5, 0, 1)
    assert solve_axis(100, 5, 0, 1, max_count=0).count == 0


def test_cap_is_never_exceeded_when_gap_ceiling_hit():
    layout = solve_axis(200, 5, 0, 1, max_count=3)
    assert layout.count == 3
    assert layout.positions == pytest.approx((-97.5, 0.0, 97.5))


@pytest.mark.parametrize("cap", [1, 2, 4, 12])
def test_cap_property(cap):
    for span in (30, 80, 150, 256):
        assert solve_axis(span, SPAN, 3, 4, max_count=cap).count <= cap


def test_default_box_plan():
    plan = plan_vents(BoxParameters())
    assert plan.faces["front"].hole_count == 20
    assert plan.faces["left"].hole_count == 16
    assert plan.faces["right"].hole_count == 16
    assert plan.hole_count == 52
    zs = sorted({z for _, z in plan.faces["front"].positions})
    assert len(zs) == 4
    assert zs[0] - SPAN / 2 == pytest.approx(3)
    assert zs[-1] + SPAN / 2 == pytest.approx(49)


def test_back_face_never_perforated():
    assert "back" not in PERFORATED_FACES
    for params in (BoxParameters(), BoxParameters(width=256, depth=256, height=256),
                   BoxParameters(width=20, depth=20, height=20, corner_radius=0)):
        assert set(plan_vents(params).faces) == {"left", "right", "front"}


def test_narrow_box_drops_front_holes_only():
    plan = plan_vents(BoxParameters(width=20, corner_radius=6))
    assert plan.faces["front"].hole_count == 0
    assert plan.faces["left"].hole_count > 0
    assert plan.bottom is None


def test_shallow_box_drops_side_holes_only():
    plan = plan_vents(BoxParameters(depth=20, corner_radius=6))
    assert plan.faces["left"].hole_count == 0
    assert plan.faces["right"].hole_count == 0
    assert plan.faces["front"].hole_count > 0


def test_vent_hole_size_changes_footprint():
    small = plan_vents(BoxParameters(vent_hole_width=4, vent_hole_height=2))
    assert small.faces["front"].footprint == (4, 2)
    assert small.hole_count > plan_vents(BoxParameters()).hole_count


def test_bottom_cutout_with_central_rib():
    cutout = plan_bottom(BoxParameters())
    assert cutout.width == pytest.approx(66)
    assert cutout.depth == pytest.approx(46)
    assert cutout.corner_radius == 0
    assert cutout.rib_positions == (0.0,)


def test_bottom_cutout_radius_follows_inner_corner():
    cutout = plan_bottom(BoxParameters(corner_radius=12))
    assert cutout.corner_radius == pytest.approx(5)


def test_bottom_ribs_evenly_spaced():
    cutout = plan_bottom(BoxParameters(), rib_count=2)
    assert cutout.rib_positions == pytest.approx((-11, 11))


def test_plan_is_a_pure_function():
    params = BoxParameters(height=90, width=130, depth=75, corner_radius=9)
    assert plan_vents(params) == plan_vents(params)
