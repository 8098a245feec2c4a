"""Parametric enclosure geometry: cross sections, layout, assembly."""
from .assembly import (
    ClipPlacement,
    assemble_base,
    base,
    build_box,
    make_box,
    make_clips,
    make_shell,
    plan_clips,
)
from .kernel import CadQueryKernel, Kernel, get_kernel
from .layout import AxisLayout, HoleLayoutPlan, VentPlan, plan_vents, solve_axis
from .sections import CrossSection, clip_profile, generate_arc, hole_profile, rounded_rectangle
from .types import BoxParameters, BuildOutcome, BuildStatus
from .vents import make_vent_holes
