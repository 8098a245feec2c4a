"""Generate endpoint — box parameters to a measured STL model."""
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from .. import config
from ..geometry.types import BoxParameters
from ..services.generation import generate_model

router = APIRouter()
log = logging.getLogger(__name__)


class GenerateRequest(BaseModel):
    height: float = Field(default=config.DEFAULT_HEIGHT, ge=config.MIN_SIZE, le=config.MAX_SIZE)
    width: float = Field(default=config.DEFAULT_WIDTH, ge=config.MIN_SIZE, le=config.MAX_SIZE)
    depth: float = Field(default=config.DEFAULT_DEPTH, ge=config.MIN_SIZE, le=config.MAX_SIZE)
    corner_radius: float = Field(default=config.DEFAULT_RADIUS, ge=0)
    wall_thickness: float = Field(default=config.DEFAULT_WALL, ge=0.4, le=10)
    bottom_thickness: float = Field(default=config.DEFAULT_BOTTOM, ge=0.4, le=20)
    vent_hole_width: float | None = Field(default=None, ge=2, le=12)
    vent_hole_height: float | None = Field(default=None, ge=2, le=12)
    include_stl: bool = True

    def to_params(self) -> BoxParameters:
        return BoxParameters(**self.model_dump(exclude={"include_stl"}))


class GenerateResponse(BaseModel):
    success: bool
    status: str
    filename: str | None = None
    metrics: dict | None = None
    mesh: dict | None = None
    stl_base64: str | None = None
    error: str | None = None
    hole_count: int = 0
    clip_count: int = 0


@router.post("/api/generate", response_model=GenerateResponse)
async def generate(req: GenerateRequest):
    params = req.to_params()
    problems = params.violations()
    if problems:
        raise HTTPException(status_code=422, detail=problems)

    log.info("Generating %s", params.filename("stl"))
    result = await generate_model(params, export=req.include_stl)
    if not result["success"]:
        log.info("Generation failed: %s", result["error"])
    return GenerateResponse(**result)
