"""Health check endpoint."""
from fastapi import APIRouter

from ..geometry.kernel import kernel_ready

router = APIRouter()


@router.get("/api/health")
async def health():
    return {"status": "ok", "kernel": kernel_ready()}
