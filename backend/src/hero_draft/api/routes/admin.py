"""Administrative endpoints."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(prefix="/api/admin", tags=["admin"])


class ReloadResponse(BaseModel):
    """Row counts after a catalog reload."""

    status: str
    counts: dict[str, int]


@router.post("/catalog/reload", response_model=ReloadResponse)
def reload_catalog(request: Request):
    """Re-read the catalog after data edits."""
    engine = request.app.state.engine
    counts = engine.reload()
    return ReloadResponse(status="reloaded", counts=counts)
