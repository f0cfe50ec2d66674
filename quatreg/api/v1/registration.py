"""
Registration API endpoints.

Provides REST API for registering corresponding point sets and applying
the resulting transforms.
"""

from functools import lru_cache
from typing import List, Optional
import numpy as np
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field

from quatreg.core.config import settings
from quatreg.modules.registration import (
    EigenDecompositionFailure,
    RegistrationEngine,
    RegistrationError,
)
from quatreg.modules.registration.transform import apply_transform

router = APIRouter()


# --- Request/Response Models ---

class RegistrationRequest(BaseModel):
    """Request body for registering two corresponding point sets."""
    domain: List[List[float]]
    range_: List[List[float]] = Field(alias="range")
    strict: Optional[bool] = None


class RegistrationResponse(BaseModel):
    """Registration result."""
    transformation: List[List[float]]
    rotation: List[List[float]]
    translation: List[float]
    quaternion: Optional[List[float]]
    mean_error: float
    num_points: int
    quality: str


class ApplyTransformRequest(BaseModel):
    """Request body for applying a 4x4 transform to points."""
    transformation: List[List[float]]
    points: List[List[float]]


@lru_cache()
def get_engine() -> RegistrationEngine:
    """Shared engine configured from the environment."""
    return RegistrationEngine(settings.engine_config())


# --- Endpoints ---

@router.post("/registration", response_model=RegistrationResponse)
async def register_point_sets(
    request: RegistrationRequest,
    engine: RegistrationEngine = Depends(get_engine)
):
    """
    Register domain points onto range points.

    Args:
        request: Corresponding domain/range point lists
        engine: Registration engine

    Returns:
        Transform, quaternion and mean error of the registration
    """
    try:
        result = await engine.register_async(request.domain, request.range_, request.strict)
    except EigenDecompositionFailure as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return result.to_dict()


@router.post("/registration/apply")
async def apply_registration(request: ApplyTransformRequest):
    """
    Apply a 4x4 transform to a list of 3D points.

    Returns:
        Transformed points
    """
    try:
        T = np.asarray(request.transformation, dtype=np.float64)
    except ValueError:
        raise HTTPException(status_code=400, detail="transformation must be 4x4")
    if T.shape != (4, 4):
        raise HTTPException(status_code=400, detail=f"transformation must be 4x4, got {list(T.shape)}")

    try:
        points = np.asarray(request.points, dtype=np.float64)
    except ValueError:
        raise HTTPException(status_code=400, detail="points must be 3D vectors")
    if points.size == 0:
        return {"points": []}
    if points.ndim != 2 or points.shape[1] != 3:
        raise HTTPException(status_code=400, detail="points must be 3D vectors")

    return {"points": apply_transform(T, points).tolist()}
