from fastapi import APIRouter
from .system import router as system_router
from .registration import router as registration_router

router = APIRouter(prefix="/api/v1")
router.include_router(system_router)
router.include_router(registration_router)
