from fastapi import APIRouter
from quatreg.core.config import settings

router = APIRouter()

@router.get("/status")
async def get_status():
    """System status endpoint"""
    return {
        "status": "ok",
        "version": settings.VERSION,
        "strict": settings.QUATREG_STRICT
    }
