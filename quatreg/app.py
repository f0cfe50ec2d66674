from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quatreg.api.v1 import router as api_router
from quatreg.core.config import settings
from quatreg.core.logging_config import get_logger

logger = get_logger("quatreg")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Closed-form registration of corresponding 3D point sets",
    version=settings.VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
