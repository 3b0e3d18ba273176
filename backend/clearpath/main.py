import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import documents, eligibility, jurisdictions
from .config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.app_name} API",
    description="Preliminary record-sealing and expungement screening",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(jurisdictions.router)
app.include_router(eligibility.router)
app.include_router(documents.router)


@app.get("/health")
async def health():
    return {"status": "ok", "default_jurisdiction": settings.default_jurisdiction}
