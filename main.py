import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.v1.api_router import api_router
from core.config import settings
from core.database import connect_with_retry, create_tables
from core.exceptions import register_exception_handlers
from realtime.router import router as realtime_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.APP_NAME,
    description="Donations, supporters and live donation events",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api")
app.include_router(realtime_router)


def ensure_signing_secret() -> None:
    if not settings.SECRET_KEY:
        logger.critical("SECRET_KEY is not set, refusing to start")
        sys.exit(1)


@app.on_event("startup")
async def startup_event():
    ensure_signing_secret()
    if await connect_with_retry():
        await create_tables()
    logger.info(f"🚀 {settings.APP_NAME} started ({settings.ENVIRONMENT}) on port {settings.PORT}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("👋 Server shutting down")


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": "1.0.0"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=settings.is_development)
