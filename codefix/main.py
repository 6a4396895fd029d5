"""CodeFix ticket export service: FastAPI app wiring (routers, CORS, .env loading)."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from codefix.api.v1 import router as v1_router
from codefix.core.config import settings

SERVICE_NAME = "CodeFix Ticket Export API"

app = FastAPI(
    title=SERVICE_NAME,
    version="0.1.0",
    docs_url="/docs" if settings.APP_ENV == "dev" else None,
    redoc_url=None,
)

# Browser clients only talk to the service directly during local development.
if settings.APP_ENV == "dev":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Service name and where the export endpoint lives."""
    return {
        "message": SERVICE_NAME,
        "export": f"{settings.API_V1_PREFIX}/tickets/export",
    }
