import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.core import config
from app.api.routes.detect import router as detect_router
from app.api.routes.sheets import router as sheets_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Candidate Sheet Parser (Spreadsheet Import Service)",
    description="Heuristic field detection for candidate spreadsheets: infers name, phone, salary, notice period and more from cell contents, with auto-fix and import validation",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(detect_router)
app.include_router(sheets_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "candidate-sheet-parser", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Candidate Sheet Parser API",
        version="0.1.0",
        description="Spreadsheet candidate import API with evidence-backed field detection",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
