"""
Mealwise Web API - FastAPI application.

Uses Supabase Auth bearer tokens for authentication.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mealwise import __version__
from mealwise.config import settings
from mealwise.errors import PlannerError
from mealwise.llm.prompt_logger import enable_prompt_logging, is_enabled as prompt_logging_enabled
from mealwise.web.household_routes import router as household_router
from mealwise.web.item_routes import router as item_router
from mealwise.web.plan_routes import router as plan_router
from mealwise.web.shopping_routes import router as shopping_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Mealwise", version=__version__)


@app.on_event("startup")
async def startup_event():
    """Log configuration on startup."""
    if settings.mealwise_log_prompts:
        enable_prompt_logging(True)
    logger.info("Mealwise starting up...")
    logger.info(f"  Prompt file logging: {prompt_logging_enabled()}")


@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# CORS for the web frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(household_router, prefix="/api")
app.include_router(item_router, prefix="/api")
app.include_router(plan_router, prefix="/api")
app.include_router(shopping_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
