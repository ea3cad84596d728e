import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from polycast.config import get_app_settings
from polycast.routers import cards_router, seed_router, settings_router, study_router

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings = get_app_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        f"Study sessions: ttl={settings.session_ttl_seconds}s, max={settings.session_max}, "
        f"transitions={settings.flip_delay_ms}ms+{settings.card_enter_delay_ms}ms"
    )

    yield

    # Shutdown
    from polycast.sessions import get_session_store

    get_session_store().clear()
    logger.info("Study sessions cleared")


app = FastAPI(
    title="Polycast Flashcards API",
    description="Spaced-repetition scheduler for Polycast vocabulary flashcards",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_app_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(cards_router)
app.include_router(settings_router)
app.include_router(seed_router)
app.include_router(study_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Polycast Flashcards API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/healthz",
            "cards": "/cards",
            "settings": "/settings",
            "seed": "/seed",
            "study": "/study/sessions",
        },
    }


@app.get("/healthz")
async def healthz():
    """Health check endpoint."""
    return {"status": "healthy"}
