"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from turfbook.api import auth, bookings, owner, reviews, slots, turfs
from turfbook.core.config import settings
from turfbook.core.database import close_db, init_db, session_scope
from turfbook.services.scheduler import booking_scheduler
from turfbook.services.seed import seed_demo_data

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting TurfBook")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # The store is in memory, so every start begins from a clean schema
    await init_db()
    if settings.SEED_DEMO_DATA:
        async with session_scope() as db:
            await seed_demo_data(db)

    if settings.SCHEDULER_ENABLED:
        await booking_scheduler.start()

    yield

    # Shutdown
    logger.info("Shutting down TurfBook")
    await booking_scheduler.stop()
    await close_db()


# Create FastAPI app
app = FastAPI(
    title="TurfBook",
    description="Discover and book sports turfs; owners manage slots, bookings and reviews",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(turfs.router)
app.include_router(slots.router)
app.include_router(bookings.router)
app.include_router(reviews.router)
app.include_router(owner.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "scheduler_running": booking_scheduler.running,
    }


def run():
    """Serve the app with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "turfbook.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
