from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import asyncio
import logging

# Configure base logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("app")

import app.models  # noqa: F401  registers every model on Base
from app.config import settings
from app.core.error_handlers import register_exception_handlers
from app.database import engine, Base, SessionLocal
from app.init_db import create_initial_admin
from app.routers import (
    admin,
    auth,
    bookings,
    courts,
    facilities,
    reviews,
    users,
)
from app.services.slot_scheduler import slot_scheduler_loop
import uvicorn

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for booking sports facilities, courts and hourly slots",
    version="1.0.0",
)

register_exception_handlers(app)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["authentication"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(facilities.router, prefix="/facilities", tags=["facilities"])
app.include_router(courts.router, prefix="/courts", tags=["courts"])
app.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
app.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])


@app.on_event("startup")
async def on_startup():
    # Tables are managed by Alembic in production; this covers local setups
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        create_initial_admin(db)
    finally:
        db.close()

    if settings.ENABLE_SLOT_SCHEDULER:
        app.state.slot_scheduler = asyncio.create_task(slot_scheduler_loop())
        logger.info("Daily slot generation scheduled at %02d:00", settings.SLOT_SCHEDULER_HOUR)


@app.on_event("shutdown")
async def on_shutdown():
    task = getattr(app.state, "slot_scheduler", None)
    if task:
        task.cancel()


@app.get("/")
def read_root():
    return {"message": "Welcome to Courtside API"}


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=5000, reload=True)
