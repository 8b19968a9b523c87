# mentorslot/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mentorslot import __version__
from mentorslot.api import auth, booking, mentor, session
from mentorslot.config import settings
from mentorslot.database import Base, engine
from mentorslot.errors import MentorSlotError, ValidationError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables (production schemas are managed by alembic)
Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(title="MentorSlot API", version=__version__, debug=settings.DEBUG)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error rendering: stable kind plus message, never storage detail
@app.exception_handler(MentorSlotError)
async def mentorslot_error_handler(request: Request, exc: MentorSlotError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    error = ValidationError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# API routers
app.include_router(auth.router)     # /auth/*
app.include_router(session.router)  # /sessions
app.include_router(mentor.router)   # /mentor/sessions
app.include_router(booking.router)  # /bookings


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "MentorSlot API is running",
        "version": __version__,
    }
