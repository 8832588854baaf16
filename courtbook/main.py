import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .config import settings
from .database import SessionLocal, init_db
from .middleware.audit import audit_middleware
from .middleware.auth import auth_middleware
from .redis_client import redis_client
from .routers import admin, courts, reservations, slots, sport_types, user_profiles
from .services.reservations import (
    CourtUnavailableError,
    ReservationNotFoundError,
    SlotUnavailableError,
)
from .services.slots.policy import (
    BookingPolicyError,
    InvalidTransitionError,
    PermissionDeniedError,
)

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database tables ensured")
    yield


app = FastAPI(title="Court Reservations API", lifespan=lifespan)

# ===== Middleware order =====
app.middleware("http")(audit_middleware)
app.middleware("http")(auth_middleware)


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


# ===== Domain errors =====
@app.exception_handler(BookingPolicyError)
async def booking_policy_error_handler(request: Request, exc: BookingPolicyError):
    if isinstance(exc, PermissionDeniedError):
        return _error(status.HTTP_403_FORBIDDEN, str(exc))
    if isinstance(exc, InvalidTransitionError):
        return _error(status.HTTP_409_CONFLICT, str(exc))
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(ReservationNotFoundError)
async def not_found_handler(request: Request, exc: ReservationNotFoundError):
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(CourtUnavailableError)
async def court_unavailable_handler(request: Request, exc: CourtUnavailableError):
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(SlotUnavailableError)
async def slot_unavailable_handler(request: Request, exc: SlotUnavailableError):
    return _error(status.HTTP_409_CONFLICT, str(exc))


# ===== Store errors =====
@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return _error(status.HTTP_409_CONFLICT, "Conflict with existing data")


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Data store error on {request.method} {request.url.path}")
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "Data store error")


app.include_router(sport_types.router)
app.include_router(courts.router)
app.include_router(slots.router)
app.include_router(reservations.router)
app.include_router(user_profiles.router)
app.include_router(admin.router)


@app.get("/health")
def health():
    db_ok = True
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check: database unreachable")
        db_ok = False
    finally:
        db.close()

    try:
        redis_ok = bool(redis_client.ping())
    except Exception as e:
        logger.error(f"Health check: redis unreachable: {e}")
        redis_ok = False

    return {"database": db_ok, "redis": redis_ok}
