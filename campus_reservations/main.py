from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from campus_reservations.api.routes import venues, bookings, events, registrations
from campus_reservations.core.config import AUTO_CREATE_SCHEMA
from campus_reservations.core.errors import ReservationError
from campus_reservations.db.session import init_db

# ⭐ Import logging system
from campus_reservations.core.logging_config import get_logger

logger = get_logger()

app = FastAPI(
    title="Campus Venue Reservation API",
    version="1.0.0",
    description="Venue search and booking, event registration and faculty review"
)


@app.on_event("startup")
def create_schema():
    # Alembic owns the schema in deployment; this covers local SQLite runs
    if AUTO_CREATE_SCHEMA:
        init_db()


# ⭐ Request Logging Middleware
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code} {request.url}")
        return response

    except Exception as e:
        logger.error(f"ERROR: {request.url} -> {str(e)}")
        raise e


# ⭐ Domain errors → JSON with kind + details
@app.exception_handler(ReservationError)
async def reservation_error_handler(request: Request, exc: ReservationError):
    logger.info(f"REJECTED: {request.method} {request.url} -> {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ⭐ CORS (important for frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Can restrict later for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------- ROUTERS --------
app.include_router(venues.router)
app.include_router(bookings.router)
app.include_router(events.router)
app.include_router(registrations.router)


@app.get("/", tags=["Root"])
def root():
    return {"message": "Backend running successfully"}
