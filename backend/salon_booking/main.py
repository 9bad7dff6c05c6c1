import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import Settings, get_settings
from .database import create_db_engine, create_session_factory
from .errors import BookingError, InfrastructureError
from .models import Base
from .routers import availability, blocked, bookings, closures
from .services.notifications import EmailNotifier, Notifier

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine: Engine = app.state.engine
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database ready: {engine.url.render_as_string(hide_password=True)}")
    yield
    engine.dispose()
    logger.info("Connection pool closed")


def create_app(
    settings: Settings | None = None,
    engine: Engine | None = None,
    notifier: Notifier | None = None,
) -> FastAPI:
    """
    Build the API.

    The engine (and its connection pool) belongs to the app: created here,
    disposed on shutdown, reached by requests through get_db.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Salon Booking API", lifespan=lifespan)

    app.state.settings = settings
    app.state.business_hours = settings.business_hours
    app.state.engine = engine or create_db_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.notifier = notifier or EmailNotifier(settings)

    _register_error_handlers(app)

    app.include_router(availability.router)
    app.include_router(bookings.router)
    app.include_router(closures.router)
    app.include_router(blocked.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Booking page; mounted last so /api/* wins
    if settings.static_dir is not None:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.reason})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid request {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "invalid request"})

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        # Unreachable store, pool timeout, ...: detail goes to the log only
        logger.exception(f"Store error on {request.method} {request.url.path}", exc_info=exc)
        error = InfrastructureError()
        return JSONResponse(status_code=error.status_code, content={"error": error.reason})


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "salon_booking.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )
