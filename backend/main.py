import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.database import initialize_db, db_manager
from core.logging_config import setup_logging
from core.middleware import AuthContextMiddleware
# Import exceptions and handlers
from core.exceptions import (
    APIException,
    api_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    sqlalchemy_exception_handler,
    general_exception_handler
)
import models  # noqa: F401  registers every table on Base.metadata
from routes import (
    ads_router,
    appointments_router,
    auth_router,
    checkin_router,
    qr_router,
    health_router,
    homev2_router,
    knowledge_router,
    partners_router,
    plans_router,
    promo_redirect_router,
    promotions_router,
    referrals_router,
    settings_router,
    testimonials_router,
    user_router,
)
from services.auth import AuthService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup event
    setup_logging(level=settings.LOG_LEVEL)

    # Initialize the database engine and session factory
    initialize_db(settings.SQLALCHEMY_DATABASE_URI, settings.ENVIRONMENT == "local")
    await db_manager.create_tables()
    logger.info("Database tables ready")

    try:
        async with db_manager.get_session_with_retry() as db:
            await AuthService(db).ensure_default_admin()
    except SQLAlchemyError:
        logger.exception("Failed to ensure the default admin user")

    yield
    # Shutdown event
    await db_manager.dispose()


app = FastAPI(
    title="Gym API",
    description="Marketing site and back office for the gym: plans, promotions, check-in and leads.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Middleware Stack (order matters - last added is executed first)
app.add_middleware(AuthContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(user_router)
app.include_router(promotions_router)
app.include_router(promo_redirect_router)
app.include_router(homev2_router)
app.include_router(plans_router)
app.include_router(partners_router)
app.include_router(ads_router)
app.include_router(testimonials_router)
app.include_router(knowledge_router)
app.include_router(appointments_router)
app.include_router(referrals_router)
app.include_router(qr_router)
app.include_router(checkin_router)
app.include_router(settings_router)

# Register exception handlers
app.add_exception_handler(APIException, api_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.ENVIRONMENT == "local")
