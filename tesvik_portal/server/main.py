"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tesvik_portal.core.database import init_db
from tesvik_portal.core.logging_config import get_logger, setup_logging
from tesvik_portal.core.monitoring import initialize_logfire

from .api.v1 import (
    admin_settings,
    announcements,
    chat,
    chat_sessions,
    exchange_rates,
    geolocation,
    glossary,
    health,
    incentives,
    knowledge,
    legal_documents,
    menu_visibility,
    newsletter,
    qna,
    search,
    support_programs,
    user_roles,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    try:
        logger.info("Starting up Teşvik Portal Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Teşvik Portal Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Teşvik Portal API

    Backend services of the investment-incentive portal: the incentive calculator,
    support-program search, the knowledge-base chat assistant and the content
    administration behind the portal.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

V1 = constant.API_V1_STR

app.include_router(health.router, tags=["health"])
app.include_router(incentives.router, prefix=f"{V1}/incentives")
app.include_router(support_programs.router, prefix=f"{V1}/support-programs")
app.include_router(support_programs.institutions_router, prefix=f"{V1}/institutions")
app.include_router(support_programs.tags_router, prefix=f"{V1}/tags")
app.include_router(search.router, prefix=f"{V1}/search")
app.include_router(chat.router, prefix=f"{V1}/chat")
app.include_router(chat_sessions.router, prefix=f"{V1}/chat-sessions")
app.include_router(knowledge.router, prefix=f"{V1}/knowledge")
app.include_router(announcements.router, prefix=f"{V1}/announcements")
app.include_router(newsletter.router, prefix=f"{V1}/newsletter")
app.include_router(legal_documents.router, prefix=f"{V1}/legal-documents")
app.include_router(qna.router, prefix=f"{V1}/qna")
app.include_router(glossary.router, prefix=f"{V1}/glossary")
app.include_router(menu_visibility.router, prefix=f"{V1}/menu-visibility")
app.include_router(admin_settings.router, prefix=f"{V1}/admin-settings")
app.include_router(user_roles.router, prefix=f"{V1}/user-roles")
app.include_router(exchange_rates.router, prefix=f"{V1}/exchange-rates")
app.include_router(geolocation.router, prefix=f"{V1}/geolocation")
