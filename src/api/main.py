"""
FastAPI application entry point.

Wires the content store, notification aggregator, file host client and mailer into
one application and mounts the routers for the public site and the back-office.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from .routers import (
    health, projects, services, blog, gallery, careers, team, site_settings, applications,
    notifications, messages, testimonials, quotes, newsletter, files,
)
from .models.common import APIError
from src.content.errors import ContentError, NotFoundError
from src.services.uploads.base import UploadError
from src.content.store import ContentStore
from src.content.types import APPLICATION_KINDS
from src.content.notifications.aggregator import NotificationAggregator
from src.services.uploads.uploadthing import UploadThingProvider
from src.services.uploads.tracker import FileTracker
from src.services.mail.templates import EmailTemplateManager
from src.services.mail.notifier import EmailNotifier
from src.utils.config import Settings, load_settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.logging.level.upper(), format=settings.logging.format)


def _error_response(status_code: int, exc: Exception, request: Request) -> JSONResponse:
    body = APIError(error=str(exc), error_code=type(exc).__name__, details={"path": request.url.path})
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return _error_response(status_code, exc, request)


async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
    logger.error(f"File host error on {request.url.path}: {exc}")
    return _error_response(502, exc, request)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Services are built by create_app so they exist even without a lifespan (tests);
    here we only set up logging and release the HTTP client at shutdown.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)
    logger.info(f"Starting {settings.app.name} v{settings.app.version}")
    if not app.state.file_host.configured:
        logger.warning("UPLOADTHING_SECRET is not set; file host cleanup is disabled")
    if not settings.admin.api_key:
        logger.warning("No admin API key configured; admin endpoints are open")

    yield  # Server runs here

    logger.info("Shutting down")
    app.state.file_host.cleanup()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Pass settings explicitly in tests; otherwise config/config.yaml is loaded.
    """
    settings = settings or load_settings()

    app = FastAPI(
        title=settings.app.name,
        description="Backend for the construction company website and its admin back-office",
        version=settings.app.version,
        lifespan=lifespan
    )

    file_host = UploadThingProvider(
        api_key=settings.uploads.api_key,
        base_url=settings.uploads.base_url,
        request_timeout_s=settings.uploads.request_timeout_s,
        list_page_size=settings.uploads.list_page_size,
    )
    app.state.settings = settings
    app.state.store = ContentStore()
    app.state.aggregator = NotificationAggregator()
    app.state.file_host = file_host
    app.state.file_tracker = FileTracker(file_host)
    app.state.notifier = EmailNotifier(settings.email, EmailTemplateManager(settings.templates_dir))

    # Configure CORS middleware for frontend communication
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Domain errors a router did not translate itself
    app.add_exception_handler(ContentError, content_error_handler)
    app.add_exception_handler(UploadError, upload_error_handler)

    # Public site
    app.include_router(health.router, prefix="/health", tags=["health"])
    # gallery routes first so /gallery/{image_id} is not taken for an owner id
    app.include_router(gallery.build_gallery_router("project"), prefix="/api/projects", tags=["projects"])
    app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
    app.include_router(gallery.build_gallery_router("service"), prefix="/api/services", tags=["services"])
    app.include_router(services.router, prefix="/api/services", tags=["services"])
    app.include_router(gallery.build_gallery_router("blog"), prefix="/api/blog", tags=["blog"])
    app.include_router(blog.router, prefix="/api/blog", tags=["blog"])
    app.include_router(careers.router, prefix="/api/careers", tags=["careers"])
    app.include_router(team.router, prefix="/api/team-members", tags=["team"])
    app.include_router(site_settings.router, prefix="/api/site-settings", tags=["site settings"])
    app.include_router(applications.router, prefix="/api", tags=["applications"])
    app.include_router(messages.router, prefix="/api", tags=["messages"])
    app.include_router(testimonials.router, prefix="/api/testimonials", tags=["testimonials"])
    app.include_router(quotes.router, prefix="/api/quote", tags=["quotes"])
    app.include_router(newsletter.router, prefix="/api/newsletter", tags=["newsletter"])

    # Back-office
    app.include_router(notifications.router, prefix="/api/admin", tags=["admin"])
    app.include_router(testimonials.admin_router, prefix="/api/admin/testimonials", tags=["admin"])
    app.include_router(quotes.admin_router, prefix="/api/admin/quote/requests", tags=["admin"])
    app.include_router(newsletter.admin_router, prefix="/api/admin/newsletter/subscribers", tags=["admin"])
    app.include_router(careers.admin_router, prefix="/api/admin/careers", tags=["admin"])
    app.include_router(team.admin_router, prefix="/api/admin/team-members", tags=["admin"])
    app.include_router(site_settings.admin_router, prefix="/api/admin/site-settings", tags=["admin"])
    for kind in APPLICATION_KINDS:
        app.include_router(applications.build_admin_router(kind), prefix=f"/api/admin/{kind}s", tags=["admin"])
    app.include_router(files.router, prefix="/api", tags=["files"])

    @app.get("/")
    async def root():
        """Root endpoint with basic API information."""
        return {
            "name": settings.app.name,
            "version": settings.app.version,
            "status": "operational",
            "endpoints": {
                "health": "/health",
                "projects": "/api/projects",
                "services": "/api/services",
                "blog": "/api/blog",
                "careers": "/api/careers",
                "team": "/api/team-members",
                "site_settings": "/api/site-settings",
                "contact": "/api/contact",
                "testimonials": "/api/testimonials",
                "quotes": "/api/quote/request",
                "applications": "/api/subcontractors/apply, /api/vendors/apply",
                "newsletter": "/api/newsletter",
                "admin": "/api/admin",
                "docs": "/docs",
                "redoc": "/redoc"
            }
        }

    return app


# Create the FastAPI app instance
app = create_app()
