"""Main FastAPI application for AdminPanelAPI."""

import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from adminpanel.config import API_V1_PREFIX, CORS_ORIGINS, NAME_APP
from adminpanel.database import init_db, seed_superuser
from adminpanel.exceptions import AdminPanelError
from adminpanel.routers import blog, calendar, items, login, media, users

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('adminpanel_api.log')
    ]
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


async def admin_panel_error_handler(request: Request, exc: AdminPanelError):
    """Map domain errors to JSON responses with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


async def redirect_from_www(request: Request, call_next):
    """Permanently redirect www.<host> to the bare host."""
    host = request.headers.get("host", "")
    if host.startswith("www."):
        url = request.url.replace(scheme="https", netloc=host[len("www."):])
        return RedirectResponse(str(url), status_code=status.HTTP_301_MOVED_PERMANENTLY)
    return await call_next(request)


def create_app() -> FastAPI:
    app = FastAPI(
        title=NAME_APP,
        description="Admin panel API for users, blog posts, calendar events, items and media",
        version=VERSION
    )

    app.middleware("http")(redirect_from_www)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
        expose_headers=["Content-Length"],
        max_age=12 * 60 * 60,
    )

    app.add_exception_handler(AdminPanelError, admin_panel_error_handler)

    # Include routers
    for module in (login, users, calendar, blog, media, items):
        app.include_router(module.router, prefix=API_V1_PREFIX)

    @app.on_event("startup")
    def startup_event():
        """Initialize database and seed the superuser on application startup."""
        logger.info(f"Starting {NAME_APP}")
        init_db()
        seed_superuser()

    @app.get("/")
    def root():
        """Root endpoint."""
        return {
            "name": NAME_APP,
            "version": VERSION,
            "status": "running"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"message": "Healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
