import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.config.settings import settings
from app.database.supabase_client import SupabaseClient
from app.modules.auth import routes as auth_routes
from app.modules.profiles import routes as profiles_routes
from app.modules.ideas import routes as ideas_routes
from app.modules.board import routes as board_routes
from app.modules.comments import routes as comments_routes
from app.modules.volunteers import routes as volunteers_routes
from app.modules.teams import routes as teams_routes
from app.modules.subscriptions import routes as subscriptions_routes
from app.modules.notifications import routes as notifications_routes
from app.modules.gitlab import routes as gitlab_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(profiles_routes.router, prefix="/api/v1")
app.include_router(board_routes.router, prefix="/api/v1")
app.include_router(ideas_routes.router, prefix="/api/v1")
app.include_router(comments_routes.router, prefix="/api/v1")
app.include_router(volunteers_routes.router, prefix="/api/v1")
app.include_router(teams_routes.router, prefix="/api/v1")
app.include_router(subscriptions_routes.router, prefix="/api/v1")
app.include_router(notifications_routes.router, prefix="/api/v1")
app.include_router(gitlab_routes.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    logger.info(f"Application startup ({settings.environment})")
    if not SupabaseClient.has_service_client():
        logger.warning("SUPABASE_SERVICE_ROLE_KEY not set; admin management endpoints are disabled")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.app_name}", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: Supabase must be configured."""
    if not settings.supabase_url or not settings.supabase_key:
        return JSONResponse(status_code=503, content={"status": "not ready"})
    return {"status": "ready"}
