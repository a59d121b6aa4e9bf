from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response
from timing_asgi import TimingMiddleware, TimingClient  # type: ignore
from timing_asgi.integrations import StarletteScopeToName  # type: ignore

from dashboard.core import config
from dashboard.core.database.engine import init_db
from dashboard.core.sheets.client import SheetsClient, SheetsError
from dashboard.features.announcements.routes import router as announcement_router
from dashboard.features.dashboard.routes import router as dashboard_router
from dashboard.features.members.routes import router as member_router
from dashboard.features.notifications.routes import router as notification_router
from dashboard.features.organizations.routes import router as organization_router
from dashboard.features.permissions.dependencies import PermissionRedirect
from dashboard.features.permissions.routes import router as permission_router
from dashboard.features.settings.routes import router as settings_router
from dashboard.features.sheets.routes import router as sheets_router
from dashboard.features.users.dependencies import get_authorization_header
from dashboard.features.users.routes import router as user_router
from dashboard.utils import get_logger


log = get_logger(__name__)
log.info("Initializing server")
app = FastAPI(
    title="Business Dashboard",
    description="Team dashboard backend with role-based access control",
    version="0.1.0",
    docs_url="/docs" if config.ENABLE_DOCS else None,
    redoc_url="/redoc" if config.ENABLE_DOCS else None,
    openapi_url="/openapi.json" if config.ENABLE_DOCS else None
)
limiter = Limiter(key_func=get_authorization_header)
app.state.limiter = limiter


class PrintTimings(TimingClient):
    def timing(self, metric_name, timing, tags):
        log.debug(dict(route=metric_name.removeprefix("main.dashboard.features."), timing=timing, tags=tags))


app.add_middleware(TimingMiddleware, client=PrintTimings(), metric_namer=StarletteScopeToName("main", app))

if config.ENABLE_DOCS:
    log.warning("Docs enabled")
if config.ALLOW_ORIGIN:
    log.warning("Setting allow origin to %s", config.ALLOW_ORIGIN)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.ALLOW_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_request: Request, exc: RequestValidationError):
    errors = dict()
    for error in exc.errors():
        if "loc" not in error or "msg" not in error:
            continue
        key = error["loc"][-1]
        if key == "__root__":
            key = "root"
        errors[key] = error["msg"]
    log.info("Request validation error %s", errors)
    return JSONResponse(status_code=400, content=jsonable_encoder(errors))


@app.exception_handler(RateLimitExceeded)
def rate_limit_exceeded_handler(_request: Request, _exc: RateLimitExceeded) -> Response:
    return JSONResponse({"error": "You are going too fast"}, status_code=429)


@app.exception_handler(PermissionRedirect)
async def permission_redirect_handler(request: Request, exc: PermissionRedirect) -> Response:
    log.info("Redirecting %s to %s", request.url.path, exc.location)
    return RedirectResponse(exc.location, status_code=303)


@app.on_event("startup")
async def startup():
    """Initialize database and spreadsheet on application startup."""
    log.info("Initializing database...")
    await init_db()
    log.info("Database initialized successfully")

    client = SheetsClient.get_client()
    if client is None:
        log.warning("Spreadsheet not configured, using local store")
        return
    try:
        initialized = await client.initialize_if_empty()
        log.info("Spreadsheet ready, initialized: %s", initialized or "nothing")
    except SheetsError as e:
        log.error("Spreadsheet initialization failed, falling back to local store: %s", e)


@app.get("/")
async def root():
    """Root endpoint - API health check."""
    return {
        "message": "Business Dashboard API",
        "version": "0.1.0",
        "status": "online",
        "docs": "/docs" if config.ENABLE_DOCS else None,
        "storage": "sheets" if config.SHEETS_ENABLED else "local",
        "authentication": {
            "info": "Protected endpoints require Bearer token in Authorization header",
            "public_endpoints": [
                "/users/register", "/users/login", "/permissions/catalog", "/sheets/status", "/health"
            ],
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(user_router, prefix="/users", tags=["users"])
# Alias for singular form (if frontend uses /user/me)
app.include_router(user_router, prefix="/user", tags=["users"], include_in_schema=False)

app.include_router(permission_router, prefix="/permissions", tags=["permissions"])
app.include_router(organization_router, prefix="/organizations", tags=["organizations"])
app.include_router(member_router, prefix="/members", tags=["members"])
app.include_router(announcement_router, prefix="/announcements", tags=["announcements"])
app.include_router(notification_router, prefix="/notifications", tags=["notifications"])
app.include_router(settings_router, prefix="/settings", tags=["settings"])
app.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
app.include_router(sheets_router, prefix="/sheets", tags=["sheets"])
