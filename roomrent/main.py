import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .db import SessionLocal
from .errors import AppError
from .limiter import limiter
from .models import User, UserRole
from .routers import auth_api, room_types, rooms
from .security import hash_password

# --- Logging configuration ---
_level = logging.DEBUG if getattr(settings, "DEBUG", False) else logging.INFO
logging.basicConfig(
    level=_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
# Align uvicorn loggers with our level (useful under Docker Compose)
for _name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
    logging.getLogger(_name).setLevel(_level)
logger = logging.getLogger("roomrent.startup")
logger.info("Starting %s (DEBUG=%s)", settings.APP_NAME, getattr(settings, "DEBUG", False))

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    description=f"{settings.APP_NAME}: room rental listings, room types and media uploads.",
)


@app.on_event("startup")
def startup_event():
    """Runs startup tasks, like ensuring a default admin exists."""
    logger.info("Running startup tasks...")

    def _ensure_default_admin():
        db = SessionLocal()
        try:
            if db.query(User).filter(User.role == UserRole.ADMIN.value).first():
                return
            email = settings.ADMIN_EMAIL
            user = db.query(User).filter(User.email == email).first()
            if user:
                user.role = UserRole.ADMIN.value
            else:
                user = User(
                    name=settings.ADMIN_NAME,
                    email=email,
                    hashed_password=hash_password(settings.ADMIN_PASSWORD),
                    role=UserRole.ADMIN.value,
                )
                db.add(user)
            db.commit()
            logger.info("Default admin user ensured.")
        finally:
            db.close()

    _ensure_default_admin()
    logger.info("Startup tasks complete.")


# --- Error envelopes ---
@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("Unhandled application error on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg', 'invalid value')}" if field else "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


# Add the limiter to the app state
app.state.limiter = limiter
# Add the exception handler for rate limit exceeded errors
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(auth_api.router)
app.include_router(room_types.router)
app.include_router(rooms.router)

# Locally stored uploads (room_images/, room_videos/)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

@app.get("/healthz")
@limiter.exempt
def healthz():
    return {"status": "ok"}
