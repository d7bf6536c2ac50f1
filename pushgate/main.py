"""Main FastAPI application."""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from pushgate.api.push import router as push_router
from pushgate.credentials import resolve_service_account_path
from pushgate.domain.common.errors import CredentialsError, SendError, ValidationError
from pushgate.infra.push.firebase import close_firebase, init_firebase, make_sender
from pushgate.services.push_service import PushService
from pushgate.settings import get_settings, settings

logging.basicConfig(
    level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialise the FCM client and start the gRPC server; tear both down on shutdown."""
    s = get_settings()
    firebase_app = None
    grpc_server = None
    if getattr(app.state, "push_service", None) is None:
        path = resolve_service_account_path(s.service_account_path, s.service_account_json)
        try:
            firebase_app = init_firebase(path)
        except CredentialsError as e:
            logger.error("Error when initialising Firebase: %s", e.message)
            raise
        app.state.push_service = PushService(
            make_sender(firebase_app, dry_run=s.dry_run),
            max_concurrency=s.send_max_concurrency,
        )

    try:
        if s.grpc_enabled:
            from pushgate.api.rpc.servicer import create_server
            server, grpc_port = create_server(app.state.push_service, f"{s.grpc_host}:{s.grpc_port}")
            await server.start()
            grpc_server = server
            logger.info("Starting gRPC server on port %d", grpc_port)
        yield
    finally:
        if grpc_server is not None:
            await grpc_server.stop(grace=5)
        if firebase_app is not None:
            close_firebase(firebase_app)
            app.state.push_service = None


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        logger.info("[REQUEST] %s %s", request.method, request.url.path)
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            "[RESPONSE] %s %s - %d (%.3fs)",
            request.method,
            request.url.path,
            response.status_code,
            process_time,
        )
        return response


app.add_middleware(LoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON or a body that does not fit the schema."""
    errors = exc.errors()
    logger.warning("Parse error in %s %s: %d error(s)", request.method, request.url.path, len(errors))
    logger.debug("Validation errors: %s", errors)
    return JSONResponse(
        status_code=400,
        content={"error": "Parse error in request body!", "detail": jsonable_encoder(errors)},
    )


@app.exception_handler(ValidationError)
async def domain_validation_handler(request: Request, exc: ValidationError):
    """Return 400 before any vendor call (e.g. missing token)."""
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(SendError)
async def send_error_handler(request: Request, exc: SendError):
    """Vendor send failed; relay the vendor error string."""
    return JSONResponse(
        status_code=500,
        content={"error": "Send message error!", "detail": exc.detail},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/ready")
async def readiness(request: Request):
    """Readiness endpoint: run all checks and return 200 if ready, 503 otherwise."""
    from pushgate.readiness import is_ready, run_all_checks
    checks = run_all_checks(request.app)
    ready, summary = is_ready(checks)
    if ready:
        return {"ready": True, "checks": summary}
    return JSONResponse(
        status_code=503,
        content={"ready": False, "checks": summary},
    )


app.include_router(push_router)
