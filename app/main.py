import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import schemas
from .config import Settings
from .errors import InvalidJSONError, PaymentAPIError
from .gateway import build_gateway
from .logging_config import configure_logging
from .routers import payment
from .utils import is_json, parse_json_body

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, gateway=None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL)

    if not settings.has_secret:
        logger.error("RAZORPAY_KEY_SECRET is not set, every payment verification will be rejected")

    app = FastAPI(title="Slumber Panda API")

    # one client for the whole process, handed to routes through Depends(get_gateway)
    app.state.settings = settings
    app.state.gateway = gateway if gateway is not None else build_gateway(settings)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url)
        logger.debug("Headers: %s", dict(request.headers))

        # bad JSON is a 400 on every path, before routing
        if request.method in ("POST", "PUT", "PATCH") and is_json(request):
            try:
                await parse_json_body(request)
            except InvalidJSONError as exc:
                return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

        return await call_next(request)

    # added last so it wraps everything, error responses included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(payment.router)

    @app.get("/", response_model=schemas.HealthResponse)
    def root():
        return {
            "message": "Slumber Panda API Server is running!",
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


def _original_url(request: Request) -> str:
    url = request.url.path
    if request.url.query:
        url += "?" + request.url.query
    return url


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(PaymentAPIError)
    async def payment_error_handler(request: Request, exc: PaymentAPIError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # an unknown method on a known path is still "not found" for clients
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "success": False,
                    "error": "Endpoint not found",
                    "message": f"Route {_original_url(request)} not found",
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail), "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error", "message": str(exc)},
        )


app = create_app()


def run():
    import uvicorn

    settings: Settings = app.state.settings
    base = f"http://localhost:{settings.PORT}"
    logger.info("Slumber Panda API Server running on port %s", settings.PORT)
    logger.info("Health check: %s/", base)
    logger.info("Create Order: %s/api/create-order", base)
    logger.info("Verify Payment: %s/api/verify-payment", base)

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
