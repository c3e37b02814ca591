from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError
from src.domain.errors import TRANSIENT_CONFLICT, ConsistencyFault
from .error import ClientError, ServerError, error_body
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = error_body(exc.base_error)
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_consistency_fault(request: Request, exc: ConsistencyFault):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Consistency fault on {request.url.path}: {exc} {exc.context}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_operational_error(request: Request, exc: OperationalError):
    # Lock timeouts, deadlocks and busy databases: the caller may retry
    error_dict = {
        "code": TRANSIENT_CONFLICT,
        "message": "The request conflicted with a concurrent change, please retry",
        "retryable": True,
    }
    logger.warning(f"Transient conflict on {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": error_dict}
    )


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    app = FastAPI(title="Family Seat Service", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, family, health_check, subscription

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(family.router, prefix=ApplicationConfig.API_PREFIX, tags=["Family"])
    app.include_router(
        subscription.router, prefix=ApplicationConfig.API_PREFIX, tags=["Subscription"]
    )
    app.include_router(admin.router, prefix=ApplicationConfig.API_PREFIX, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(ConsistencyFault, handle_consistency_fault)
    app.add_exception_handler(OperationalError, handle_operational_error)

    return app
