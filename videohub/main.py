from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
import structlog

from videohub.api.router import api_router
from videohub.core.errors import ApiError, DependencyError, ValidationError
from videohub.core.logging import configure_logging
from videohub.core.responses import ApiErrorResponse

logger = structlog.get_logger(__name__)


def _error_response(error: ApiError) -> JSONResponse:
    body = ApiErrorResponse.from_error(error).model_dump(mode="json", by_alias=True)
    return JSONResponse(status_code=error.status_code, content=jsonable_encoder(body))


def _field_errors(errors) -> list:
    return [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in errors
    ]


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="VideoHub",
        description="Слой доступа к данным видеоплатформы: видео, комментарии, твиты, лайки, плейлисты",
        version="1.0.0"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, status_code=exc.status_code, error=exc.message)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(ValidationError("Invalid request", errors=_field_errors(exc.errors())))

    @app.exception_handler(PydanticValidationError)
    async def schema_validation_handler(request: Request, exc: PydanticValidationError):
        return _error_response(ValidationError("Invalid request", errors=_field_errors(exc.errors())))

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("store_error", path=request.url.path, error=str(exc))
        return _error_response(DependencyError("The data store is unavailable"))

    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Корневой эндпоинт"""
        return {
            "message": "VideoHub API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/api/v1/health"
        }

    return app


app = create_app()
