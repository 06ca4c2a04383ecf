"""Global error handlers producing RFC 7807 problem documents."""
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.utils.file_validation import FileValidationError

logger = structlog.get_logger()


class AppException(Exception):
    def __init__(self, status_code: int, detail: str, error_type: str = "about:blank"):
        self.status_code = status_code
        self.detail = detail
        self.error_type = error_type


def _problem(status: int, title: str, detail: str, error_type: str = "about:blank") -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"type": error_type, "title": title, "status": status, "detail": detail},
        media_type="application/problem+json",
    )


def setup_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
        return _problem(exc.status_code, "Error", exc.detail, exc.error_type)

    @app.exception_handler(FileValidationError)
    async def file_validation_handler(_request: Request, exc: FileValidationError) -> JSONResponse:
        return _problem(400, "Invalid File", str(exc), "/errors/invalid-file")

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        logger.info("bad_request", path=request.url.path, error=str(exc))
        return _problem(400, "Bad Request", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=True)
        return _problem(500, "Internal Server Error", "An unexpected error occurred.")
