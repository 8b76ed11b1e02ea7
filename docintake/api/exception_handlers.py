from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from docintake.database.exceptions import DocumentNotFoundError
from docintake.logging.logger import Log
from docintake.processor.exceptions import (
    InvalidDocumentCategoryError,
    OversizedUploadError,
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = str(first.get("loc", ("",))[-1])
    if field == "file":
        return "No file provided"
    return f"Invalid {field}: {first.get('msg', 'invalid value')}"


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        Log.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
        return _error(exc.status_code, str(exc.detail or "HTTP error"))

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        Log.warning(f"{request.method} {request.url.path} -> 400: {message}")
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(DocumentNotFoundError)
    async def not_found_handler(request: Request, exc: DocumentNotFoundError) -> JSONResponse:
        # Missing and not-owned documents look the same to the caller.
        Log.warning(f"{request.method} {request.url.path} -> 404: {exc}")
        return _error(status.HTTP_404_NOT_FOUND, "Document not found")

    @app.exception_handler(OversizedUploadError)
    async def oversized_handler(request: Request, exc: OversizedUploadError) -> JSONResponse:
        Log.warning(f"{request.method} {request.url.path} -> 413: {exc}")
        return _error(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, str(exc))

    @app.exception_handler(InvalidDocumentCategoryError)
    async def category_handler(
        request: Request, exc: InvalidDocumentCategoryError
    ) -> JSONResponse:
        Log.warning(f"{request.method} {request.url.path} -> 400: {exc}")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid document type")

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        Log.exception(f"{request.method} {request.url.path} failed: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
