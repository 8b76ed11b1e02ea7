from fastapi import FastAPI

from docintake.api.exception_handlers import install_exception_handlers
from docintake.api.routes import router as documents_router
from docintake.processor.processor import Processor


def create_app(processor: Processor) -> FastAPI:
    """Build the HTTP application around an already wired Processor."""
    app = FastAPI(
        title="docintake",
        description="Document upload, parsing and AI extraction with status polling.",
        version="0.1.0",
    )
    app.state.processor = processor
    install_exception_handlers(app)
    app.include_router(documents_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
