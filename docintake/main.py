import uvicorn

from docintake.api.app import create_app
from docintake.config.settings import Settings
from docintake.database.connection import close_pool, init_pool
from docintake.logging.logger import Log
from docintake.processor.processor import build_processor


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> serve HTTP."""
    settings = Settings()
    Log.configure(settings.log_level)
    uses_postgres = settings.document_store.lower() == "postgres"
    if uses_postgres:
        init_pool(settings)

    try:
        processor = build_processor(settings)
        app = create_app(processor)
        Log.info(f"Serving docintake on {settings.api_host}:{settings.api_port}")
        uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)
    finally:
        if uses_postgres:
            close_pool()


if __name__ == "__main__":
    main()
