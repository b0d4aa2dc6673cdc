import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .catalog import WordCatalog, load_catalog
from .config import settings
from .database import init_db
from .errors import CatalogEmpty, ConfigurationMissing, InvalidTransition, QuizError
from .log_handler import SQLiteHandler
from .router import router
from .sessions import SessionStore

ERROR_STATUS = {
    InvalidTransition: 409,
    ConfigurationMissing: 422,
    CatalogEmpty: 503,
}


# --- Logging Setup ---
def setup_logging():
    logger = logging.getLogger("vocabquiz")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return

    if not os.path.exists(settings.LOG_DIR):
        os.makedirs(settings.LOG_DIR, exist_ok=True)
    log_path = os.path.join(settings.LOG_DIR, settings.LOG_FILE)
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    file_handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if settings.LOG_TO_DB:
        init_db()
        db_handler = SQLiteHandler()
        db_handler.setFormatter(formatter)
        logger.addHandler(db_handler)
    # Also configure root logger to see logs from other libraries
    logging.basicConfig(level=logging.INFO)


# --- Error Handling ---
async def quiz_error_handler(request: Request, exc: QuizError):
    status_code = next(
        (code for error_cls, code in ERROR_STATUS.items() if isinstance(exc, error_cls)),
        400,
    )
    logging.getLogger(__name__).warning(f"{request.url.path}: {exc}")
    return JSONResponse({"error": str(exc)}, status_code=status_code)


# --- Lifecycle ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.catalog is None:
        app.state.catalog = load_catalog(settings.CATALOG_FILE)
    yield


# --- App Factory ---
def create_app(
    catalog: Optional[WordCatalog] = None, sessions: Optional[SessionStore] = None
) -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
        root_path=settings.ROOT_PATH,
    )
    app.state.catalog = catalog
    app.state.sessions = sessions if sessions is not None else SessionStore()

    app.add_exception_handler(QuizError, quiz_error_handler)
    app.include_router(router)

    return app
