import sys
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException

from .config import ConfigError, Settings, configure_logging, load_settings
from .database import DatabaseInitError, init_db, make_session_factory
from .interpreters.base import InterpreterError, QueryInterpreter
from .interpreters.keyword import KeywordInterpreter
from .repository import RepositoryError
from .routes import tasks, query

logger = logging.getLogger(__name__)


def build_interpreter(settings: Settings) -> QueryInterpreter:
    if settings.query_model_url:
        from .interpreters.remote import RemoteModelInterpreter
        return RemoteModelInterpreter(settings.query_model_url, timeout=settings.query_model_timeout)
    return KeywordInterpreter()


def create_app(
    session_factory: sessionmaker,
    interpreter: Optional[QueryInterpreter] = None,
    allowed_origins: Optional[list] = None,
) -> FastAPI:
    app = FastAPI(title="Task API")
    app.state.session_factory = session_factory
    app.state.interpreter = interpreter or KeywordInterpreter()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": jsonable_encoder(exc.errors())})

    @app.exception_handler(RepositoryError)
    async def repository_error(request: Request, exc: RepositoryError):
        return JSONResponse(status_code=500, content={"error": "Database error"})

    @app.exception_handler(InterpreterError)
    async def interpreter_error(request: Request, exc: InterpreterError):
        logger.warning("Query interpretation failed: %s", exc)
        return JSONResponse(status_code=502, content={"error": str(exc)})

    app.include_router(tasks.router)
    app.include_router(query.router)

    @app.get("/ping")
    def ping():
        return {"message": "pong"}

    return app


def main() -> None:
    configure_logging()
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        engine = init_db(settings.database_url)
    except (ConfigError, DatabaseInitError) as e:
        logger.error("Startup failed: %s", e)
        sys.exit(1)

    app = create_app(
        make_session_factory(engine),
        interpreter=build_interpreter(settings),
        allowed_origins=settings.allowed_origins,
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
