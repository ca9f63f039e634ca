import logging
import os

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..errors import AccessDenied, NotFound, WorkflowException
from ..workflow import SubmissionRejected
from .routes import dashboard, forms, health, submissions, validate

logger = logging.getLogger(__name__)


def create_app(config_obj=None) -> FastAPI:
    from ..config import Config
    from ..db import close_db, create_tables, init_db
    from ..generator import SchemaGenerator
    from ..report import ReportGenerator

    if config_obj is None:
        config_file = os.environ.get("CONFIG_FILE", "config.toml")
        config_obj = Config.load(config_file)

    app = FastAPI(title="FieldForm API")

    app.state.config = config_obj
    app.state.generator = SchemaGenerator(config_obj.ai)
    app.state.report_generator = ReportGenerator(config_obj.ai)

    init_db(config_obj.database_path)
    create_tables()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config_obj.web.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router)

    api_router = APIRouter(prefix="/api/v1")
    api_router.include_router(validate.router)
    api_router.include_router(forms.router)
    api_router.include_router(submissions.router)
    api_router.include_router(dashboard.router)
    app.include_router(api_router)

    if not config_obj.ai.enabled:
        logger.warning("No AI API key detected - schema generation and reports use fallbacks")

    @app.on_event("shutdown")
    def shutdown_db():
        close_db()

    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(SubmissionRejected)
    def submission_rejected(request: Request, exc: SubmissionRejected):
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "validation_errors": exc.errors},
        )

    @app.exception_handler(WorkflowException)
    def workflow_error(request: Request, exc: WorkflowException):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(AccessDenied)
    def access_denied(request: Request, exc: AccessDenied):
        logger.info(f"Access denied on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(NotFound)
    def not_found(request: Request, exc: NotFound):
        return JSONResponse(status_code=404, content={"detail": str(exc)})
