import argparse
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings
from .database import init_database
from .env import load_env
from .errors import BadRequestError, JoblyError
from .logger import get_logger
from .routes import companies_router, jobs_router
from .schema import validation_messages


def error_response(request: Request, exc: JoblyError) -> JSONResponse:
    logger = get_logger()
    logger.record_error(type(exc).__name__)
    logger.warning(
        "Request failed",
        method=request.method,
        path=request.url.path,
        status=exc.status,
        error=exc.message,
    )
    return JSONResponse(
        status_code=exc.status,
        content={"error": {"message": exc.message, "status": exc.status}},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API. Settings default to the environment."""
    settings = settings or Settings.from_env()
    get_logger().configure(
        level=settings.log_level,
        log_dir=settings.log_dir,
        enable_file=settings.log_dir is not None,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        get_logger().info("Jobly API starting", version=__version__)
        yield
        get_logger().log_metrics_summary()

    app = FastAPI(title="Jobly API", version=__version__, lifespan=lifespan)
    app.state.settings = settings

    @app.middleware("http")
    async def record_request(request: Request, call_next):
        response = await call_next(request)
        route = request.scope.get("route")
        path = getattr(route, "path", None) or "<unmatched>"
        get_logger().record_request(f"{request.method} {path}")
        return response

    @app.exception_handler(JoblyError)
    async def handle_jobly_error(request: Request, exc: JoblyError):
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return error_response(request, BadRequestError(validation_messages(exc.errors())))

    app.include_router(companies_router)
    app.include_router(jobs_router)
    return app


def cmd_init_db(args: argparse.Namespace) -> None:
    settings = Settings.from_env()
    database_url = args.database_url or settings.database_url
    init_database(database_url)
    print(f"Database ready: {database_url}")


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    settings = Settings.from_env()
    init_database(settings.database_url)
    uvicorn.run(
        create_app(settings),
        host=args.host or settings.host,
        port=args.port or settings.port,
    )


def main(argv=None):
    # Load .env if present (JOBLY_DATABASE_URL, JOBLY_ADMIN_TOKEN, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="jobly", description="Jobly - companies and jobs JSON API")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    init = subparsers.add_parser("init-db", help="Create database tables")
    init.add_argument("--database-url", help="SQLAlchemy URL (default: JOBLY_DATABASE_URL)")
    init.set_defaults(func=cmd_init_db)

    srv = subparsers.add_parser("serve", help="Run the API with uvicorn")
    srv.add_argument("--host", help="Bind address (default: JOBLY_HOST or 127.0.0.1)")
    srv.add_argument("--port", type=int, help="Port (default: JOBLY_PORT or 8000)")
    srv.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
