import logging

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from querytpl.api.main import api_router
from querytpl.core.config import settings
from querytpl.engines.sql import QueryTemplateError

_logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(dsn=str(settings.SENTRY_DSN), enable_tracing=True)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    generate_unique_id_function=custom_generate_unique_id,
)


@app.exception_handler(QueryTemplateError)
async def query_template_exception_handler(
    request: Request, exc: QueryTemplateError
) -> JSONResponse:
    """Compile failures are caller errors: 400 with the error kind."""
    _logger.info("Template compile failed on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content={"detail": {"error": exc.kind, "message": str(exc)}},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with one readable detail string."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", []) if part != "body")
        msg = err.get("msg", "Invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return JSONResponse(status_code=422, content={"detail": "; ".join(messages)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    route = request.scope.get("route")
    _logger.exception(
        "Unhandled %s in %s (%s)",
        type(exc).__name__,
        getattr(route, "name", "unknown route"),
        request.url.path,
    )
    detail = "Internal server error"
    if settings.ENVIRONMENT == "local":
        detail = f"Internal server error: {exc}"
    return JSONResponse(status_code=500, content={"detail": detail})


app.include_router(api_router, prefix=settings.API_V1_STR)
