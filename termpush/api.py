"""HTTP API for pushing and exporting project translations."""

from functools import lru_cache
from typing import Annotated, Any, Optional
import uuid

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from structlog import contextvars

from .auth import Authorizer, CatalogAuthorizer, ProjectAction, caller_for_token
from .collector import TermCollector
from .config import settings
from .errors import AuthzError, PushError, ValidationError
from .exporters import ExporterRegistry
from .logging import get_logger, setup_logging
from .push import PushOrchestrator
from .sink import StorageSink, build_sink
from .store import CatalogStore, TermStore

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache(maxsize=1)
def get_store() -> TermStore:
    return CatalogStore.load(settings.CATALOG_PATH)


@lru_cache(maxsize=1)
def get_sink() -> Optional[StorageSink]:
    return build_sink(settings)


StoreDep = Annotated[TermStore, Depends(get_store)]
SinkDep = Annotated[Optional[StorageSink], Depends(get_sink)]


def get_authorizer(store: StoreDep) -> Authorizer:
    return CatalogAuthorizer(store)


def get_caller(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> str:
    """Resolve the bearer token of the request to a caller identity."""
    token = credentials.credentials if credentials else None
    return caller_for_token(token, settings.API_TOKENS)


AuthorizerDep = Annotated[Authorizer, Depends(get_authorizer)]
CallerDep = Annotated[str, Depends(get_caller)]

LocaleQuery = Annotated[Optional[str], Query(description="Locale code, or 'all'")]
FormatQuery = Annotated[Optional[str], Query(description="Export format id")]
FallbackQuery = Annotated[
    Optional[str],
    Query(alias="fallbackLocale", description="Locale filling untranslated terms"),
]

router = APIRouter(prefix="/projects/{project_id}", tags=["push"])


@router.get("/push")
def push_translations(
    project_id: str,
    store: StoreDep,
    sink: SinkDep,
    authorizer: AuthorizerDep,
    caller: CallerDep,
    locale: LocaleQuery = None,
    format: FormatQuery = None,
    untranslated: bool = False,
    fallback_locale: FallbackQuery = None,
) -> Any:
    """Push translated terms for one or all of a project's locales.

    Each locale yields one entry in the result list; locales that fail are
    reported with their error instead of aborting the push.
    """
    authorizer.authorize(caller, project_id, ProjectAction.EXPORT_TRANSLATION)
    if not locale:
        raise ValidationError("locale is a required param", field="locale")

    orchestrator = PushOrchestrator(
        TermCollector(store),
        sink=sink,
        max_workers=settings.PUSH_MAX_WORKERS,
    )
    summary = orchestrator.push(
        project_id,
        format,
        locale=locale,
        untranslated=untranslated,
        fallback_locale=fallback_locale,
    )
    return summary.to_dict()


@router.get("/exports")
def export_translations(
    project_id: str,
    store: StoreDep,
    authorizer: AuthorizerDep,
    caller: CallerDep,
    locale: LocaleQuery = None,
    format: FormatQuery = None,
    untranslated: bool = False,
    fallback_locale: FallbackQuery = None,
) -> Response:
    """Download one locale's translations as a file."""
    authorizer.authorize(caller, project_id, ProjectAction.EXPORT_TRANSLATION)
    if not locale:
        raise ValidationError("locale is a required param", field="locale")
    exporter = ExporterRegistry.get(format)

    document = TermCollector(store).collect(
        project_id,
        locale,
        untranslated=untranslated,
        fallback_locale=fallback_locale,
    )
    filename = f"{document.iso}.{exporter.file_extension}"
    return Response(
        content=exporter.export_bytes(document),
        media_type=exporter.content_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


formats_router = APIRouter(tags=["formats"])


@formats_router.get("/formats")
def list_formats() -> Any:
    return {"formats": ExporterRegistry.list_formats()}


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
    )
    app.include_router(router, prefix=settings.API_V1_STR)
    app.include_router(formats_router, prefix=settings.API_V1_STR)

    @app.exception_handler(PushError)
    async def push_error_handler(request: Request, exc: PushError) -> JSONResponse:
        """Convert PushError subclasses to JSON error responses."""
        logger.warning(
            "push_error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=str(request.url.path),
        )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthzError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=headers,
        )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add unique request ID to each request for tracing."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        contextvars.clear_contextvars()
        contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    return app


app = create_app()
