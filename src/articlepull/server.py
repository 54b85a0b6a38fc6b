"""FastAPI service exposing article extraction over HTTP."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from . import __version__
from .core.extractor import ArticleExtractor
from .errors import ExtractionError, InternalError, InvalidParameter, MissingParameter
from .http.client import ScrapeClient
from .http.protocols import HtmlProvider
from .models.config import ExtractionConfig, ServiceConfig
from .models.document import OutputFormat

logger = logging.getLogger(__name__)

_FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})

router = APIRouter(prefix="/api", tags=["extract"])


def parse_flag(value: Optional[str]) -> bool:
    """Interpret a query flag; absent, empty and false-like values are off."""
    return value is not None and value.strip().lower() not in _FALSE_VALUES


def resolve_format(format_name: Optional[str], markdown: Optional[str]) -> OutputFormat:
    """
    Pick the output format from the ``format`` and legacy ``markdown`` params.

    Raises:
        InvalidParameter: If ``format`` names no known representation
    """
    if format_name:
        try:
            return OutputFormat(format_name.strip().lower())
        except ValueError:
            raise InvalidParameter(
                f"Unknown format: {format_name}",
                details={"available_formats": [f.value for f in OutputFormat]},
            ) from None
    if parse_flag(markdown):
        return OutputFormat.MARKDOWN
    return OutputFormat.JSON


async def _handle_extract(
    request: Request,
    url: Optional[str],
    format_name: Optional[str],
    debug: Optional[str],
    selector: Optional[str],
    markdown: Optional[str],
) -> Response:
    if not url or not url.strip():
        raise MissingParameter("URL parameter required")

    output_format = resolve_format(format_name, markdown)
    provider: HtmlProvider = request.app.state.provider
    extractor: ArticleExtractor = request.app.state.extractor

    try:
        snapshot = await provider.fetch(url)
        body, content_type = await run_in_threadpool(
            extractor.render,
            snapshot,
            output_format,
            parse_flag(debug),
            selector or None,
        )
    except ExtractionError as e:
        if e.url is None:
            e.url = provider.resolve_url(url)
        raise
    except Exception as e:
        logger.exception(f"Unexpected failure extracting {url}")
        raise InternalError(str(e) or e.__class__.__name__, url=provider.resolve_url(url)) from e

    return Response(content=body, media_type=content_type)


@router.get("/extract")
async def extract(
    request: Request,
    url: Optional[str] = Query(None, description="Absolute or relative article address"),
    format: Optional[str] = Query(None, description="json, markdown or text"),
    debug: Optional[str] = Query(None, description="Add diagnostic fields"),
    selector: Optional[str] = Query(None, description="CSS selector override"),
    markdown: Optional[str] = Query(None, description="Legacy flag selecting Markdown"),
) -> Response:
    """Extract an article and return it in the requested representation."""
    return await _handle_extract(request, url, format, debug, selector, markdown)


@router.get("/proxy")
async def proxy(
    request: Request,
    url: Optional[str] = Query(None),
    format: Optional[str] = Query(None),
    debug: Optional[str] = Query(None),
    selector: Optional[str] = Query(None),
    markdown: Optional[str] = Query(None),
) -> Response:
    """Legacy alias of /api/extract."""
    return await _handle_extract(request, url, format, debug, selector, markdown)


@router.options("/extract")
@router.options("/proxy")
async def preflight() -> Response:
    """Answer bare OPTIONS requests with an empty 200."""
    return Response(status_code=200)


@router.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "service": "articlepull", "version": __version__}


async def extraction_error_handler(request: Request, exc: ExtractionError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.code} for {exc.url}: {exc.message}")
    else:
        logger.info(f"{exc.code} for {exc.url}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app(
    config: Optional[ServiceConfig] = None,
    provider: Optional[HtmlProvider] = None,
    extraction_config: Optional[ExtractionConfig] = None,
) -> FastAPI:
    """
    Build the service application.

    Args:
        config: Service configuration (read from the environment if None)
        provider: Upstream HTML provider (a ScrapeClient opened for the
            lifetime of the app if None)
        extraction_config: Pipeline tunables

    Returns:
        Configured FastAPI application
    """
    config = config or ServiceConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.provider is not None:
            yield
            return
        async with ScrapeClient(config) as client:
            app.state.provider = client
            logger.info(f"Upstream base {config.base_url} via {config.scrape_endpoint or 'direct fetch'}")
            yield
        app.state.provider = None

    app = FastAPI(
        title="articlepull",
        description="Help-center article extraction service",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.provider = provider
    app.state.extractor = ArticleExtractor(extraction_config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(ExtractionError, extraction_error_handler)
    app.include_router(router)
    return app


def serve(config: Optional[ServiceConfig] = None) -> None:
    """Run the service with uvicorn until interrupted."""
    config = config or ServiceConfig.from_env()
    logger.info(f"Starting articlepull on {config.host}:{config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())
