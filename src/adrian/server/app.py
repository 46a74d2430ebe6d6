"""
HTTP layer
==========

FastAPI application serving font files and generated ``@font-face`` CSS.
"""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response
from fastapi.responses import FileResponse, PlainTextResponse

from .. import __version__
from ..core.exceptions import FontIDNotFoundError, FontNotFoundError
from ..core.logging_config import ACCESS_LOG_TIME_FORMAT, ACCESS_LOGGER_NAME
from ..core.models import FontFormat
from ..fonts.css import css_for_request, family_css, font_css
from ..service import FontService

logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER_NAME)

CSS_MEDIA_TYPE = "text/css"
SERVED_FORMATS = {fmt.value: fmt for fmt in FontFormat if fmt is not FontFormat.UNKNOWN}

router = APIRouter()


def get_service(request: Request) -> FontService:
    return request.app.state.service


def _etag(md5: str) -> str:
    return f'"{md5}"'


def _etag_matches(if_none_match: str | None, md5: str) -> bool:
    """True if any tag in an If-None-Match header names this file."""
    if not if_none_match or not md5:
        return False
    for tag in if_none_match.split(","):
        tag = tag.strip()
        if tag == "*":
            return True
        if tag.startswith("W/"):
            tag = tag[2:]
        if tag.strip('"') == md5:
            return True
    return False


def _cached_css(request: Request, service: FontService, render: Callable[[], str]) -> Response:
    """Serve CSS through the response cache, keyed by index generation and URL."""
    key = f"{service.index.generation}:{request.url.path}?{request.url.query}"
    css = service.cache.get_or_set(key, render)
    return Response(content=css, media_type=CSS_MEDIA_TYPE)


@router.get("/health")
def health(service: FontService = Depends(get_service)) -> dict:
    """Service status and index size."""
    return {"status": "ok", "version": __version__, **service.stats()}


@router.get("/css/")
@router.get("/css", include_in_schema=False)
def css_query(
    request: Request,
    family: str | None = None,
    display: str | None = None,
    service: FontService = Depends(get_service),
) -> Response:
    """CSS for ``?family=Name:400,700|Other&display=swap``."""
    if not family:
        raise HTTPException(status_code=400, detail="Missing family parameter")
    return _cached_css(
        request, service, lambda: css_for_request(service.index, family, display)
    )


@router.get("/font/family/{name}.css")
def family_stylesheet(
    request: Request, name: str, service: FontService = Depends(get_service)
) -> Response:
    """CSS for every font whose full name starts with ``name``."""
    return _cached_css(request, service, lambda: family_css(service.index, name))


@router.get("/font/{name}.css")
def font_stylesheet(
    request: Request, name: str, service: FontService = Depends(get_service)
) -> Response:
    """CSS for the font with exactly this full name."""
    return _cached_css(request, service, lambda: font_css(service.index, name))


@router.get("/font/{font_id}.{ext}")
def font_file(
    request: Request,
    font_id: str,
    ext: str,
    service: FontService = Depends(get_service),
) -> Response:
    """Serve a font file by its unique ID."""
    fmt = SERVED_FORMATS.get(ext.lower())
    if fmt is None:
        raise FontIDNotFoundError(f"{font_id}.{ext}")

    record = service.index.find_by_id(font_id, fmt)
    if record is None or not Path(record.file_path).is_file():
        raise FontIDNotFoundError(font_id)

    headers = {"ETag": _etag(record.md5), "Content-Transfer-Encoding": "binary"}
    if _etag_matches(request.headers.get("if-none-match"), record.md5):
        return Response(status_code=304, headers=headers)

    return FileResponse(
        record.file_path,
        media_type=record.format.mime_type,
        filename=record.public_filename,
        headers=headers,
    )


async def font_not_found_handler(request: Request, exc: FontNotFoundError) -> Response:
    logger.debug(f"Not found: {request.url.path} ({exc})")
    return PlainTextResponse("Not Found", status_code=404)


def _access_line(request: Request, response: Response) -> str:
    client = request.client.host if request.client else "-"
    timestamp = datetime.now().astimezone().strftime(ACCESS_LOG_TIME_FORMAT)
    protocol = f"HTTP/{request.scope.get('http_version', '1.1')}"
    size = response.headers.get("content-length", "-")
    user_agent = request.headers.get("user-agent", "-")
    return (
        f'{client} - - [{timestamp}] "{request.method} {request.url.path} {protocol}" '
        f'{response.status_code} {size} "{user_agent}"'
    )


def create_app(service: FontService, manage_lifecycle: bool = True) -> FastAPI:
    """
    Build the application around a font service.

    Args:
        service: Font service holding the index
        manage_lifecycle: Start and stop the service with the application

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if manage_lifecycle:
            service.start()
        try:
            yield
        finally:
            if manage_lifecycle:
                service.stop()

    app = FastAPI(title="Adrian", version=__version__, lifespan=lifespan)
    app.state.service = service
    app.include_router(router)
    app.add_exception_handler(FontNotFoundError, font_not_found_handler)

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        response = await call_next(request)
        access_logger.info(_access_line(request, response))
        return response

    return app
