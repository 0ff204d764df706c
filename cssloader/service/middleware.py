"""Starlette middleware that runs the CSS pipeline around each request."""

from __future__ import annotations

import asyncio
from typing import Callable, Iterable, Optional, Sequence

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from ..config import LoaderConfig
from ..context import RuntimeContextDetector
from ..logging import get_logger
from ..orchestrator import CssLoaderOrchestrator

# Upstream host middleware may place subsystem flags here, e.g. {"staff_panel"}.
FLAGS_SCOPE_KEY = "css_loader.flags"

OrchestratorFactory = Callable[[Request], CssLoaderOrchestrator]

logger = get_logger("service")


def request_orchestrator_factory(config: LoaderConfig) -> OrchestratorFactory:
    """Return a factory building a fresh orchestrator for every request."""

    def _factory(request: Request) -> CssLoaderOrchestrator:
        flags: Optional[Iterable[str]] = request.scope.get(FLAGS_SCOPE_KEY)
        detector = RuntimeContextDetector.from_config(
            config.detection, flags, request.url.path
        )
        return CssLoaderOrchestrator.from_config(config, detector)

    return _factory


class CssInjectionMiddleware(BaseHTTPMiddleware):
    """Prepares stylesheets before the handler runs and injects them into HTML."""

    def __init__(
        self,
        app: ASGIApp,
        orchestrator_factory: OrchestratorFactory,
        exclude_prefixes: Sequence[str] = (),
    ) -> None:
        super().__init__(app)
        self._factory = orchestrator_factory
        self._exclude_prefixes = tuple(prefix for prefix in exclude_prefixes if prefix)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith(self._exclude_prefixes):
            return await call_next(request)

        orchestrator = self._factory(request)
        try:
            await run_blocking(orchestrator.prepare)
        except Exception:  # pragma: no cover - defensive guard
            logger.exception("CSS preparation failed for %s", request.url.path)
            orchestrator.clear()

        response = await call_next(request)
        if not orchestrator.is_prepared or not _is_injectable(response):
            return response

        body = b""
        async for chunk in response.body_iterator:  # type: ignore[attr-defined]
            body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")

        charset = _charset(response.headers.get("content-type", ""))
        try:
            text = body.decode(charset)
        except (LookupError, UnicodeDecodeError):
            logger.debug("Skipping injection for undecodable body at %s", request.url.path)
            return _rebuild(response, body)

        return _rebuild(response, orchestrator.inject_into_buffer(text).encode(charset))


async def run_blocking(func: Callable[[], None]) -> None:
    """Run filesystem-bound pipeline work off the event loop."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        func()
    else:
        await loop.run_in_executor(None, func)


def _is_injectable(response: Response) -> bool:
    content_type = response.headers.get("content-type", "")
    if not content_type.lower().startswith("text/html"):
        return False
    # Compressed bodies cannot be spliced.
    return "content-encoding" not in response.headers


def _charset(content_type: str) -> str:
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip('"')
    return "utf-8"


def _rebuild(original: Response, body: bytes) -> Response:
    response = Response(
        content=body,
        status_code=original.status_code,
        background=original.background,
    )
    response.raw_headers = [
        (key, value) for key, value in original.raw_headers if key.lower() != b"content-length"
    ]
    response.headers["content-length"] = str(len(body))
    return response


__all__ = [
    "CssInjectionMiddleware",
    "FLAGS_SCOPE_KEY",
    "OrchestratorFactory",
    "request_orchestrator_factory",
    "run_blocking",
]
